"""
API v1 package.

Contains versioned API routes for account registration, verification and login.
"""

from src.api.v1.routes import router

__all__ = ["router"]
