"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Password length policy is enforced by the domain service, not here.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    email: EmailStr
    password: str = Field(..., description="User password (min 6 characters)")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    email: str


class VerifyResponse(BaseModel):
    """Response model for successful email verification."""

    message: str
    email: str


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Response model for successful login."""

    message: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
