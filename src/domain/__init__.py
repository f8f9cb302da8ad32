"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle rules (register, verify,
login) and defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .account import Account, AccountState, Unverified, Verified
from .exceptions import (
    AccountError,
    AccountNotFound,
    AccountNotVerified,
    AlreadyVerified,
    DuplicateEmail,
    EmailTaken,
    HashingFailure,
    InfrastructureError,
    InvalidCredentials,
    InvalidInput,
    InvalidOrUsedToken,
    StorageUnavailable,
    StoreError,
    TokenGenerationFailure,
)
from .hashing import BcryptSecretHasher
from .lifecycle import AccountService, normalize_email
from .ports import AccountStore, VerificationNotifier
from .tokens import TokenGenerator

__all__ = [
    "Account",
    "AccountError",
    "AccountNotFound",
    "AccountNotVerified",
    "AccountService",
    "AccountState",
    "AccountStore",
    "AlreadyVerified",
    "BcryptSecretHasher",
    "DuplicateEmail",
    "EmailTaken",
    "HashingFailure",
    "InfrastructureError",
    "InvalidCredentials",
    "InvalidInput",
    "InvalidOrUsedToken",
    "StorageUnavailable",
    "StoreError",
    "TokenGenerationFailure",
    "TokenGenerator",
    "Unverified",
    "Verified",
    "VerificationNotifier",
    "normalize_email",
]
