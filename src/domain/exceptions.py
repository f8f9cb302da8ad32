"""
Domain exceptions - Semantic error types for the account lifecycle.

Three families:
- AccountError: business-rule outcomes that are safe to surface to callers
- StoreError: internal store signals, mapped by the service before they
  reach a caller
- InfrastructureError: environment faults, reported as a generic failure
"""


class AccountError(Exception):
    """Base class for account lifecycle errors surfaced to callers."""

    pass


class InvalidInput(AccountError):
    """Caller data is missing or malformed."""

    pass


class EmailTaken(AccountError):
    """An account already exists for this (case-folded) email."""

    pass


class InvalidOrUsedToken(AccountError):
    """Token never existed or has already been consumed."""

    pass


class InvalidCredentials(AccountError):
    """Unknown email or wrong secret (deliberately indistinguishable)."""

    pass


class AccountNotVerified(AccountError):
    """Credentials belong to an account that has not verified its email."""

    pass


class StoreError(Exception):
    """Base class for account store signals."""

    pass


class DuplicateEmail(StoreError):
    """Insert lost against an existing account with the same email."""

    pass


class AccountNotFound(StoreError):
    """Account id does not exist in the store."""

    pass


class AlreadyVerified(StoreError):
    """Account was verified by an earlier call."""

    pass


class InfrastructureError(Exception):
    """Base class for faults in the runtime environment."""

    pass


class HashingFailure(InfrastructureError):
    """Secret hashing or hash verification could not run."""

    pass


class TokenGenerationFailure(InfrastructureError):
    """No cryptographically secure randomness available."""

    pass


class StorageUnavailable(InfrastructureError):
    """Backing medium is unreachable or unreadable."""

    pass
