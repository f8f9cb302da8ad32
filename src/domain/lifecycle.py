"""
Account lifecycle service - registration, email verification, login.

Account State Machine (Forward-Only Transitions)
================================================

States:
- UNVERIFIED: Initial state after registration (verify token issued)
- VERIFIED: Terminal state after the token is consumed

Valid Transitions:
    UNVERIFIED -> VERIFIED   (successful verification, exactly once)

Invalid Transitions (never allowed):
    VERIFIED -> any

The service holds no account state between calls. Every operation
re-reads the store, and the store's atomic primitives (insert,
mark_verified) are the authority on conflicts. Pre-checks here only
save hashing work on the common path.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from .account import Account, Unverified
from .exceptions import (
    AccountNotFound,
    AccountNotVerified,
    AlreadyVerified,
    DuplicateEmail,
    EmailTaken,
    InvalidCredentials,
    InvalidInput,
    InvalidOrUsedToken,
)
from .hashing import MAX_SECRET_BYTES, BcryptSecretHasher
from .ports import AccountStore, VerificationNotifier
from .tokens import TokenGenerator

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase. str.lower is the case folding
    used everywhere, matching PostgreSQL lower() on the unique email index.
    """
    return email.strip().lower()


@dataclass
class AccountService:
    """
    Domain service for the account lifecycle.

    Orchestrates input validation, secret hashing, token generation,
    persistence and verification delivery.
    """

    store: AccountStore
    notifier: VerificationNotifier
    hasher: BcryptSecretHasher = field(default_factory=BcryptSecretHasher)
    tokens: TokenGenerator = field(default_factory=TokenGenerator)
    min_secret_length: int = 6

    def register(self, email: str, password: str) -> str:
        """
        Register a new, unverified account and send its verification link.

        Args:
            email: User's email address (will be normalized)
            password: User's plaintext secret (will be hashed)

        Returns:
            Normalized email address

        Raises:
            InvalidInput: If email is empty or the secret violates the length policy
            EmailTaken: If an account already exists for the email
        """
        normalized_email = self._require_email(email)
        if not isinstance(password, str) or len(password) < self.min_secret_length:
            raise InvalidInput(f"Password must be at least {self.min_secret_length} characters")
        try:
            encoded_password = password.encode()
        except UnicodeEncodeError:
            raise InvalidInput("Password must be valid UTF-8") from None
        if len(encoded_password) > MAX_SECRET_BYTES:
            raise InvalidInput(f"Password must be at most {MAX_SECRET_BYTES} bytes")

        if self.store.find_by_email(normalized_email) is not None:
            raise EmailTaken(normalized_email)

        token = self.tokens.generate()
        account = Account(
            id=uuid4(),
            email=normalized_email,
            secret_hash=self.hasher.hash(password),
            created_at=datetime.now(timezone.utc),
            status=Unverified(verify_token=token),
        )

        try:
            self.store.insert(account)
        except DuplicateEmail:
            raise EmailTaken(normalized_email) from None

        logger.info("Registered account %s", account.id)
        self._notify(normalized_email, token)
        return normalized_email

    def verify(self, token: str) -> str:
        """
        Consume a verification token and mark its account VERIFIED.

        An unknown token and an already-consumed token fail identically.

        Returns:
            Email of the verified account

        Raises:
            InvalidInput: If token is empty
            InvalidOrUsedToken: If no unverified account holds the token
        """
        if not isinstance(token, str) or not token:
            raise InvalidInput("Token is required")
        try:
            token.encode()
        except UnicodeEncodeError:
            raise InvalidOrUsedToken() from None

        account = self.store.find_by_token(token)
        if account is None:
            raise InvalidOrUsedToken()

        try:
            verified = self.store.mark_verified(account.id)
        except (AccountNotFound, AlreadyVerified):
            # Lost a race against a concurrent verification of the same token
            raise InvalidOrUsedToken() from None

        logger.info("Verified account %s", verified.id)
        return verified.email

    def login(self, email: str, password: str) -> Account:
        """
        Authenticate a verified account.

        Does not issue a session; callers decide what a successful login grants.

        Returns:
            The authenticated account

        Raises:
            InvalidInput: If email or password is missing
            InvalidCredentials: If the email is unknown or the password is wrong
            AccountNotVerified: If the account has not verified its email
        """
        normalized_email = self._require_email(email)
        if not isinstance(password, str) or not password:
            raise InvalidInput("Password is required")

        account = self.store.find_by_email(normalized_email)
        if account is None:
            self.hasher.verify_dummy()
            raise InvalidCredentials()

        if not account.verified:
            raise AccountNotVerified()

        if not self.hasher.verify(password, account.secret_hash):
            raise InvalidCredentials()

        return account

    def _require_email(self, email: str) -> str:
        if not isinstance(email, str) or not email.strip():
            raise InvalidInput("Email is required")
        try:
            email.encode()
        except UnicodeEncodeError:
            raise InvalidInput("Email must be valid UTF-8") from None
        return normalize_email(email)

    def _notify(self, email: str, token: str) -> None:
        """Request delivery of the verification link; failures never undo registration."""
        try:
            self.notifier.send_verification_link(email, token)
        except Exception:
            logger.warning("Verification delivery to %s failed", email, exc_info=True)
