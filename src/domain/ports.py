"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol
from uuid import UUID

from .account import Account


class AccountStore(Protocol):
    """
    Port interface for account persistence.

    Implementations own the durable representation of accounts and must
    serialize every read-modify-write against their backing medium, so two
    concurrent inserts of the same email, or two concurrent verifications
    of the same account, cannot both succeed.
    """

    def find_by_email(self, email: str) -> Account | None:
        """
        Look up an account by email, ignoring case.

        Args:
            email: Email address (any casing)

        Returns:
            Matching account or None
        """
        ...

    def find_by_token(self, token: str) -> Account | None:
        """
        Look up an unverified account by its verification token.

        Returns:
            Matching account or None (also None once the token is consumed)
        """
        ...

    def insert(self, account: Account) -> None:
        """
        Atomically insert a new account.

        Raises:
            DuplicateEmail: If an account with the same case-folded email exists
        """
        ...

    def mark_verified(self, account_id: UUID) -> Account:
        """
        Atomically transition an account to VERIFIED.

        Sets verified_at to the current time and removes the verify token.

        Returns:
            The account as stored after the transition

        Raises:
            AccountNotFound: If no account has this id
            AlreadyVerified: If the account was verified by an earlier call
        """
        ...

    def ping(self) -> None:
        """
        Check that the backing medium is reachable.

        Raises:
            StorageUnavailable: If it is not
        """
        ...


class VerificationNotifier(Protocol):
    """Port interface for verification message delivery."""

    def send_verification_link(self, to_address: str, token: str) -> None:
        """
        Deliver a verification link for token to to_address.

        Best-effort: implementations make one bounded attempt and may
        raise on failure; the caller never rolls back on delivery errors.

        Args:
            to_address: Recipient email address (normalized by domain layer)
            token: Single-use verification token
        """
        ...
