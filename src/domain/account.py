"""
Account entity - the single record type owned by the account store.

Verification status is a tagged union rather than a pair of optional
fields: an account is either Unverified (and carries its verify token) or
Verified (and carries its verification timestamp). Neither shape can hold
the other's field, so "token present iff unverified" holds by construction.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from uuid import UUID


class AccountState(str, Enum):
    """
    Account lifecycle states.

    State Transitions (forward-only):
    - UNVERIFIED -> VERIFIED (successful email verification)

    VERIFIED is terminal.
    """

    UNVERIFIED = "UNVERIFIED"
    VERIFIED = "VERIFIED"


@dataclass(frozen=True)
class Unverified:
    """Status of an account awaiting email verification."""

    verify_token: str


@dataclass(frozen=True)
class Verified:
    """Status of an account that proved control of its email."""

    verified_at: datetime


VerificationStatus = Unverified | Verified


@dataclass(frozen=True)
class Account:
    """Registered identity: normalized email, hashed secret, verification status."""

    id: UUID
    email: str
    secret_hash: str
    created_at: datetime
    status: VerificationStatus

    @property
    def state(self) -> AccountState:
        if isinstance(self.status, Verified):
            return AccountState.VERIFIED
        return AccountState.UNVERIFIED

    @property
    def verified(self) -> bool:
        return isinstance(self.status, Verified)

    @property
    def verify_token(self) -> str | None:
        if isinstance(self.status, Unverified):
            return self.status.verify_token
        return None

    @property
    def verified_at(self) -> datetime | None:
        if isinstance(self.status, Verified):
            return self.status.verified_at
        return None

    def mark_verified(self, verified_at: datetime) -> "Account":
        """
        Return a copy in the Verified state.

        Raises:
            ValueError: If the account is already verified
        """
        if self.verified:
            raise ValueError(f"Account {self.id} is already verified")
        return replace(self, status=Verified(verified_at=verified_at))
