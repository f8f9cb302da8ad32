"""
JSON file account store adapter - Implements AccountStore protocol.

Accounts live in a single JSON array on disk. Every operation takes the
store lock, re-reads the file, and (for mutations) writes the whole array
back through a temporary file and os.replace, so readers never observe a
half-written file and no two read-modify-write cycles interleave.

The lock is per process. Deployments running several worker processes
against one file must use the Postgres store instead.
"""

import json
import logging
import os
import secrets
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID

from src.domain.account import Account, Unverified, Verified
from src.domain.exceptions import (
    AccountNotFound,
    AlreadyVerified,
    DuplicateEmail,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)


def _account_to_record(account: Account) -> dict:
    record = {
        "id": str(account.id),
        "email": account.email,
        "secret_hash": account.secret_hash,
        "verified": account.verified,
        "created_at": account.created_at.isoformat(),
        "verified_at": account.verified_at.isoformat() if account.verified_at else None,
    }
    # Consumed tokens are removed from the record, not nulled
    if account.verify_token is not None:
        record["verify_token"] = account.verify_token
    return record


def _record_to_account(record: dict) -> Account:
    if record["verified"]:
        status = Verified(verified_at=datetime.fromisoformat(record["verified_at"]))
    else:
        status = Unverified(verify_token=record["verify_token"])
    return Account(
        id=UUID(record["id"]),
        email=record["email"],
        secret_hash=record["secret_hash"],
        created_at=datetime.fromisoformat(record["created_at"]),
        status=status,
    )


class JsonFileAccountStore:
    """
    Implements AccountStore protocol over a JSON file.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize store, creating an empty account file if none exists.

        Args:
            path: Location of the JSON account file
        """
        self._path = Path(path)
        self._lock = threading.Lock()
        with self._lock:
            if not self._path.exists():
                logger.info("Creating empty account file: %s", self._path)
                self._write([])

    @property
    def path(self) -> Path:
        return self._path

    def find_by_email(self, email: str) -> Account | None:
        key = email.strip().lower()
        with self._lock:
            records = self._read()
        for record in records:
            if record["email"].lower() == key:
                return _record_to_account(record)
        return None

    def find_by_token(self, token: str) -> Account | None:
        with self._lock:
            records = self._read()
        for record in records:
            stored = record.get("verify_token")
            if stored is not None and secrets.compare_digest(stored.encode(), token.encode()):
                return _record_to_account(record)
        return None

    def insert(self, account: Account) -> None:
        """
        Append an account unless its email is already taken.

        Raises:
            DuplicateEmail: If the email is already taken
        """
        key = account.email.lower()
        with self._lock:
            records = self._read()
            if any(record["email"].lower() == key for record in records):
                raise DuplicateEmail(account.email)
            records.append(_account_to_record(account))
            self._write(records)

    def mark_verified(self, account_id: UUID) -> Account:
        """
        Transition an account to VERIFIED.

        Raises:
            AccountNotFound: If no account has this id
            AlreadyVerified: If the account is already verified
        """
        wanted = str(account_id)
        with self._lock:
            records = self._read()
            for index, record in enumerate(records):
                if record["id"] == wanted:
                    break
            else:
                raise AccountNotFound(wanted)

            account = _record_to_account(record)
            if account.verified:
                raise AlreadyVerified(wanted)

            verified = account.mark_verified(datetime.now(timezone.utc))
            records[index] = _account_to_record(verified)
            self._write(records)
        return verified

    def ping(self) -> None:
        with self._lock:
            self._read()

    def _read(self) -> list[dict]:
        try:
            with self._path.open(encoding="utf-8") as handle:
                records = json.load(handle)
        except (OSError, ValueError) as exc:
            raise StorageUnavailable(f"Account file unreadable: {self._path}") from exc
        if not isinstance(records, list):
            raise StorageUnavailable(f"Account file is not a JSON array: {self._path}")
        return records

    def _write(self, records: list[dict]) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(records, handle, indent=2)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageUnavailable(f"Account file unwritable: {self._path}") from exc
