"""
Secret hashing with bcrypt.

bcrypt embeds a per-call random salt and the cost factor in its output,
so two hashes of the same secret differ and verification needs nothing
but the stored record. bcrypt.checkpw compares in constant time.
"""

import bcrypt

from .exceptions import HashingFailure

# bcrypt ignores everything past 72 bytes of input.
MAX_SECRET_BYTES = 72


class BcryptSecretHasher:
    """Hash and verify plaintext secrets with bcrypt."""

    def __init__(self, cost: int = 10) -> None:
        if not 4 <= cost <= 31:
            raise ValueError(f"bcrypt cost must be between 4 and 31, got {cost}")
        self._cost = cost
        # Verified against when no account exists, so the unknown-email path
        # costs the same as a wrong password.
        self._dummy_hash = self.hash("dummy_password_for_timing_safety")

    @property
    def cost(self) -> int:
        return self._cost

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext secret.

        Raises:
            ValueError: If the secret is longer than 72 bytes or is not
                encodable as UTF-8
            HashingFailure: If bcrypt cannot run (e.g. no entropy source for the salt)
        """
        encoded = plaintext.encode()
        if len(encoded) > MAX_SECRET_BYTES:
            raise ValueError(f"Secret exceeds {MAX_SECRET_BYTES} bytes")
        try:
            salt = bcrypt.gensalt(rounds=self._cost)
            return bcrypt.hashpw(encoded, salt).decode()
        except (ValueError, OSError) as exc:
            raise HashingFailure("Secret hashing failed") from exc

    def verify(self, plaintext: str, hash_record: str) -> bool:
        """
        Check a plaintext secret against a stored hash record.

        A mismatch is a False result, never an error.

        Raises:
            HashingFailure: If hash_record is not a valid bcrypt hash
        """
        try:
            encoded = plaintext.encode()
        except UnicodeEncodeError:
            encoded = None
        if encoded is None or len(encoded) > MAX_SECRET_BYTES:
            # Nothing like this was ever hashed; still pay for one comparison.
            self.verify_dummy()
            return False
        try:
            return bcrypt.checkpw(encoded, hash_record.encode())
        except ValueError as exc:
            raise HashingFailure("Stored hash record is malformed") from exc

    def verify_dummy(self) -> None:
        """Run one comparison against a throwaway hash and discard the result."""
        bcrypt.checkpw(b"timing_parity", self._dummy_hash.encode())
