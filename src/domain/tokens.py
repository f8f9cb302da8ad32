"""Verification token generation."""

import secrets

from .exceptions import TokenGenerationFailure

MIN_TOKEN_BYTES = 16


class TokenGenerator:
    """
    Produce verification tokens from the OS CSPRNG.

    Tokens are hex encoded, so every token is exactly 2 * nbytes
    characters long. Uniqueness is probabilistic (256 bits by default).
    """

    def __init__(self, nbytes: int = 32) -> None:
        if nbytes < MIN_TOKEN_BYTES:
            raise ValueError(f"Tokens need at least {MIN_TOKEN_BYTES} bytes of entropy, got {nbytes}")
        self._nbytes = nbytes

    @property
    def length(self) -> int:
        return self._nbytes * 2

    def generate(self) -> str:
        try:
            return secrets.token_hex(self._nbytes)
        except (OSError, NotImplementedError) as exc:
            raise TokenGenerationFailure("No secure randomness available") from exc
