"""Unit tests for TokenGenerator."""

import re
from unittest.mock import patch

import pytest

from src.domain.exceptions import TokenGenerationFailure
from src.domain.tokens import TokenGenerator


def test_default_token_is_64_hex_chars() -> None:
    token = TokenGenerator().generate()
    assert re.fullmatch(r"[0-9a-f]{64}", token)


def test_length_is_fixed() -> None:
    generator = TokenGenerator(nbytes=16)
    assert generator.length == 32
    assert all(len(generator.generate()) == 32 for _ in range(20))


def test_tokens_vary() -> None:
    generator = TokenGenerator()
    tokens = {generator.generate() for _ in range(100)}
    assert len(tokens) == 100


def test_fewer_than_128_bits_rejected() -> None:
    with pytest.raises(ValueError):
        TokenGenerator(nbytes=15)


def test_entropy_failure_wrapped() -> None:
    with patch("src.domain.tokens.secrets.token_hex", side_effect=OSError("no entropy")):
        with pytest.raises(TokenGenerationFailure):
            TokenGenerator().generate()
