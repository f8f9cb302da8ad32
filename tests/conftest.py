"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Fast bcrypt hashing (minimum cost factor)
- A recording verification notifier
- File-backed account stores in a temporary directory
- A fully wired AccountService
"""

from pathlib import Path

import pytest

from src.adapters.repository.json_file import JsonFileAccountStore
from src.domain.hashing import BcryptSecretHasher
from src.domain.lifecycle import AccountService
from src.domain.tokens import TokenGenerator
from tests.support import RecordingNotifier


@pytest.fixture(scope="session")
def hasher() -> BcryptSecretHasher:
    """bcrypt hasher at the minimum cost factor to keep tests fast."""
    return BcryptSecretHasher(cost=4)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def accounts_path(tmp_path: Path) -> Path:
    return tmp_path / "users.json"


@pytest.fixture
def store(accounts_path: Path) -> JsonFileAccountStore:
    return JsonFileAccountStore(accounts_path)


@pytest.fixture
def service(
    store: JsonFileAccountStore,
    notifier: RecordingNotifier,
    hasher: BcryptSecretHasher,
) -> AccountService:
    """Account service over a real file store."""
    return AccountService(
        store=store,
        notifier=notifier,
        hasher=hasher,
        tokens=TokenGenerator(),
    )
