"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.domain.hashing import BcryptSecretHasher
from src.domain.lifecycle import AccountService
from src.domain.ports import AccountStore, VerificationNotifier
from src.domain.tokens import TokenGenerator


def get_store(request: Request) -> AccountStore:
    """
    Get account store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_notifier(request: Request) -> VerificationNotifier:
    """Get verification notifier from app state."""
    return request.app.state.notifier


@lru_cache
def _hasher_for_cost(cost: int) -> BcryptSecretHasher:
    # Construction hashes a dummy secret, so build one per cost factor only.
    return BcryptSecretHasher(cost=cost)


def get_hasher(settings: Settings = Depends(get_settings)) -> BcryptSecretHasher:
    """Get bcrypt hasher configured with the settings cost factor."""
    return _hasher_for_cost(settings.bcrypt_cost)


def get_account_service(
    store: AccountStore = Depends(get_store),
    notifier: VerificationNotifier = Depends(get_notifier),
    hasher: BcryptSecretHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the store, notifier, hasher and token generator.
    """
    return AccountService(
        store=store,
        notifier=notifier,
        hasher=hasher,
        tokens=TokenGenerator(nbytes=settings.token_bytes),
        min_secret_length=settings.min_secret_length,
    )
