"""Store adapters - Account persistence implementations."""

from .json_file import JsonFileAccountStore
from .postgres import PostgresAccountStore, run_migrations

__all__ = ["JsonFileAccountStore", "PostgresAccountStore", "run_migrations"]
