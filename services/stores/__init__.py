"""
Store clients for the shopping list database.

Currently supported backends:
- PostgREST (Supabase hosted database)
- SQL (direct SQLAlchemy connection, local development)
"""

from typing import Optional

from config.settings import Settings, get_settings
from services.stores.base import (
    NO_ROWS_CODE,
    Filter,
    RemoteStoreClient,
    SelectQuery,
    StoreError,
    StoreResponse,
)
from services.stores.postgrest import PostgrestStore
from services.stores.sql import SqlStore


def create_store(settings: Optional[Settings] = None) -> RemoteStoreClient:
    """Build the store client selected by STORE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.store_backend.lower()
    if backend == "postgrest":
        return PostgrestStore(settings)
    if backend == "sql":
        return SqlStore()
    raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend}")


__all__ = [
    "NO_ROWS_CODE",
    "Filter",
    "RemoteStoreClient",
    "SelectQuery",
    "StoreError",
    "StoreResponse",
    "PostgrestStore",
    "SqlStore",
    "create_store",
]
