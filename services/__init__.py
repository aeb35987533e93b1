"""
Services layer - store access, notifications and date helpers.
"""

from services.week import start_of_week, to_wire
from services.notification_service import NotificationService
from services.stores import (
    NO_ROWS_CODE,
    RemoteStoreClient,
    StoreError,
    StoreResponse,
    PostgrestStore,
    SqlStore,
    create_store,
)

__all__ = [
    "start_of_week",
    "to_wire",
    "NotificationService",
    "NO_ROWS_CODE",
    "RemoteStoreClient",
    "StoreError",
    "StoreResponse",
    "PostgrestStore",
    "SqlStore",
    "create_store",
]
