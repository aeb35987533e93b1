"""
Models layer - domain models, storage entities and repositories.

The pydantic domain models are exported here; SQLAlchemy entities live in
``models.entities`` under the same names.
"""

from models.shopping import Product, StoreLocation, WeeklyShop, WeeklyShopItem
from models.outcomes import (
    CommitFailed,
    CommitResult,
    Committed,
    CreateFailed,
    CreateResult,
    Created,
    Failed,
    Found,
    LoadResult,
    NotFound,
)

__all__ = [
    "Product",
    "StoreLocation",
    "WeeklyShop",
    "WeeklyShopItem",
    "CommitFailed",
    "CommitResult",
    "Committed",
    "CreateFailed",
    "CreateResult",
    "Created",
    "Failed",
    "Found",
    "LoadResult",
    "NotFound",
]
