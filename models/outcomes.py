"""
Outcomes of repository operations.

Loads and writes report what happened as a value instead of overloading
the store's error channel: "no current list" is ``NotFound``, not an error.
"""

from dataclasses import dataclass
from typing import Union

from models.shopping import WeeklyShop
from services.stores.base import StoreError


@dataclass(frozen=True)
class Found:
    """A current shop exists."""
    shop: WeeklyShop


@dataclass(frozen=True)
class NotFound:
    """No shop dated in the current week."""


@dataclass(frozen=True)
class Failed:
    """The store could not answer."""
    error: StoreError


LoadResult = Union[Found, NotFound, Failed]


@dataclass(frozen=True)
class Created:
    """A new shop was inserted."""
    shop: WeeklyShop


@dataclass(frozen=True)
class CreateFailed:
    error: StoreError


CreateResult = Union[Created, CreateFailed]


@dataclass(frozen=True)
class Committed:
    """An item change was persisted."""
    item_id: int


@dataclass(frozen=True)
class CommitFailed:
    item_id: int
    error: StoreError


CommitResult = Union[Committed, CommitFailed]
