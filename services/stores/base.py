"""
Base class for remote store clients.

A store client runs simple relational queries (filter, order, limit,
nested expand) and writes against the hosted database. Every client
returns a StoreResponse instead of raising, so callers can tell an empty
result from a failure by the error code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

# PostgREST: "JSON object requested, multiple (or no) rows returned"
NO_ROWS_CODE = "PGRST116"

# Local codes for failures that never reached the store
TIMEOUT_CODE = "TIMEOUT"
NETWORK_CODE = "NETWORK"
SQL_CODE = "SQL"
PARSE_CODE = "PARSE"
CONFIG_CODE = "CONFIG"


@dataclass(frozen=True)
class StoreError:
    """Error reported by a store call."""
    code: str
    message: str
    details: Optional[str] = None
    hint: Optional[str] = None

    @property
    def is_no_rows(self) -> bool:
        return self.code == NO_ROWS_CODE


@dataclass
class StoreResponse:
    """Result of a store call: either data or an error."""
    data: Any = None
    error: Optional[StoreError] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Filter:
    """A column comparison, e.g. Filter("shop_date", "gte", "2024-01-07T00:00:00+00:00")."""
    column: str
    operator: str  # eq, gte, gt, lte, lt
    value: Any


@dataclass
class SelectQuery:
    """
    A read against one table.

    ``expand`` describes embedded relations as a nested mapping of
    ``"alias:table"`` keys, e.g.
    ``{"items:weekly_shop_items": {"product:products": {}}}``.
    """
    table: str
    filters: list[Filter] = field(default_factory=list)
    expand: dict = field(default_factory=dict)
    order_by: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None
    single: bool = False  # exactly one row expected; otherwise NO_ROWS_CODE


FILTER_OPERATORS = ("eq", "gt", "gte", "lt", "lte")


def split_relation(key: str) -> tuple[str, str]:
    """Split an ``"alias:table"`` expand key; a bare name is both."""
    alias, _, table = key.partition(":")
    return alias, table or alias


class RemoteStoreClient(ABC):
    """Abstract base class for store clients."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the backend name (e.g., 'PostgREST', 'SQL')."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the client has what it needs to connect."""
        pass

    def config_issues(self) -> list[str]:
        """Get list of configuration issues (empty when configured)."""
        return []

    @abstractmethod
    def select(self, query: SelectQuery) -> StoreResponse:
        """
        Run a read.

        Returns:
            StoreResponse with a list of row dicts, or a single row dict
            when ``query.single`` is set
        """
        pass

    @abstractmethod
    def insert(self, table: str, row: dict) -> StoreResponse:
        """Insert one row and return it as stored (with generated id)."""
        pass

    @abstractmethod
    def update(self, table: str, row_id: int, values: dict) -> StoreResponse:
        """Update one row by id and return it as stored."""
        pass

    @abstractmethod
    def delete(self, table: str, row_id: int) -> StoreResponse:
        """Delete one row by id."""
        pass
