"""
Weekly Shop Repository - Data access for the weekly shopping list.

This repository turns the store's query dialect into typed operations:
finding the current week's list, creating a list, and committing item
edits. Outcomes are returned as values (see models.outcomes); the
"no rows" store code becomes NotFound rather than an error.
"""

import logging
from datetime import datetime

from pydantic import ValidationError

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
from models.shopping import WeeklyShop
from services.stores.base import (
    PARSE_CODE,
    Filter,
    RemoteStoreClient,
    SelectQuery,
    StoreError,
)
from services.week import to_wire

logger = logging.getLogger(__name__)

SHOPS_TABLE = "weekly_shops"
ITEMS_TABLE = "weekly_shop_items"

# Items with their product and the product's store location
SHOP_EXPAND = {
    "items:weekly_shop_items": {
        "product:products": {
            "location:store_locations": {},
        },
    },
}


def _parse_error(e: ValidationError) -> StoreError:
    return StoreError(code=PARSE_CODE, message="Unexpected row shape from store", details=str(e))


class WeeklyShopRepository:
    """Repository for weekly shopping list operations."""

    def __init__(self, store: RemoteStoreClient):
        """Initialize with a store client."""
        self.store = store

    # ==========================================
    # Lists
    # ==========================================

    def current_list_query(self, week_start: datetime) -> SelectQuery:
        """The read that selects this week's list."""
        return SelectQuery(
            table=SHOPS_TABLE,
            filters=[Filter("shop_date", "gte", to_wire(week_start))],
            expand=SHOP_EXPAND,
            order_by="shop_date",
            descending=True,
            limit=1,
            single=True,
        )

    def find_current_list(self, week_start: datetime) -> LoadResult:
        """
        Find the most recent list dated on or after ``week_start``.

        Args:
            week_start: Start of the current week (see services.week)

        Returns:
            Found with the shop and its items, NotFound when the week has
            no list, or Failed with the store error
        """
        response = self.store.select(self.current_list_query(week_start))

        if response.error:
            if response.error.is_no_rows:
                logger.debug(f"No list since {week_start.isoformat()}")
                return NotFound()
            logger.error(f"Fetching current list failed: {response.error.code} - {response.error.message}")
            return Failed(response.error)

        try:
            shop = WeeklyShop.model_validate(response.data)
        except ValidationError as e:
            logger.error(f"Current list row did not parse: {e}")
            return Failed(_parse_error(e))

        logger.info(f"Loaded list {shop.id} with {len(shop.items)} items")
        return Found(shop)

    def create_list(self, shop_date: datetime) -> CreateResult:
        """
        Insert a new list dated ``shop_date``.

        The insert returns the bare row; a new list has no items, so the
        items are set to an empty list whatever the response holds.
        """
        response = self.store.insert(SHOPS_TABLE, {"shop_date": to_wire(shop_date)})

        if response.error:
            logger.error(f"Creating list failed: {response.error.code} - {response.error.message}")
            return CreateFailed(response.error)

        row = dict(response.data or {})
        row["items"] = []
        try:
            shop = WeeklyShop.model_validate(row)
        except ValidationError as e:
            logger.error(f"Created list row did not parse: {e}")
            return CreateFailed(_parse_error(e))

        logger.info(f"Created list {shop.id}")
        return Created(shop)

    # ==========================================
    # Item Management
    # ==========================================

    def remove_item(self, item_id: int) -> CommitResult:
        """Delete an item from its list."""
        response = self.store.delete(ITEMS_TABLE, item_id)
        if response.error:
            logger.error(f"Removing item {item_id} failed: {response.error.code} - {response.error.message}")
            return CommitFailed(item_id, response.error)
        return Committed(item_id)

    def update_item_quantity(self, item_id: int, quantity: int) -> CommitResult:
        """
        Set an item's quantity.

        Raises:
            ValueError: if quantity is negative
        """
        if quantity < 0:
            raise ValueError(f"Quantity must be zero or more, got {quantity}")

        response = self.store.update(ITEMS_TABLE, item_id, {"quantity": quantity})
        if response.error:
            logger.error(f"Updating item {item_id} failed: {response.error.code} - {response.error.message}")
            return CommitFailed(item_id, response.error)
        return Committed(item_id)

