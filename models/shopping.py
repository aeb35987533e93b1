"""
Shopping list domain models.

Pydantic models for the rows the store returns. Rows may carry columns
this screen does not use; those are kept (``extra="allow"``) so nothing is
lost when a shop is copied with updated items.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreLocation(BaseModel):
    """Store location nested under a product."""
    model_config = ConfigDict(extra="allow")

    id: int
    name: Optional[str] = None


class Product(BaseModel):
    """Product reference data nested under a list item."""
    model_config = ConfigDict(extra="allow")

    id: int
    name: str = ""
    location: Optional[StoreLocation] = None


class WeeklyShopItem(BaseModel):
    """A product and quantity on a weekly shop."""
    model_config = ConfigDict(extra="allow")

    id: int
    quantity: int = Field(default=0, ge=0)
    product: Optional[Product] = None

    @property
    def product_name(self) -> str:
        return self.product.name if self.product else ""


class WeeklyShop(BaseModel):
    """One week's shopping list with its items."""
    model_config = ConfigDict(extra="allow")

    id: int
    shop_date: datetime
    items: list[WeeklyShopItem] = Field(default_factory=list)

    def without_item(self, item_id: int) -> "WeeklyShop":
        """Copy of this shop with the item removed (unchanged if absent)."""
        return self.model_copy(update={
            "items": [item for item in self.items if item.id != item_id]
        })

    def with_quantity(self, item_id: int, quantity: int) -> "WeeklyShop":
        """
        Copy of this shop with one item's quantity replaced.

        Raises:
            ValueError: if quantity is negative
        """
        # model_copy skips validation, so the ge=0 bound is checked here
        if quantity < 0:
            raise ValueError(f"Quantity must be zero or more, got {quantity}")
        return self.model_copy(update={
            "items": [
                item.model_copy(update={"quantity": quantity}) if item.id == item_id else item
                for item in self.items
            ]
        })
