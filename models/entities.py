"""
SQLAlchemy ORM Entity Models

These models mirror the hosted database tables behind the weekly shopping
list, so the SQL store backend can serve the same rows the PostgREST
backend does. Column names match the remote schema (snake_case).

Table Relationships:
    WeeklyShop (1) ──> (*) WeeklyShopItem ──> (1) Product ──> (0..1) StoreLocation
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from config.database import Base


class StoreLocation(Base):
    """
    Where a product sits in the store (aisle, section).

    Read-only reference data for the list screen.
    """
    __tablename__ = "store_locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    aisle = Column(String(50), nullable=True)
    sort_order = Column(Integer, nullable=True)


class Product(Base):
    """A product that can be put on a shopping list."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)  # produce, dairy, pantry
    notes = Column(Text, nullable=True)
    location_id = Column(
        Integer,
        ForeignKey("store_locations.id"),
        nullable=True
    )

    location = relationship("StoreLocation")


class WeeklyShop(Base):
    """
    One week's shopping list.

    The "current" list is the most recent one dated on or after the start
    of the current week.
    """
    __tablename__ = "weekly_shops"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shop_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    items = relationship(
        "WeeklyShopItem",
        back_populates="weekly_shop",
        cascade="all, delete-orphan",
        order_by="WeeklyShopItem.id"
    )


class WeeklyShopItem(Base):
    """A product and quantity on a weekly shopping list."""
    __tablename__ = "weekly_shop_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    weekly_shop_id = Column(
        Integer,
        ForeignKey("weekly_shops.id", ondelete="CASCADE"),
        nullable=False
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id"),
        nullable=False
    )
    quantity = Column(Integer, nullable=False, default=1)

    weekly_shop = relationship("WeeklyShop", back_populates="items")
    product = relationship("Product")
