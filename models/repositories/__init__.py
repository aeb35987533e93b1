"""
Repositories - Data access layer for store operations.
"""

from models.repositories.weekly_shop_repository import WeeklyShopRepository

__all__ = ["WeeklyShopRepository"]
