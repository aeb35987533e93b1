"""
Reusable UI components.
"""

from views.components.shopping_list import (
    group_by_location,
    render_shopping_item_row,
    render_shopping_list,
)

__all__ = [
    "group_by_location",
    "render_shopping_item_row",
    "render_shopping_list",
]
