"""
Shopping list component.

Renders the items of a weekly shop as rows with a quantity input and a
remove button. Edits go through the callbacks, which persist the change
and then update the view's local copy of the list.
"""

import streamlit as st
from typing import Callable

from models.shopping import WeeklyShopItem

UNSORTED_LOCATION = "Other"

VIEW_MODES = {
    "list": "List",
    "aisle": "By aisle",
}


def group_by_location(items: list[WeeklyShopItem]) -> dict[str, list[WeeklyShopItem]]:
    """
    Group items by their product's store location.

    Locations are ordered by their ``sort_order`` column when present, then
    by name; items without a location come last under "Other". Item order
    within a group is kept.
    """
    grouped: dict[str, list[WeeklyShopItem]] = {}
    order: dict[str, tuple] = {}

    for item in items:
        location = item.product.location if item.product else None
        if location is None or not location.name:
            name = UNSORTED_LOCATION
            order[name] = (1, 0, "")
        else:
            name = location.name
            sort_order = getattr(location, "sort_order", None)
            order.setdefault(name, (0, sort_order if sort_order is not None else 0, name.lower()))
        grouped.setdefault(name, []).append(item)

    return {name: grouped[name] for name in sorted(grouped, key=lambda n: order[n])}


def _on_quantity_input(
    item_id: int,
    key: str,
    previous: int,
    on_quantity_change: Callable[[int, int], bool],
):
    # Put the input back when the change could not be saved
    if on_quantity_change(item_id, int(st.session_state[key])) is False:
        st.session_state[key] = previous


def render_shopping_item_row(
    item: WeeklyShopItem,
    on_remove: Callable[[int], None],
    on_quantity_change: Callable[[int, int], bool],
):
    """
    Render one item row.

    Args:
        item: Weekly shop item
        on_remove: Called with the item id when the remove button is pressed
        on_quantity_change: Called with the item id and new quantity
    """
    product = item.product
    name = product.name if product and product.name else "Unknown"
    location = product.location.name if product and product.location else None

    col_item, col_qty, col_remove = st.columns([4, 1.5, 0.5])

    with col_item:
        st.markdown(f"**{name}**")
        if location:
            st.caption(location)

    with col_qty:
        key = f"qty_{item.id}"
        st.number_input(
            "Quantity",
            min_value=0,
            step=1,
            value=item.quantity,
            key=key,
            label_visibility="collapsed",
            on_change=_on_quantity_input,
            args=(item.id, key, item.quantity, on_quantity_change),
        )

    with col_remove:
        st.button(
            "🗑️",
            key=f"remove_{item.id}",
            help="Remove from list",
            on_click=on_remove,
            args=(item.id,),
        )


def render_shopping_list(
    items: list[WeeklyShopItem],
    view_mode: str,
    on_remove: Callable[[int], None],
    on_quantity_change: Callable[[int, int], bool],
):
    """
    Render shopping list items.

    Args:
        items: Items to show, in list order
        view_mode: "list" for a flat list, "aisle" to group by store location
        on_remove: Callback to remove an item
        on_quantity_change: Callback to change an item's quantity
    """
    if view_mode == "aisle":
        for location, location_items in group_by_location(items).items():
            st.markdown(f"#### {location}")
            for item in location_items:
                render_shopping_item_row(item, on_remove, on_quantity_change)
            st.markdown("")  # Spacing between locations
        return

    for item in items:
        render_shopping_item_row(item, on_remove, on_quantity_change)
