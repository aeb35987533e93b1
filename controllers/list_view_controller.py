"""
List View Controller - manages the "this week's shopping list" screen.

This controller handles:
- Loading the current week's list once when the view mounts
- Creating a new list when the week has none
- Mirroring item removals and quantity changes reported by the list component
- Search text and the client-side search filter

State machine:
    loading ──> no-shop ──(create)──> has-shop
        └─────────────────────────────> has-shop
"""

import logging
from datetime import datetime
from typing import Callable, MutableMapping, Optional

import streamlit as st

from models.outcomes import CommitFailed, CreateFailed, Failed, Found, NotFound
from models.repositories import WeeklyShopRepository
from models.shopping import WeeklyShop, WeeklyShopItem
from services.notification_service import NotificationService
from services.stores import create_store
from services.week import start_of_week

logger = logging.getLogger(__name__)

STATE_KEY = "list_view"

FETCH_ERROR = "Error fetching current shop"
CREATE_ERROR = "Error creating new list"
CREATE_SUCCESS = "New shopping list created"
REMOVE_ERROR = "Error removing item"
QUANTITY_ERROR = "Error updating quantity"


class ListViewController:
    """Controller for the weekly shopping list view."""

    def __init__(
        self,
        repository: Optional[WeeklyShopRepository] = None,
        notifier: Optional[NotificationService] = None,
        state: Optional[MutableMapping] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository or WeeklyShopRepository(create_store())
        self.notifier = notifier or NotificationService()
        self._state = st.session_state if state is None else state
        self._clock = clock
        self._init_session_state()

    def _init_session_state(self):
        """Initialize session state if not already set."""
        if STATE_KEY not in self._state:
            self._state[STATE_KEY] = {
                "search_term": "",
                "applied_search": "",  # term of the last submitted search
                "current_shop": None,
                "loading": True,
                "mounted": False,
                "load_generation": 0,  # bumped per load; stale loads are dropped
            }

    @property
    def _view(self) -> dict:
        return self._state[STATE_KEY]

    # ==========================================
    # Session State
    # ==========================================

    @property
    def loading(self) -> bool:
        return self._view["loading"]

    @property
    def current_shop(self) -> Optional[WeeklyShop]:
        return self._view["current_shop"]

    @property
    def has_shop(self) -> bool:
        return not self.loading and self.current_shop is not None

    @property
    def search_term(self) -> str:
        return self._view["search_term"]

    @property
    def applied_search(self) -> str:
        return self._view["applied_search"]

    # ==========================================
    # Lifecycle
    # ==========================================

    def mount(self):
        """
        Load the current list the first time the view is shown.

        Streamlit reruns the page on every interaction; later calls do nothing.
        """
        if self._view["mounted"]:
            return
        self._view["mounted"] = True
        self.fetch_current_shop()

    def reload(self):
        """Go back to loading and fetch the current list again."""
        self._view["mounted"] = True
        self._view["loading"] = True
        self.fetch_current_shop()

    def dispose(self):
        """
        Mark the view unmounted; loads still in flight will not write state.

        Streamlit pages never tear down their view, so the pages here do not
        call this. It is for hosts that embed the controller and drop it.
        """
        self._view["mounted"] = False
        self._view["load_generation"] += 1

    # ==========================================
    # Loading
    # ==========================================

    def fetch_current_shop(self):
        """
        Load this week's list into state.

        A missing list is not an error. Any store failure is reported with
        a toast and leaves the list absent. Loading is cleared on every path.
        """
        self._view["load_generation"] += 1
        generation = self._view["load_generation"]

        result = self.repository.find_current_list(start_of_week(self._clock()))

        if generation != self._view["load_generation"]:
            logger.debug(f"Discarding stale load (generation {generation})")
            return

        if isinstance(result, Found):
            self._view["current_shop"] = result.shop
        elif isinstance(result, NotFound):
            self._view["current_shop"] = None
        elif isinstance(result, Failed):
            self._view["current_shop"] = None
            self.notifier.error(FETCH_ERROR)

        self._view["loading"] = False

    # ==========================================
    # List Creation
    # ==========================================

    def create_new_list(self) -> Optional[WeeklyShop]:
        """
        Create a list dated now when the week has none.

        Returns the new list, or None if nothing was created.
        """
        if self.loading or self.current_shop is not None:
            logger.warning("Create requested while a list is loading or present; ignored")
            return None

        result = self.repository.create_list(self._clock())

        if isinstance(result, CreateFailed):
            self.notifier.error(CREATE_ERROR)
            return None

        self._view["current_shop"] = result.shop
        self.notifier.success(CREATE_SUCCESS)
        return result.shop

    # ==========================================
    # Item Events (already committed upstream)
    # ==========================================

    def on_item_removed(self, item_id: int):
        """Drop an item from the local list; unknown ids change nothing."""
        shop = self.current_shop
        if shop is None:
            return
        self._view["current_shop"] = shop.without_item(item_id)

    def on_quantity_changed(self, item_id: int, new_quantity: int):
        """
        Replace one item's quantity locally; unknown ids change nothing.

        Raises:
            ValueError: if new_quantity is negative
        """
        shop = self.current_shop
        if shop is None:
            return
        self._view["current_shop"] = shop.with_quantity(item_id, new_quantity)

    # ==========================================
    # Item Commits
    # ==========================================

    def remove_item(self, item_id: int) -> bool:
        """Delete an item in the store, then mirror the removal."""
        result = self.repository.remove_item(item_id)
        if isinstance(result, CommitFailed):
            self.notifier.error(REMOVE_ERROR)
            return False
        self.on_item_removed(item_id)
        return True

    def change_quantity(self, item_id: int, quantity: int) -> bool:
        """
        Set an item's quantity in the store, then mirror the change.

        Raises:
            ValueError: if quantity is negative
        """
        result = self.repository.update_item_quantity(item_id, quantity)
        if isinstance(result, CommitFailed):
            self.notifier.error(QUANTITY_ERROR)
            return False
        self.on_quantity_changed(item_id, quantity)
        return True

    # ==========================================
    # Search
    # ==========================================

    def set_search_term(self, text: str):
        """Update the search box text."""
        self._view["search_term"] = text

    def submit_search(self):
        """Filter the shown items by the current search text (no store query)."""
        self._view["applied_search"] = self.search_term.strip()
        logger.debug(f"Search applied: {self.applied_search!r}")

    def clear_search(self):
        self._view["search_term"] = ""
        self._view["applied_search"] = ""

    @property
    def visible_items(self) -> list[WeeklyShopItem]:
        """Items of the current list matching the applied search."""
        shop = self.current_shop
        if shop is None:
            return []
        term = self.applied_search.lower()
        if not term:
            return list(shop.items)
        return [item for item in shop.items if term in item.product_name.lower()]
