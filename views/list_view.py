"""
List View - UI for this week's shopping list.

This view handles:
- A loading spinner until the current list has been fetched
- An empty state offering to create this week's list
- The product search form (voice search is shown but not available)
- The current list, flat or grouped by aisle
"""

import streamlit as st

from controllers.list_view_controller import ListViewController
from views.components.shopping_list import VIEW_MODES, render_shopping_list


class ListView:
    """View for the weekly shopping list."""

    def __init__(self, controller: ListViewController = None):
        self.controller = controller or ListViewController()

    def render(self):
        """Main render method."""
        st.title("🛒 Shopping List")

        store = self.controller.repository.store
        if not store.is_configured():
            self._render_config_issues(store.config_issues())
            return

        if self.controller.loading:
            with st.spinner("Loading this week's list..."):
                self.controller.mount()

        if self.controller.loading:
            return

        if self.controller.current_shop is None:
            self._render_empty_state()
        else:
            self._render_search_form()
            self._render_current_list()

    def _render_config_issues(self, issues: list[str]):
        st.error("The shopping list store is not configured.")
        for issue in issues:
            st.markdown(f"- {issue}")

    def _render_empty_state(self):
        """Render the prompt shown when the week has no list."""
        with st.container(border=True):
            st.markdown("<h1 style='text-align: center'>🛒</h1>", unsafe_allow_html=True)
            st.markdown("### No Shopping List for This Week")
            st.markdown("Would you like to create a new shopping list?")

            col_create, col_refresh = st.columns(2)
            with col_create:
                st.button(
                    "Create New List",
                    type="primary",
                    use_container_width=True,
                    on_click=self.controller.create_new_list,
                )
            with col_refresh:
                st.button(
                    "Refresh",
                    use_container_width=True,
                    on_click=self.controller.reload,
                )

    def _render_search_form(self):
        """Render the product search form."""
        with st.form("product_search"):
            col_input, col_mic, col_submit = st.columns([6, 0.6, 0.6])
            with col_input:
                term = st.text_input(
                    "Search products",
                    value=self.controller.search_term,
                    placeholder="Search products...",
                    label_visibility="collapsed",
                )
            with col_mic:
                st.form_submit_button("🎤", disabled=True, help="Voice search is not available")
            with col_submit:
                submitted = st.form_submit_button("🔍", type="primary")

        if submitted:
            self.controller.set_search_term(term)
            self.controller.submit_search()

        if self.controller.applied_search:
            col_caption, col_clear = st.columns([6, 1.2])
            with col_caption:
                st.caption(f"Showing items matching \"{self.controller.applied_search}\"")
            with col_clear:
                st.button("Clear", on_click=self.controller.clear_search)

    def _render_current_list(self):
        """Render the items of the current list."""
        shop = self.controller.current_shop
        if not shop.items:
            return

        with st.container(border=True):
            col_title, col_mode = st.columns([3, 2])
            with col_title:
                st.markdown("### Current List")
            with col_mode:
                view_mode = st.radio(
                    "View",
                    options=list(VIEW_MODES.keys()),
                    format_func=VIEW_MODES.get,
                    horizontal=True,
                    key="list_view_mode",
                    label_visibility="collapsed",
                )

            items = self.controller.visible_items
            if not items:
                st.info("No items match your search.")
                return

            render_shopping_list(
                items=items,
                view_mode=view_mode,
                on_remove=self.controller.remove_item,
                on_quantity_change=self.controller.change_quantity,
            )
