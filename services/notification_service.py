"""
Notification Service - fire-and-forget toasts for the list screen.

Errors and successes are shown as Streamlit toasts. Nothing is retried
and nothing waits on the user; every notification is also logged.
"""

import logging
from typing import Callable, Optional

import streamlit as st

logger = logging.getLogger(__name__)

ERROR_ICON = "⚠️"
SUCCESS_ICON = "✅"


class NotificationService:
    """Service for user-facing notifications."""

    def __init__(self, sink: Optional[Callable[..., object]] = None):
        # sink(message, icon=...) renders the toast; st.toast by default
        self._sink = sink or st.toast

    def error(self, message: str):
        """Show an error notification."""
        logger.warning(f"Notify error: {message}")
        self._sink(message, icon=ERROR_ICON)

    def success(self, message: str):
        """Show a success notification."""
        logger.info(f"Notify success: {message}")
        self._sink(message, icon=SUCCESS_ICON)
