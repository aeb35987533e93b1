"""
Controllers layer - orchestration and session state management.
"""

from controllers.list_view_controller import ListViewController

__all__ = ["ListViewController"]
