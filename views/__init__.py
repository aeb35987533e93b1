"""
Views layer - UI presentation components.
"""

from views.list_view import ListView

__all__ = ["ListView"]
