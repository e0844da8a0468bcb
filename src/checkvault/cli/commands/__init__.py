"""Command implementations for checkvault CLI."""

from .filters import handle_filters
from .show import add_show_arguments, handle_show
from .watch import handle_watch

__all__ = [
    "add_show_arguments",
    "handle_filters",
    "handle_show",
    "handle_watch",
]
