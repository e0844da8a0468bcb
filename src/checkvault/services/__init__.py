"""Services: refresh pipeline, view state, scheduling and settings."""

from .refresh import ChecklistService, ChecklistView
from .scheduler import AsyncioScheduler, Debouncer, Scheduler
from .settings import NO_FILTER_AVAILABLE, ChecklistSettings, filter_from_dict

__all__ = [
    "AsyncioScheduler",
    "ChecklistService",
    "ChecklistSettings",
    "ChecklistView",
    "Debouncer",
    "NO_FILTER_AVAILABLE",
    "Scheduler",
    "filter_from_dict",
]
