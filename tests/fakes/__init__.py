"""Test fakes for testing without a real vault.

This module provides in-memory implementations of:
- Host capabilities (document query, content reader, tag metadata, navigator)
- A manually driven scheduler for debounce tests
- Factories for items and documents

Example:
    from tests.fakes import InMemoryVault

    vault = InMemoryVault()
    vault.add("A.md", "## Todo #todo\\n- [ ] x", created_ts=100)
    service = ChecklistService(documents=vault, contents=vault, tags=vault)
"""

from .host import (
    InMemoryVault,
    ManualScheduler,
    RecordingNavigator,
    make_document,
    make_item,
)

__all__ = [
    "InMemoryVault",
    "ManualScheduler",
    "RecordingNavigator",
    "make_document",
    "make_item",
]
