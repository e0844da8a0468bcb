"""Protocols for the host capabilities the checklist pipeline consumes.

Uses Protocol (structural subtyping) so a host - a vault on disk, an
editor integration, an in-memory fake - only has to implement the methods,
not inherit from a base class.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from checkvault.core.types import DocumentInfo, TagOccurrence, TodoGroup


@runtime_checkable
class DocumentQuery(Protocol):
    """Selects the documents that participate in a refresh pass.

    Example implementation:

        class StaticQuery:
            def __init__(self, docs: list[DocumentInfo]):
                self.docs = docs

            async def query(self, expression: str) -> list[DocumentInfo]:
                return list(self.docs)
    """

    async def query(self, expression: str) -> list[DocumentInfo]:
        """Return the documents matching a query expression.

        Args:
            expression: Host-defined selection expression (may be empty).

        Raises:
            SourceListError: If the documents cannot be enumerated.
        """
        ...


@runtime_checkable
class ContentReader(Protocol):
    """Reads raw document text."""

    async def read(self, path: str) -> str:
        """Return the raw text of a document.

        Raises:
            SourceFetchError: If the document cannot be read.
        """
        ...


@runtime_checkable
class TagMetadataProvider(Protocol):
    """Supplies cached tag occurrences for a document."""

    def get_tags(self, path: str) -> list[TagOccurrence]:
        """Return tag occurrences for ``path`` in document order.

        Returns an empty list when nothing is cached for the document.
        """
        ...


@runtime_checkable
class Navigator(Protocol):
    """Opens a document in the host."""

    def open(self, path: str, event: Any = None) -> None:
        ...


Renderer = Callable[["list[TodoGroup] | None"], None]
"""Callback handed the group tree after every committed refresh."""
