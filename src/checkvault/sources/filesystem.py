"""Filesystem vault.

This module provides a host for the checklist pipeline backed by a directory
of markdown files: it answers document queries with glob patterns, reads
file content, and caches parsed tag occurrences per file.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from checkvault.core.config import VaultConfig
from checkvault.core.exceptions import SourceFetchError, SourceListError
from checkvault.core.types import DocumentInfo, TagOccurrence

from .glob_matcher import MultiGlobMatcher, parse_glob_patterns
from .parsing import extract_tag_occurrences, parse_frontmatter


@dataclass
class _CachedFile:
    mtime_ns: int
    tags: list[TagOccurrence] = field(default_factory=list)
    created_ts: float | None = None


class FileSystemVault:
    """Host capabilities over a local vault directory.

    Implements ``DocumentQuery``, ``ContentReader`` and
    ``TagMetadataProvider``. Document paths are vault-relative with forward
    slashes.

    Example:
        vault = FileSystemVault(VaultConfig(path=Path("~/notes").expanduser()))
        docs = await vault.query("daily/**/*.md\\n!**/archive/**")
        content = await vault.read(docs[0].path)
        tags = vault.get_tags(docs[0].path)
    """

    def __init__(self, config: VaultConfig) -> None:
        self._config = config
        self._base_path = Path(config.path).expanduser().resolve()
        self._cache: dict[str, _CachedFile] = {}

    @property
    def base_path(self) -> Path:
        """Get the resolved vault root."""
        return self._base_path

    async def query(self, expression: str) -> list[DocumentInfo]:
        """Enumerate documents matching a glob query expression.

        Args:
            expression: Newline or comma separated glob patterns; ``!``
                prefixes exclusions. Empty selects every markdown file.

        Returns:
            DocumentInfo for each matching file, in path order.

        Raises:
            SourceListError: If the vault root doesn't exist or can't be read.
        """
        if not self._base_path.is_dir():
            raise SourceListError(
                str(self._base_path),
                f"Directory does not exist: {self._base_path}",
            )

        matcher = MultiGlobMatcher(parse_glob_patterns(expression))
        documents: list[DocumentInfo] = []

        for file_path in matcher.list_matching_files(self._base_path):
            if file_path.is_symlink() and not self._config.follow_symlinks:
                logger.debug(f"Skipping symlink: {file_path}")
                continue

            try:
                stat = file_path.stat()
            except OSError as e:
                logger.warning(f"Could not stat file {file_path}: {e}")
                continue

            relative_path = file_path.relative_to(self._base_path).as_posix()
            created = getattr(stat, "st_birthtime", None) or stat.st_mtime
            cached = self._refresh_cache(relative_path, file_path, stat.st_mtime_ns)
            if cached is not None and cached.created_ts is not None:
                created = cached.created_ts

            documents.append(
                DocumentInfo(
                    path=relative_path,
                    label=file_path.stem,
                    created_ts=created,
                    modified_ts=stat.st_mtime,
                )
            )

        logger.debug(f"Query {expression!r} matched {len(documents)} documents")
        return documents

    async def read(self, path: str) -> str:
        """Read a document's text.

        Raises:
            SourceFetchError: If the file is missing or unreadable.
        """
        return self._read_text(path, self._base_path / path)

    def get_tags(self, path: str) -> list[TagOccurrence]:
        """Return cached tag occurrences, re-parsing when the file changed."""
        file_path = self._base_path / path
        try:
            mtime_ns = file_path.stat().st_mtime_ns
        except OSError:
            self._cache.pop(path, None)
            return []

        cached = self._refresh_cache(path, file_path, mtime_ns)
        return list(cached.tags) if cached else []

    def _refresh_cache(self, path: str, file_path: Path, mtime_ns: int) -> _CachedFile | None:
        cached = self._cache.get(path)
        if cached is not None and cached.mtime_ns == mtime_ns:
            return cached

        try:
            content = self._read_text(path, file_path)
        except SourceFetchError as e:
            logger.warning(str(e))
            self._cache.pop(path, None)
            return None

        frontmatter = parse_frontmatter(content)
        cached = _CachedFile(
            mtime_ns=mtime_ns,
            tags=extract_tag_occurrences(content),
            created_ts=_frontmatter_timestamp(frontmatter.data.get("created")),
        )
        self._cache[path] = cached
        return cached

    def _read_text(self, path: str, file_path: Path) -> str:
        if not file_path.is_file():
            raise SourceFetchError(path, "File not found")

        try:
            return file_path.read_text(encoding=self._config.encoding)
        except UnicodeDecodeError as e:
            raise SourceFetchError(path, f"Encoding error ({self._config.encoding}): {e}")
        except PermissionError:
            raise SourceFetchError(path, "Permission denied")
        except OSError as e:
            raise SourceFetchError(path, str(e))


def _frontmatter_timestamp(value: Any) -> float | None:
    """Convert a frontmatter ``created`` value to a POSIX timestamp."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.timestamp()
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time()).timestamp()
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value.strip()).timestamp()
        except ValueError:
            logger.debug(f"Ignoring unparseable created value: {value!r}")
    return None
