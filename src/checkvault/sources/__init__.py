"""Host capabilities: document query, content, tag metadata, navigation."""

from .base import ContentReader, DocumentQuery, Navigator, Renderer, TagMetadataProvider
from .filesystem import FileSystemVault
from .glob_matcher import MultiGlobMatcher, parse_glob_patterns
from .navigation import SystemNavigator

__all__ = [
    "ContentReader",
    "DocumentQuery",
    "FileSystemVault",
    "MultiGlobMatcher",
    "Navigator",
    "Renderer",
    "SystemNavigator",
    "TagMetadataProvider",
    "parse_glob_patterns",
]
