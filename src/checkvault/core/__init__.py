"""Core types, configuration and exceptions."""

from .config import ChecklistConfig, Config, VaultConfig
from .exceptions import (
    CheckvaultError,
    ConfigError,
    FilterExistsError,
    FilterNotFoundError,
    SettingsError,
    SourceError,
    SourceFetchError,
    SourceListError,
    UnknownGroupingError,
)
from .types import (
    BlockBoundary,
    Branch,
    ChecklistFilter,
    DocumentInfo,
    GroupBy,
    GroupType,
    Leaf,
    Location,
    SortDirection,
    TagMeta,
    TagOccurrence,
    TodoGroup,
    TodoItem,
)

__all__ = [
    "BlockBoundary",
    "Branch",
    "ChecklistConfig",
    "ChecklistFilter",
    "CheckvaultError",
    "ConfigError",
    "Config",
    "DocumentInfo",
    "FilterExistsError",
    "FilterNotFoundError",
    "GroupBy",
    "GroupType",
    "Leaf",
    "Location",
    "SettingsError",
    "SortDirection",
    "SourceError",
    "SourceFetchError",
    "SourceListError",
    "TagMeta",
    "TagOccurrence",
    "TodoGroup",
    "TodoItem",
    "UnknownGroupingError",
    "VaultConfig",
]
