"""Custom exceptions for checkvault."""


class CheckvaultError(Exception):
    """Base exception for all checkvault errors."""

    pass


class UnknownGroupingError(CheckvaultError):
    """A filter or grouping call named a grouping mode that does not exist."""

    def __init__(self, value: object):
        """Initialize exception with the offending value.

        Args:
            value: The unrecognized grouping mode.
        """
        self.value = value
        super().__init__(f"Unknown grouping {value!r}")


class ConfigError(CheckvaultError):
    """Configuration file could not be loaded."""

    pass


class SettingsError(CheckvaultError):
    """Settings could not be loaded or are malformed."""

    pass


class FilterNotFoundError(SettingsError):
    """Checklist filter does not exist."""

    def __init__(self, filter_name: str):
        self.filter_name = filter_name
        super().__init__(f"Checklist filter not found: {filter_name}")


class FilterExistsError(SettingsError):
    """Checklist filter with the same name already exists."""

    def __init__(self, filter_name: str):
        self.filter_name = filter_name
        super().__init__(f"Checklist filter already exists: {filter_name}")


class SourceError(CheckvaultError):
    """Base exception for document source operations."""

    pass


class SourceListError(SourceError):
    """Failed to enumerate documents from a vault."""

    def __init__(self, source_uri: str, reason: str):
        self.source_uri = source_uri
        self.reason = reason
        super().__init__(f"Failed to list documents from {source_uri}: {reason}")


class SourceFetchError(SourceError):
    """Failed to read document content."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")
