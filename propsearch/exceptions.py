"""Exception classes for the search package."""


class SearchError(Exception):
    """Base exception for search-related errors."""

    pass


class OptionsError(SearchError, ValueError):
    """Raised when search or tokenizer options are malformed."""

    def __init__(self, option: str, message: str):
        """Initialize with option name and message."""
        self.option = option
        super().__init__(f"Invalid option {option}: {message}")


class ConfigError(SearchError):
    """Raised when configuration cannot be loaded."""

    pass

