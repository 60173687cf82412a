"""Custom exceptions for envconfig."""

from typing import Optional


class ConfigLoaderError(Exception):
    """Base exception for configuration loading errors."""

    pass


class NotInitializedError(ConfigLoaderError):
    """Raised when settings are accessed before initialization."""

    def __init__(self, message: str = "envconfig has not been initialized"):
        super().__init__(message)


class NoConfigFilesError(ConfigLoaderError, TypeError):
    """Raised when the config file list is missing or not a sequence."""

    pass


class ConfigFileError(ConfigLoaderError):
    """Raised when a config file cannot be read or parsed."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Error reading config file: {path}")


class UnsupportedFormatError(ConfigLoaderError, ValueError):
    """Raised when the writer is asked for an unknown output format."""

    pass
