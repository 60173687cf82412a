"""envconfig: layered, environment-aware configuration loading."""

from .exceptions import (
    ConfigFileError,
    ConfigLoaderError,
    NoConfigFilesError,
    NotInitializedError,
    UnsupportedFormatError,
)
from .loader import init, initialize
from .options import ConfigOptions
from .session import ConfigSession, LoadedFile
from .sources import DiskFileSource, FileSource, InMemoryFileSource

__version__ = "0.1.0"

__all__ = [
    "init",
    "initialize",
    "ConfigOptions",
    "ConfigSession",
    "LoadedFile",
    "FileSource",
    "DiskFileSource",
    "InMemoryFileSource",
    "ConfigLoaderError",
    "ConfigFileError",
    "NoConfigFilesError",
    "NotInitializedError",
    "UnsupportedFormatError",
]
