from __future__ import annotations

"""
@meta
name: config_sources
type: utility
domain: config
responsibility:
  - Turn a config file path into a parsed object
  - Provide an in-memory source for tests and embedding
inputs:
  - Config file paths
outputs:
  - Parsed YAML/JSON objects
tags:
  - utility
  - config
  - io
lifecycle:
  status: active
"""

"""File sources used by the loader to read config files."""

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

from .shared.json_utils import load_json
from .shared.yaml_utils import load_yaml

JSON_SUFFIXES = {".json"}


class FileSource(Protocol):
    """Anything that can turn a config path into a parsed object."""

    def load(self, path: str) -> Any:
        ...


class DiskFileSource:
    """
    Read config files from the local filesystem.

    ``.json`` files are parsed with the json module; every other suffix
    (``.yaml``, ``.yml``, no suffix) is parsed as YAML.
    """

    def load(self, path: str) -> Any:
        file_path = Path(path)
        if file_path.suffix.lower() in JSON_SUFFIXES:
            return load_json(file_path)
        return load_yaml(file_path)


class InMemoryFileSource:
    """Serve pre-parsed config objects keyed by path."""

    def __init__(self, files: Optional[Mapping[str, Any]] = None):
        self._files: Dict[str, Any] = dict(files or {})

    def add(self, path: str, config: Any) -> None:
        self._files[str(path)] = config

    def load(self, path: str) -> Any:
        try:
            # Copy so merges never alias the registered object
            return copy.deepcopy(self._files[str(path)])
        except KeyError:
            raise FileNotFoundError(f"Config file not registered: {path}") from None
