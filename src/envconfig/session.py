from __future__ import annotations

"""
@meta
name: config_session
type: state
domain: config
responsibility:
  - Hold the environment tag, resolved settings and loaded-file records
  - Guard accessors until initialization has happened
  - Forward settings to the writer, filter and default collaborators
inputs:
  - Loader options and file source
outputs:
  - Resolved settings and loaded-file records
tags:
  - state
  - config
lifecycle:
  status: active
"""

"""Caller-owned session holding the resolved configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Pattern

from .defaults import get_default
from .exceptions import NotInitializedError
from .filtering import filter_settings
from .merging import merge_section
from .options import ConfigOptions, Settings
from .sources import DiskFileSource, FileSource
from .substitution import build_replacement_rules
from .writer import write_settings


@dataclass(frozen=True)
class LoadedFile:
    """One file that contributed to the resolved settings."""

    path: Optional[str] = None
    name: Optional[str] = None


class ConfigSession:
    """
    Resolved configuration for one initialization.

    A session is created empty; ``envconfig.loader.init`` (or
    :meth:`initialize`) fills it. Accessors raise
    :class:`NotInitializedError` until then. Re-initializing a session
    replaces everything it held.
    """

    def __init__(self, source: Optional[FileSource] = None):
        self.source: FileSource = source or DiskFileSource()
        self.options = ConfigOptions()
        self.rules: Dict[str, Pattern] = {}
        self.pending_extensions: List[str] = []
        self._env: Optional[str] = None
        self._settings: Optional[Settings] = None
        self._files: List[LoadedFile] = []

    def reset(self, env: Optional[str], options: ConfigOptions) -> None:
        """Start a fresh initialization with ``env`` and ``options``."""
        self.options = options
        self.rules = build_replacement_rules(options.replace)
        self.pending_extensions = []
        self._env = env
        self._settings = {}
        self._files = []

    def initialize(self, env: Optional[str], files: Any, options: Any = None) -> "ConfigSession":
        from .loader import initialize

        return initialize(self, env, files, options)

    @property
    def initialized(self) -> bool:
        return self._settings is not None

    def _require_initialized(self) -> None:
        if self._settings is None:
            raise NotInitializedError()

    @property
    def env(self) -> Optional[str]:
        """Environment tag used for the last initialization."""
        self._require_initialized()
        return self._env

    def get(self) -> Settings:
        """Return the resolved settings."""
        self._require_initialized()
        return self._settings

    def files(self) -> List[LoadedFile]:
        """Return the contributing files in load order."""
        self._require_initialized()
        return self._files

    def record(self, path: Optional[str], name: Optional[str] = None) -> LoadedFile:
        self._require_initialized()
        loaded = LoadedFile(path=path, name=name)
        self._files.append(loaded)
        return loaded

    def merge(self, section: Optional[Mapping[str, Any]]) -> Settings:
        """Merge one section into the settings using the session's options."""
        self._require_initialized()
        return merge_section(
            self._settings, section, self.rules, self.options, self.pending_extensions
        )

    def extend(
        self,
        config: Mapping[str, Any],
        path: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Settings:
        """
        Merge an already-parsed mapping on top of the current settings.

        The mapping is treated like a single section, and a file record with
        ``path`` and ``name`` is appended. Extension references it declares
        are queued but not loaded.
        """
        self.merge(config)
        self.record(path, name)
        return self._settings

    # Collaborators receive the opaque definition and the current settings

    def write(self, fmt: str, output: Optional[str | Path] = None) -> str:
        self._require_initialized()
        return write_settings(fmt, output, self.options.config_def, self._settings)

    def filter(self) -> Settings:
        self._require_initialized()
        return filter_settings(self.options.config_def, self._settings)

    def default(self, name: str) -> Any:
        return get_default(self.options.config_def, name)
