from __future__ import annotations

"""
@meta
name: config_loader
type: utility
domain: config
responsibility:
  - Validate the explicit config file list
  - Detect two-tier, flat and unrecognised file shapes
  - Load the explicit list, then the configExt extensions, in order
inputs:
  - Environment tag
  - Ordered list of config file paths
  - Loader options (replace, extend, flat, configDef)
outputs:
  - Initialized ConfigSession
tags:
  - utility
  - config
  - loading
lifecycle:
  status: active
"""

"""Load layered, environment-aware config files into a session."""

import os
from typing import Any, Mapping, Optional, Sequence, Union

from .exceptions import ConfigFileError, NoConfigFilesError
from .options import DEFAULTS_SECTION, TREE_MARKER, TYPE_MARKER_KEY, ConfigOptions
from .session import ConfigSession
from .shared.logging_utils import get_logger
from .sources import FileSource

logger = get_logger(__name__)

OptionsLike = Union[ConfigOptions, Mapping[str, Any], None]


def init(
    env: Optional[str],
    files: Sequence[str],
    options: OptionsLike = None,
    source: Optional[FileSource] = None,
) -> ConfigSession:
    """
    Create a session and load ``files`` into it.

    Files are merged in order, later files winning. Files referenced through
    ``configExt`` are loaded afterwards, in the order they were found.

    Args:
        env: Environment tag such as ``"production"``; ``None``/``""`` for none.
        files: Ordered list of config file paths (absolute paths expected).
        options: ``ConfigOptions`` or a mapping with ``replace``, ``extend``,
            ``flat`` and ``configDef``.
        source: File source to read from (default: the local filesystem).

    Returns:
        The initialized ``ConfigSession``.

    Raises:
        NoConfigFilesError: If ``files`` is not a list or tuple.
        ConfigFileError: If any file cannot be read or parsed.
    """
    return initialize(ConfigSession(source), env, files, options)


def initialize(
    session: ConfigSession,
    env: Optional[str],
    files: Sequence[str],
    options: OptionsLike = None,
) -> ConfigSession:
    """Load ``files`` into an existing ``session``, replacing its state."""
    if not isinstance(files, (list, tuple)):
        raise NoConfigFilesError("No config files specified")

    session.reset(env, ConfigOptions.coerce(options))

    for path in files:
        add_file(session, path)

    # Extensions are drained once; references found while draining are
    # queued but not followed
    extensions = list(session.pending_extensions)
    for path in extensions:
        add_file(session, path)

    logger.debug(
        f"Loaded {len(session.files())} config file(s) for env "
        f"'{env or ''}' ({len(extensions)} extension(s))"
    )
    return session


def is_two_tier(config: Mapping[str, Any], env: Optional[str]) -> bool:
    return DEFAULTS_SECTION in config or bool(env and env in config)


def is_flat(config: Mapping[str, Any], options: ConfigOptions) -> bool:
    return options.flat and config.get(TYPE_MARKER_KEY) != TREE_MARKER


def _section_name(section: Any) -> Optional[str]:
    if isinstance(section, Mapping):
        return section.get("name") or None
    return None


def _read(session: ConfigSession, path: str) -> Mapping[str, Any]:
    try:
        config = session.source.load(path)
    except Exception as e:
        logger.error(f"Error reading config file {path}: {e}")
        raise ConfigFileError(path, f"Error reading config file {path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, Mapping):
        logger.error(f"Error reading config file {path}: top level is {type(config).__name__}")
        raise ConfigFileError(
            path, f"Config file {path} must contain a mapping, got {type(config).__name__}"
        )
    return config


def _queue_relative_to(session: ConfigSession, path: str, start: int) -> None:
    """Resolve extension paths queued since ``start`` against ``path``'s directory."""
    base = os.path.dirname(str(path))
    pending = session.pending_extensions
    for index in range(start, len(pending)):
        ext = str(pending[index])
        if base and not os.path.isabs(ext):
            pending[index] = os.path.join(base, ext)


def add_file(session: ConfigSession, path: str) -> None:
    """
    Read one config file and merge it into ``session``.

    Two-tier files (with ``defaults`` or a section named after the active
    environment) merge ``defaults`` then the environment section, and are
    recorded only when an environment is active. Other files are merged
    whole when flat mode is on and they are not marked as tree imports.
    Anything else is skipped.
    """
    config = _read(session, path)
    env = session.env
    queued = len(session.pending_extensions)

    if is_two_tier(config, env):
        defaults = config.get(DEFAULTS_SECTION)
        session.merge(defaults)
        if env:
            env_section = config.get(env)
            session.merge(env_section)
            name = _section_name(env_section) or _section_name(defaults)
            session.record(str(path), name)
        logger.debug(f"Merged two-tier config file {path}")
    elif is_flat(config, session.options):
        session.merge(config)
        session.record(str(path))
        logger.debug(f"Merged flat config file {path}")
    else:
        logger.debug(f"Skipped config file {path}: no '{DEFAULTS_SECTION}' or '{env}' section")

    _queue_relative_to(session, path, queued)
