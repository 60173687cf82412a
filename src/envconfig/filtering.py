"""Derive the defined subset of resolved settings."""

from typing import Any, Dict, Mapping, Optional

from .defaults import get_default


def filter_settings(
    config_def: Optional[Mapping[str, Any]],
    settings: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Restrict ``settings`` to the names declared in ``config_def``.

    Declared names missing from ``settings`` fall back to their declared
    default. Without a definition every setting is kept.

    Args:
        config_def: Mapping of setting name to field spec, or ``None``.
        settings: Resolved settings.

    Returns:
        New dictionary; ``settings`` is not modified.
    """
    if not config_def:
        return dict(settings)
    return {
        name: settings[name] if name in settings else get_default(config_def, name)
        for name in config_def
    }
