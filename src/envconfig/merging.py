"""
@meta
name: config_merging
type: utility
domain: config
responsibility:
  - Fold one parsed config section into accumulated settings
  - Apply replace-wins or shallow-extend semantics per key
  - Capture configExt extension references
inputs:
  - Parsed config section
  - Replacement rules and loader options
outputs:
  - Mutated settings and pending extension list
tags:
  - utility
  - config
  - merging
lifecycle:
  status: active
"""

"""Merge engine for layered configuration sections."""

from typing import Any, List, Mapping, Optional, Pattern

from .options import EXTENSION_KEY, ConfigOptions, Settings
from .shared.logging_utils import get_logger
from .substitution import substitute

logger = get_logger(__name__)


def is_plain_mapping(value: Any) -> bool:
    """True for mapping values; lists and other sequences never qualify."""
    return isinstance(value, Mapping)


def collect_extensions(value: Any, pending: List[str]) -> None:
    """Append extension references from a ``configExt`` value to ``pending``."""
    if isinstance(value, (list, tuple)):
        pending.extend(value)
    elif isinstance(value, str):
        pending.append(value)
    else:
        logger.warning(
            f"Ignoring {EXTENSION_KEY} value of type {type(value).__name__}; "
            "expected a path or a list of paths"
        )


def merge_section(
    settings: Settings,
    section: Optional[Mapping[str, Any]],
    rules: Mapping[str, Pattern],
    options: ConfigOptions,
    pending: List[str],
) -> Settings:
    """
    Merge one config section into ``settings`` in place.

    Every top-level value is run through token substitution first. The
    ``configExt`` key is never merged; its paths are appended to ``pending``.
    For other keys the new value replaces the existing one, except when
    ``options.extend`` is set and both values are mappings, in which case the
    new mapping's keys are written over the existing mapping.

    Args:
        settings: Accumulated settings, mutated in place.
        section: Parsed section to merge; ``None`` or empty is a no-op.
        rules: Replacement rules from ``build_replacement_rules``.
        options: Active loader options.
        pending: Extension paths discovered so far, appended to in place.

    Returns:
        The same ``settings`` mapping.
    """
    if not section:
        return settings
    if not isinstance(section, Mapping):
        logger.warning(f"Ignoring config section of type {type(section).__name__}; expected a mapping")
        return settings

    for key, raw_value in section.items():
        value = substitute(raw_value, rules, options.replace)
        if key == EXTENSION_KEY:
            collect_extensions(value, pending)
            continue

        existing = settings.get(key)
        if options.extend and is_plain_mapping(existing) and is_plain_mapping(value):
            existing.update(value)
        else:
            settings[key] = value

    return settings
