"""Loader options and the settings value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

SettingValue = Union[
    str, int, float, bool, None, Dict[str, "SettingValue"], List["SettingValue"]
]
Settings = Dict[str, SettingValue]

# Reserved key naming more files to load after the explicit list
EXTENSION_KEY = "configExt"
DEFAULTS_SECTION = "defaults"
# Files carrying this marker are multi-file tree imports and never flat-merged
TYPE_MARKER_KEY = "_type"
TREE_MARKER = "tree"


@dataclass(frozen=True)
class ConfigOptions:
    """
    Options controlling how config files are merged.

    Attributes:
        replace: Replacement key -> value used for ``${KEY}`` substitution.
        extend: Shallow-merge mapping values on conflict instead of replacing.
        flat: Accept files without ``defaults``/environment sections.
        config_def: Opaque definition handed to the writer, filter and
            default-lookup collaborators.
    """

    replace: Dict[str, Any] = field(default_factory=dict)
    extend: bool = False
    flat: bool = False
    config_def: Any = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "ConfigOptions":
        """Build options from a plain mapping (``configDef`` or ``config_def``)."""
        options = options or {}
        config_def = options.get("config_def", options.get("configDef"))
        return cls(
            replace=dict(options.get("replace") or {}),
            extend=bool(options.get("extend", False)),
            flat=bool(options.get("flat", False)),
            config_def=config_def,
        )

    @classmethod
    def coerce(cls, options: Union["ConfigOptions", Mapping[str, Any], None]) -> "ConfigOptions":
        if isinstance(options, ConfigOptions):
            return options
        return cls.from_mapping(options)
