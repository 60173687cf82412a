"""Default-value lookup against a config definition."""

from typing import Any, Mapping, Optional

DEFAULT_FIELD = "default"


def field_spec(config_def: Optional[Mapping[str, Any]], name: str) -> Optional[Mapping[str, Any]]:
    """
    Return the field spec for ``name`` as a mapping.

    A definition entry that is not a mapping is shorthand for its default
    value, so ``{"port": 80}`` reads the same as ``{"port": {"default": 80}}``.
    """
    if not config_def or name not in config_def:
        return None
    spec = config_def[name]
    if isinstance(spec, Mapping):
        return spec
    return {DEFAULT_FIELD: spec}


def get_default(config_def: Optional[Mapping[str, Any]], name: str) -> Any:
    """Return the declared default for ``name``, or ``None`` if undeclared."""
    spec = field_spec(config_def, name)
    if spec is None:
        return None
    return spec.get(DEFAULT_FIELD)
