from __future__ import annotations

"""
@meta
name: settings_writer
type: utility
domain: config
responsibility:
  - Serialize resolved settings as JSON, YAML or shell exports
  - Write the rendering to a file or stdout
inputs:
  - Resolved settings
  - Optional config definition
outputs:
  - Rendered text, optionally persisted
tags:
  - utility
  - config
  - output
lifecycle:
  status: active
"""

"""Write resolved settings in a requested format."""

import json
import re
import shlex
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .defaults import field_spec
from .exceptions import UnsupportedFormatError
from .filtering import filter_settings
from .shared.json_utils import dump_json
from .shared.logging_utils import get_logger
from .shared.yaml_utils import dump_yaml

logger = get_logger(__name__)

STDOUT_TARGET = "-"
ENV_FIELD = "env"
_ENV_NAME_INVALID = re.compile(r"[^A-Z0-9_]")


def env_var_name(config_def: Optional[Mapping[str, Any]], name: str) -> str:
    """Return the export name for a setting: the spec's ``env`` field or NAME."""
    spec = field_spec(config_def, name)
    if spec and spec.get(ENV_FIELD):
        return str(spec[ENV_FIELD])
    return _ENV_NAME_INVALID.sub("_", name.upper())


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def render_env(settings: Mapping[str, Any], config_def: Optional[Mapping[str, Any]] = None) -> str:
    """Render settings as ``export NAME='value'`` lines, one per setting."""
    lines = [
        f"export {env_var_name(config_def, name)}={shlex.quote(_env_value(value))}"
        for name, value in settings.items()
    ]
    return "\n".join(lines) + ("\n" if lines else "")


def render_json(settings: Mapping[str, Any], config_def: Optional[Mapping[str, Any]] = None) -> str:
    return dump_json(dict(settings))


def render_yaml(settings: Mapping[str, Any], config_def: Optional[Mapping[str, Any]] = None) -> str:
    return dump_yaml(dict(settings))


RENDERERS: Dict[str, Callable[..., str]] = {
    "json": render_json,
    "yaml": render_yaml,
    "env": render_env,
}


def write_settings(
    fmt: str,
    output: Optional[str | Path],
    config_def: Optional[Mapping[str, Any]],
    settings: Mapping[str, Any],
) -> str:
    """
    Render ``settings`` as ``fmt`` and write it to ``output``.

    When a definition is supplied, only the settings it declares are written
    (see :func:`filter_settings`).

    Args:
        fmt: One of ``json``, ``yaml`` or ``env``.
        output: Target file path; ``None`` or ``"-"`` writes to stdout.
        config_def: Optional config definition.
        settings: Resolved settings.

    Returns:
        The rendered text.

    Raises:
        UnsupportedFormatError: If ``fmt`` is not a known format.
    """
    renderer = RENDERERS.get(fmt)
    if renderer is None:
        raise UnsupportedFormatError(
            f"Unsupported output format '{fmt}'; expected one of {sorted(RENDERERS)}"
        )

    selected = filter_settings(config_def, settings)
    text = renderer(selected, config_def)

    if output is None or str(output) == STDOUT_TARGET:
        sys.stdout.write(text)
    else:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {len(selected)} settings as {fmt} to {path}")

    return text
