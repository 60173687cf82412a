from __future__ import annotations

from pathlib import Path
from typing import Any
import json


def load_json(path: str | Path) -> Any:
    """Load JSON from disk; a missing file is an error, not a default."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def dump_json(data: Any) -> str:
    """Render ``data`` as pretty-printed JSON with stable key order."""
    return json.dumps(data, indent=2, sort_keys=True, default=str) + "\n"
