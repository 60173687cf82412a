"""Shared pytest fixtures for all tests."""

import json
from typing import Any, Callable, Dict

import pytest
import yaml

from envconfig import InMemoryFileSource


@pytest.fixture
def write_config(tmp_path) -> Callable[[str, Any], str]:
    """Write a config object to ``tmp_path/<name>`` and return its absolute path.

    Files ending in ``.json`` are written as JSON, everything else as YAML.
    """

    def _write(name: str, config: Any) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix == ".json":
            path.write_text(json.dumps(config), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(config), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def two_tier_files() -> Dict[str, Any]:
    """Two two-tier configs used by the layering scenarios."""
    return {
        "/cfg/a.json": {"defaults": {"port": 80, "name": "A"}},
        "/cfg/b.json": {
            "defaults": {"port": 443},
            "production": {"name": "B"},
        },
    }


@pytest.fixture
def memory_source(two_tier_files) -> InMemoryFileSource:
    """In-memory file source preloaded with ``two_tier_files``."""
    return InMemoryFileSource(two_tier_files)
