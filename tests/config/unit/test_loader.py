"""Unit tests for file shape detection and load sequencing."""

import logging

import pytest

from envconfig import (
    ConfigFileError,
    ConfigOptions,
    InMemoryFileSource,
    LoadedFile,
    NoConfigFilesError,
    init,
)


class TestTwoTierFiles:
    """Test defaults/environment layering."""

    def test_scenario_no_env(self, memory_source):
        """Defaults merge without env, but no file is recorded."""
        session = init("", ["/cfg/a.json", "/cfg/b.json"], source=memory_source)

        assert session.get() == {"port": 443, "name": "A"}
        assert session.files() == []

    def test_scenario_production(self, memory_source):
        """Env sections override defaults and every file is recorded."""
        session = init("production", ["/cfg/a.json", "/cfg/b.json"], source=memory_source)

        assert session.get() == {"port": 443, "name": "B"}
        assert session.files() == [
            LoadedFile(path="/cfg/a.json", name="A"),
            LoadedFile(path="/cfg/b.json", name="B"),
        ]

    def test_env_tier_overrides_defaults_in_same_file(self):
        source = InMemoryFileSource({
            "/c.yaml": {
                "defaults": {"port": 80, "debug": True},
                "production": {"port": 443},
            },
        })
        session = init("production", ["/c.yaml"], source=source)
        assert session.get() == {"port": 443, "debug": True}

    def test_other_environments_ignored(self):
        source = InMemoryFileSource({
            "/c.yaml": {
                "defaults": {"port": 80},
                "staging": {"port": 8080},
                "production": {"port": 443},
            },
        })
        assert init("staging", ["/c.yaml"], source=source).get() == {"port": 8080}

    def test_env_section_without_defaults(self):
        source = InMemoryFileSource({"/c.yaml": {"production": {"port": 443}}})
        session = init("production", ["/c.yaml"], source=source)
        assert session.get() == {"port": 443}
        assert session.files() == [LoadedFile(path="/c.yaml", name=None)]

    def test_name_falls_back_to_defaults(self):
        source = InMemoryFileSource({
            "/c.yaml": {"defaults": {"name": "base"}, "production": {"x": 1}},
        })
        session = init("production", ["/c.yaml"], source=source)
        assert session.files()[0].name == "base"

    def test_name_recorded_without_substitution(self):
        source = InMemoryFileSource({
            "/c.yaml": {"production": {"name": "${APP}-prod"}},
        })
        session = init("production", ["/c.yaml"], {"replace": {"app": "api"}}, source=source)
        assert session.files()[0].name == "${APP}-prod"

    def test_empty_sections_tolerated(self):
        source = InMemoryFileSource({"/c.yaml": {"defaults": None, "production": None}})
        session = init("production", ["/c.yaml"], source=source)
        assert session.get() == {}
        assert session.files() == [LoadedFile(path="/c.yaml", name=None)]


class TestFlatFiles:
    """Test flat-mode loading."""

    def test_flat_file_merged_and_recorded(self):
        source = InMemoryFileSource({"/flat.json": {"region": "us"}})
        session = init("production", ["/flat.json"], {"flat": True}, source=source)

        assert session.get() == {"region": "us"}
        assert session.files() == [LoadedFile(path="/flat.json")]

    def test_flat_file_recorded_without_env(self):
        source = InMemoryFileSource({"/flat.json": {"region": "us"}})
        session = init(None, ["/flat.json"], {"flat": True}, source=source)
        assert session.files() == [LoadedFile(path="/flat.json")]

    def test_flat_file_skipped_without_flat_option(self):
        source = InMemoryFileSource({"/flat.json": {"region": "us"}})
        session = init("production", ["/flat.json"], source=source)

        assert session.get() == {}
        assert session.files() == []

    def test_tree_marked_file_skipped(self):
        source = InMemoryFileSource({"/tree.json": {"_type": "tree", "region": "us"}})
        session = init("production", ["/tree.json"], {"flat": True}, source=source)

        assert session.get() == {}
        assert session.files() == []

    def test_two_tier_takes_precedence_over_flat(self):
        source = InMemoryFileSource({"/c.json": {"defaults": {"a": 1}, "b": 2}})
        session = init("", ["/c.json"], {"flat": True}, source=source)
        assert session.get() == {"a": 1}

    def test_empty_file_contributes_nothing(self):
        source = InMemoryFileSource({"/empty.yaml": None})
        session = init("production", ["/empty.yaml"], {"flat": True}, source=source)
        assert session.get() == {}


class TestLayering:
    """Test cross-file override rules."""

    def test_extend_unions_mapping_keys(self):
        source = InMemoryFileSource({
            "/a.yaml": {"defaults": {"db": {"host": "a", "port": 5432}}},
            "/b.yaml": {"defaults": {"db": {"host": "b"}}},
        })
        session = init("", ["/a.yaml", "/b.yaml"], ConfigOptions(extend=True), source=source)
        assert session.get() == {"db": {"host": "b", "port": 5432}}

    def test_without_extend_later_mapping_replaces(self):
        source = InMemoryFileSource({
            "/a.yaml": {"defaults": {"db": {"host": "a", "port": 5432}}},
            "/b.yaml": {"defaults": {"db": {"host": "b"}}},
        })
        session = init("", ["/a.yaml", "/b.yaml"], source=source)
        assert session.get() == {"db": {"host": "b"}}

    def test_substitution_applied_to_every_file(self):
        source = InMemoryFileSource({
            "/a.yaml": {"defaults": {"logs": "${HOME}/logs"}},
            "/b.yaml": {"production": {"cache": ["${HOME}/cache"]}},
        })
        session = init("production", ["/a.yaml", "/b.yaml"], {"replace": {"home": "/srv"}}, source=source)
        assert session.get() == {"logs": "/srv/logs", "cache": ["/srv/cache"]}


class TestExtensions:
    """Test configExt sequencing."""

    def test_extension_loaded_after_explicit_list(self):
        source = InMemoryFileSource({
            "/cfg/a.json": {"defaults": {"configExt": ["/cfg/extra.json"], "port": 1}},
            "/cfg/b.json": {"defaults": {"port": 2}},
            "/cfg/extra.json": {"defaults": {"port": 3, "extra": True}},
        })
        session = init("production", ["/cfg/a.json", "/cfg/b.json"], source=source)

        assert session.get() == {"port": 3, "extra": True}
        assert [f.path for f in session.files()] == [
            "/cfg/a.json",
            "/cfg/b.json",
            "/cfg/extra.json",
        ]
        assert "configExt" not in session.get()

    def test_extensions_in_discovery_order(self):
        source = InMemoryFileSource({
            "/a.yaml": {"defaults": {"configExt": ["/x.yaml", "/y.yaml"]}},
            "/b.yaml": {"production": {"configExt": "/z.yaml"}},
            "/x.yaml": {"defaults": {"v": "x"}},
            "/y.yaml": {"defaults": {"v": "y"}},
            "/z.yaml": {"defaults": {"v": "z"}},
        })
        session = init("production", ["/a.yaml", "/b.yaml"], source=source)

        assert [f.path for f in session.files()] == [
            "/a.yaml", "/b.yaml", "/x.yaml", "/y.yaml", "/z.yaml",
        ]
        assert session.get() == {"v": "z"}

    def test_extension_of_extension_not_followed(self):
        source = InMemoryFileSource({
            "/a.yaml": {"defaults": {"configExt": "/b.yaml"}},
            "/b.yaml": {"defaults": {"configExt": "/c.yaml", "b": 1}},
            "/c.yaml": {"defaults": {"c": 1}},
        })
        session = init("production", ["/a.yaml"], source=source)

        assert session.get() == {"b": 1}
        assert [f.path for f in session.files()] == ["/a.yaml", "/b.yaml"]
        assert session.pending_extensions == ["/b.yaml", "/c.yaml"]

    def test_relative_extension_resolved_against_declaring_file(self, write_config, tmp_path):
        main = write_config("conf/main.yaml", {"defaults": {"configExt": "local.yaml"}})
        write_config("conf/local.yaml", {"defaults": {"local": True}})

        session = init("dev", [main])

        assert session.get() == {"local": True}
        assert session.files()[-1].path == str(tmp_path / "conf" / "local.yaml")


class TestInitErrors:
    """Test initialization failures."""

    @pytest.mark.parametrize("files", [None, "/a.yaml", {"a": 1}])
    def test_invalid_file_list(self, files):
        source = InMemoryFileSource()
        with pytest.raises(NoConfigFilesError, match="No config files specified"):
            init("production", files, source=source)

    def test_missing_file_raises_config_file_error(self):
        source = InMemoryFileSource({"/a.yaml": {"defaults": {"a": 1}}})
        with pytest.raises(ConfigFileError) as exc_info:
            init("production", ["/a.yaml", "/missing.yaml"], source=source)

        assert exc_info.value.path == "/missing.yaml"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_missing_extension_raises(self):
        source = InMemoryFileSource({"/a.yaml": {"defaults": {"configExt": "/gone.yaml"}}})
        with pytest.raises(ConfigFileError):
            init("production", ["/a.yaml"], source=source)

    def test_non_mapping_file_raises(self):
        source = InMemoryFileSource({"/list.yaml": [1, 2, 3]})
        with pytest.raises(ConfigFileError, match="must contain a mapping"):
            init("production", ["/list.yaml"], source=source)

    def test_empty_list_is_valid(self):
        session = init("production", [], source=InMemoryFileSource())
        assert session.get() == {}
        assert session.files() == []


class TestLogging:
    """Test loader log levels."""

    def test_initialization_summary_not_logged_at_info(self, memory_source, caplog):
        caplog.set_level(logging.INFO, logger="envconfig.loader")
        init("production", ["/cfg/a.json"], source=memory_source)
        assert [r for r in caplog.records if r.name == "envconfig.loader"] == []
