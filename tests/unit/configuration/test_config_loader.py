"""Tests for configuration loading."""

import os

import pytest

from msgbody._internal.configuration.loader import (
    load_config,
    load_from_env,
    merge_dicts,
    resolve_env_vars,
)
from msgbody._internal.configuration.schemas import RegistryConfig
from msgbody.core.exceptions import ConfigurationError
from msgbody.providers.base import Role


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("MSGBODY_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))

    assert config == RegistryConfig()
    assert config.discover_entry_points is True
    assert config.entry_point_group(Role.READER) == "msgbody.readers"
    assert config.entry_point_group(Role.WRITER) == "msgbody.writers"
    assert config.logging.level == "WARNING"


def test_yaml_file(tmp_path):
    path = tmp_path / "msgbody.yaml"
    path.write_text(
        "discover_entry_points: false\n"
        "reader_group: acme.readers\n"
        "logging:\n"
        "  level: debug\n"
        "  components:\n"
        "    discovery: INFO\n"
    )

    config = load_config(str(path))

    assert config.discover_entry_points is False
    assert config.reader_group == "acme.readers"
    assert config.writer_group == "msgbody.writers"
    assert config.logging.level == "DEBUG"
    assert config.logging.components == {"discovery": "INFO"}


def test_default_file_in_working_directory(tmp_path):
    (tmp_path / "msgbody.yaml").write_text("writer_group: acme.writers\n")

    assert load_config().writer_group == "acme.writers"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("reader_group: from.file\n")
    monkeypatch.setenv("MSGBODY_CONFIG", str(path))

    assert load_config().reader_group == "from.file"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "msgbody.yaml"
    path.write_text("discover_entry_points: true\nlogging:\n  level: INFO\n")
    monkeypatch.setenv("MSGBODY_DISCOVER_ENTRY_POINTS", "no")
    monkeypatch.setenv("MSGBODY_LOGGING_LEVEL", "error")

    config = load_config(str(path))

    assert config.discover_entry_points is False
    assert config.logging.level == "ERROR"


def test_env_var_substitution(tmp_path, monkeypatch):
    path = tmp_path / "msgbody.yaml"
    path.write_text("reader_group: ${GROUP_PREFIX}.readers\n")
    monkeypatch.setenv("GROUP_PREFIX", "acme")

    assert load_config(str(path)).reader_group == "acme.readers"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "msgbody.yaml"
    path.write_text("reader_group: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(str(path))


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "msgbody.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_unknown_setting_is_rejected(tmp_path):
    path = tmp_path / "msgbody.yaml"
    path.write_text("readers_group: typo\n")

    with pytest.raises(ConfigurationError, match="Failed to load configuration"):
        load_config(str(path))


def test_load_from_env(monkeypatch):
    monkeypatch.setenv("MSGBODY_WRITER_GROUP", "acme.writers")
    monkeypatch.setenv("MSGBODY_LOGGING_COMPONENTS_REGISTRY", "DEBUG")
    monkeypatch.setenv("MSGBODY_CONFIG", "ignored.yaml")

    assert load_from_env() == {
        "writer_group": "acme.writers",
        "logging": {"components": {"registry": "DEBUG"}},
    }


def test_merge_dicts_is_recursive():
    base = {"logging": {"level": "INFO", "format": "%(message)s"}, "reader_group": "a"}
    override = {"logging": {"level": "DEBUG"}}

    assert merge_dicts(base, override) == {
        "logging": {"level": "DEBUG", "format": "%(message)s"},
        "reader_group": "a",
    }
    assert base["logging"]["level"] == "INFO"


def test_resolve_env_vars_recurses(monkeypatch):
    monkeypatch.setenv("NAME", "acme")
    monkeypatch.delenv("MISSING", raising=False)

    assert resolve_env_vars({"a": ["${NAME}", {"b": "x-${MISSING}"}], "c": 1}) == {
        "a": ["acme", {"b": "x-"}],
        "c": 1,
    }
