"""Tests for vmark.yaml loading and data files."""

import json

import pytest

from vmark.config import (
    AppConfig,
    find_app_file,
    load_app_yaml,
    load_data_file,
    parse_set_values,
)
from vmark.exceptions import ConfigError


def write_app(tmp_path, text):
    path = tmp_path / "vmark.yaml"
    path.write_text(text)
    return path


class TestAppConfig:
    def test_minimal_config(self):
        config = AppConfig(name="x")
        assert config.components == []
        assert config.root is None
        assert config.options.autoescape is True

    def test_root_defaults_to_first_component(self):
        config = AppConfig(name="x", components=[{"name": "a", "template": "<p></p>"}])
        assert config.root == "a"

    def test_unknown_root(self):
        with pytest.raises(ValueError, match="not defined"):
            AppConfig(name="x", root="b", components=[{"name": "a", "template": "<p></p>"}])

    def test_load(self, app_file):
        config = load_app_yaml(app_file)
        assert config.name == "demo"
        assert config.root == "page"
        assert config.options.strict is True
        registry = config.build_registry()
        assert registry.names() == ["badge", "page"]

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_app_yaml(tmp_path / "vmark.yaml")

    def test_load_invalid(self, tmp_path):
        path = write_app(tmp_path, "name: x\ncomponents:\n  - name: a\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_app_yaml(path)


def test_find_app_file_in_parent(tmp_path, app_file):
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_app_file(nested) == app_file


def test_find_app_file_none(tmp_path):
    assert find_app_file(tmp_path) is None


class TestDataFiles:
    def test_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"items": [1, 2], "ok": True}))
        assert load_data_file(path) == {"items": [1, 2], "ok": True}

    def test_yaml(self, tmp_path):
        path = tmp_path / "data.yml"
        path.write_text("items: [a, b]\n")
        assert load_data_file(path) == {"items": ["a", "b"]}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("")
        assert load_data_file(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="mapping"):
            load_data_file(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("x")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_data_file(path)


def test_parse_set_values():
    assert parse_set_values(["flag=true", "n=3", "name=Ada", "empty="]) == {
        "flag": True,
        "n": 3,
        "name": "Ada",
        "empty": "",
    }


def test_parse_set_values_requires_equals():
    with pytest.raises(ConfigError):
        parse_set_values(["flag"])
