from __future__ import annotations

import importlib
from pathlib import Path

import pytest


def test_load_yaml_config_none_returns_empty() -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    assert mod.load_yaml_config(None) == {}


def test_load_yaml_config_missing_file_raises(tmp_path: Path) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    with pytest.raises(FileNotFoundError):
        mod.load_yaml_config(tmp_path / "missing.yml")


def test_load_yaml_config_non_mapping_raises(write_yaml) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    path = write_yaml("bad.yml", ["politician_contributors"])
    with pytest.raises(ValueError, match="YAML mapping"):
        mod.load_yaml_config(path)


def test_load_yaml_config_reads_query_mapping(write_yaml) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    path = write_yaml(
        "query.yml",
        {"endpoint": "top_organizations", "params": {"limit": 5, "cycle": "-1"}},
    )
    assert mod.load_yaml_config(path) == {
        "endpoint": "top_organizations",
        "params": {"limit": 5, "cycle": "-1"},
    }


def test_load_yaml_config_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert mod.load_yaml_config(path) == {}


def test_deep_merge_merges_params_and_replaces_scalars() -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    base = {"api": {"key_env": "A", "timeout_s": 30.0}, "params": {"limit": 10}}
    updates = {"api": {"timeout_s": 5.0}, "params": {"cycle": "2012"}, "format": "json"}

    merged = mod.deep_merge(base, updates)

    assert merged == {
        "api": {"key_env": "A", "timeout_s": 5.0},
        "params": {"limit": 10, "cycle": "2012"},
        "format": "json",
    }
    assert base["params"] == {"limit": 10}


def test_build_config_precedence_defaults_yaml_overrides(write_yaml) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    defaults = {"endpoint": None, "api": {"key_env": "A", "base_url": "u"}, "format": "table"}
    yaml_path = write_yaml("cfg.yml", {"endpoint": "top_industries", "api": {"key_env": "B"}})
    overrides = {"api": {"base_url": "v"}, "format": "csv"}

    config = mod.build_config(defaults, yaml_path, overrides)

    assert config == {
        "endpoint": "top_industries",
        "api": {"key_env": "B", "base_url": "v"},
        "format": "csv",
    }


def test_resolve_path_expands_home_and_env(monkeypatch, tmp_path: Path) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("IE_CONFIG_DIR", str(tmp_path / "cfg"))

    assert mod.resolve_path("~/query.yml") == tmp_path / "query.yml"
    assert mod.resolve_path("$IE_CONFIG_DIR/query.yml") == tmp_path / "cfg" / "query.yml"
    assert mod.resolve_path(None) is None
    assert mod.resolve_path(tmp_path) == tmp_path


def test_parse_param_pairs() -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    assert mod.parse_param_pairs(None) == {}
    assert mod.parse_param_pairs(
        ["entity_id=Nancy Pelosi", " cycle = 2012 ", "cycle=2010", "note=a=b"]
    ) == {"entity_id": "Nancy Pelosi", "cycle": "2010", "note": "a=b"}


@pytest.mark.parametrize("item", ["cycle", "=2012"])
def test_parse_param_pairs_rejects_malformed(item: str) -> None:
    mod = importlib.import_module("influence_explorer.cli.config")
    with pytest.raises(ValueError, match="NAME=VALUE"):
        mod.parse_param_pairs([item])
