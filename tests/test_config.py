"""Configuration schema and loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from deplicenses.config import CollectConfig, load_collect_config
from deplicenses.config.schema import DEFAULT_FILENAME_KEYWORDS
from deplicenses.core.errors import ConfigError


def test_defaults() -> None:
    cfg = load_collect_config(None)

    assert cfg == CollectConfig.default()
    assert cfg.patterns.filename_keywords == DEFAULT_FILENAME_KEYWORDS
    assert "NOTICE" not in cfg.patterns.content_keywords
    assert cfg.metadata.cargo == "cargo"
    assert cfg.metadata.only_reachable is False


def test_from_dict_overrides_selected_values() -> None:
    cfg = load_collect_config({"metadata": {"only_reachable": True, "extra_args": ["--offline"]}})

    assert cfg.metadata.only_reachable is True
    assert cfg.metadata.extra_args == ["--offline"]
    assert cfg.patterns.content_markers == [".html", ".txt", ".md", "README"]


def test_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "deplicenses.toml"
    path.write_text(
        '[patterns]\ncontent_keywords = ["SPDX"]\n\n[metadata]\ncargo = "/opt/cargo"\n',
        encoding="utf-8",
    )

    cfg = load_collect_config(path)

    assert cfg.patterns.content_keywords == ["SPDX"]
    assert cfg.metadata.cargo == "/opt/cargo"


def test_json_file_as_string_path(tmp_path: Path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"metadata": {"timeout": 60}}), encoding="utf-8")

    assert load_collect_config(str(path)).metadata.timeout == 60


def test_inline_strings() -> None:
    assert load_collect_config('{"metadata": {"cargo": "x"}}').metadata.cargo == "x"
    assert load_collect_config('[metadata]\ncargo = "y"').metadata.cargo == "y"


def test_inline_toml_opening_with_table_header() -> None:
    text = (
        '[patterns]\ncontent_keywords = ["LICENSE", "SPDX"]\n\n'
        '[metadata]\nextra_args = ["--offline"]\nonly_reachable = true\n'
    )

    cfg = load_collect_config(text)

    assert cfg.patterns.content_keywords == ["LICENSE", "SPDX"]
    assert cfg.metadata.extra_args == ["--offline"]
    assert cfg.metadata.only_reachable is True


def test_toml_file_without_known_suffix(tmp_path: Path) -> None:
    path = tmp_path / "settings.cfg"
    path.write_text('[metadata]\ncargo = "/usr/bin/cargo"\n', encoding="utf-8")

    assert load_collect_config(path).metadata.cargo == "/usr/bin/cargo"


@pytest.mark.parametrize(
    "source",
    [
        {"patterns": {"filename_keywords": []}},
        {"patterns": {"content_keywords": ["  "]}},
        {"metadata": {"timeout": 0}},
        {"unknown_section": {}},
        "[1, 2]",
        "{not valid json",
        "not = [valid toml",
    ],
)
def test_invalid_configuration(source) -> None:
    with pytest.raises(ConfigError):
        load_collect_config(source)


def test_unsupported_source_type() -> None:
    with pytest.raises(TypeError):
        load_collect_config(42)


def test_round_trip_dict() -> None:
    cfg = CollectConfig.default()
    assert CollectConfig.from_dict(cfg.to_dict()) == cfg
