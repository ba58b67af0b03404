"""Cargo metadata provider and dependency graph tests."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from deplicenses.core.errors import MetadataError
from deplicenses.metadata import cargo as cargo_module
from deplicenses.metadata.cargo import (
    dependency_from_package,
    load_metadata_file,
    root_from_manifest,
    run_cargo_metadata,
)
from deplicenses.metadata.graph import DependencyGraph


def _package(name: str, manifest: str, license_file: str | None = None) -> dict:
    return {
        "name": name,
        "version": "1.0.0",
        "id": f"{name} 1.0.0",
        "manifest_path": manifest,
        "license_file": license_file,
    }


def _metadata() -> dict:
    return {
        "packages": [
            _package("app", "/ws/app/Cargo.toml"),
            _package("serde", "/deps/serde/Cargo.toml"),
            _package("itoa", "/deps/itoa/Cargo.toml", "LICENSE-MIT"),
            _package("orphan", "/deps/orphan/Cargo.toml"),
        ],
        "workspace_members": ["app 1.0.0"],
        "resolve": {
            "root": "app 1.0.0",
            "nodes": [
                {"id": "app 1.0.0", "dependencies": ["serde 1.0.0"]},
                {"id": "serde 1.0.0", "dependencies": ["itoa 1.0.0", "unknown 0.1.0"]},
                {"id": "itoa 1.0.0", "dependencies": []},
                {"id": "orphan 1.0.0", "dependencies": []},
            ],
        },
    }


def test_root_from_manifest() -> None:
    assert root_from_manifest("/deps/serde/Cargo.toml") == Path("/deps/serde")
    assert root_from_manifest("") is None
    assert root_from_manifest(None) is None
    assert root_from_manifest("/") is None
    assert root_from_manifest("Cargo.toml") is None


def test_dependency_from_package_joins_declared_file() -> None:
    dep = dependency_from_package(_package("itoa", "/deps/itoa/Cargo.toml", "LICENSE-MIT"))

    assert dep.name == "itoa"
    assert dep.id == "itoa 1.0.0"
    assert dep.version == "1.0.0"
    assert dep.root_path == Path("/deps/itoa")
    assert dep.declared_license_file == Path("/deps/itoa/LICENSE-MIT")
    assert dep.key == "itoa@1.0.0"


def test_dependency_from_package_keeps_absolute_declaration() -> None:
    dep = dependency_from_package(_package("x", "/deps/x/Cargo.toml", "/shared/TERMS"))
    assert dep.declared_license_file == Path("/shared/TERMS")


def test_package_without_name_is_rejected() -> None:
    with pytest.raises(MetadataError):
        dependency_from_package({"id": "broken"})


def test_graph_from_metadata() -> None:
    graph = DependencyGraph.from_metadata(_metadata())

    assert len(graph) == 4
    assert graph.workspace_members == frozenset({"app 1.0.0"})
    assert graph.native_graph.has_edge("app 1.0.0", "serde 1.0.0")
    assert graph.native_graph.number_of_edges() == 2
    assert graph.get("serde 1.0.0").name == "serde"
    assert graph.get("missing") is None


def test_external_dependencies_exclude_workspace_members() -> None:
    graph = DependencyGraph.from_metadata(_metadata())

    names = [d.name for d in graph.external_dependencies()]

    assert names == ["serde", "itoa", "orphan"]


def test_only_reachable_drops_unused_packages() -> None:
    graph = DependencyGraph.from_metadata(_metadata())

    names = [d.name for d in graph.external_dependencies(only_reachable=True)]

    assert names == ["serde", "itoa"]


def test_metadata_without_resolve_section() -> None:
    data = _metadata()
    data["resolve"] = None

    graph = DependencyGraph.from_metadata(data)

    assert graph.native_graph.number_of_edges() == 0
    assert graph.external_dependencies(only_reachable=True) == []


def test_metadata_without_packages_is_rejected() -> None:
    with pytest.raises(MetadataError):
        DependencyGraph.from_metadata({"workspace_members": []})


def test_load_metadata_file(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(_metadata()), encoding="utf-8")

    assert load_metadata_file(path)["workspace_members"] == ["app 1.0.0"]


def test_load_metadata_file_errors(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(MetadataError):
        load_metadata_file(bad)
    with pytest.raises(MetadataError):
        load_metadata_file(tmp_path / "missing.json")


def test_run_cargo_metadata_builds_command(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(cmd, **kwargs):
        captured["cmd"] = cmd
        captured["kwargs"] = kwargs
        return SimpleNamespace(stdout=json.dumps(_metadata()), returncode=0)

    monkeypatch.setattr(cargo_module.subprocess, "run", fake_run)

    data = run_cargo_metadata("/ws/Cargo.toml", extra_args=["--offline"], timeout=30)

    assert captured["cmd"] == [
        "cargo",
        "metadata",
        "--format-version",
        "1",
        "--manifest-path",
        "/ws/Cargo.toml",
        "--offline",
    ]
    assert captured["kwargs"]["timeout"] == 30
    assert len(data["packages"]) == 4


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError("cargo"),
        subprocess.CalledProcessError(101, ["cargo"], stderr="error: could not find Cargo.toml"),
        subprocess.TimeoutExpired(["cargo"], 1),
    ],
)
def test_run_cargo_metadata_failures(monkeypatch: pytest.MonkeyPatch, exc: Exception) -> None:
    def fake_run(cmd, **kwargs):
        raise exc

    monkeypatch.setattr(cargo_module.subprocess, "run", fake_run)

    with pytest.raises(MetadataError):
        run_cargo_metadata()


def test_run_cargo_metadata_invalid_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cargo_module.subprocess,
        "run",
        lambda cmd, **kwargs: SimpleNamespace(stdout="not json", returncode=0),
    )

    with pytest.raises(MetadataError):
        run_cargo_metadata()
