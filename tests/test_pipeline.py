"""Dependency filtering and end-to-end collection scenarios."""

from __future__ import annotations

from pathlib import Path

import pytest

from deplicenses.core.errors import DeclaredLicenseError
from deplicenses.core.models import Dependency
from deplicenses.engine.collator import copy_licenses_to
from deplicenses.engine.pipeline import filter_external, search_for_all_licenses


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _files(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


def test_filter_external_keeps_order() -> None:
    deps = [Dependency("app"), Dependency("serde"), Dependency("libc")]

    external = filter_external(deps, {"app"})

    assert [d.name for d in external] == ["serde", "libc"]


def test_filter_external_uses_ids() -> None:
    local = Dependency("shared", id="shared 0.1.0 (path+file:///ws/shared)")
    remote = Dependency("shared", id="shared 0.1.0 (registry+https://example)")

    assert filter_external([local, remote], {local.id}) == [remote]


def test_filter_external_may_be_empty() -> None:
    assert filter_external([Dependency("app")], {"app"}) == []


def test_unresolvable_dependencies_are_dropped(tmp_path: Path) -> None:
    root = tmp_path / "foo"
    root.mkdir()
    deps = [Dependency("ghost"), Dependency("foo", root)]

    sets = list(search_for_all_licenses(deps, set()))

    assert [s.name for s in sets] == ["foo"]
    assert sets[0].root_path == root.resolve()


def test_search_is_lazy_per_dependency(tmp_path: Path) -> None:
    """A broken declaration surfaces only when its dependency is reached."""
    good = tmp_path / "good"
    good.mkdir()
    bad = tmp_path / "bad"
    bad.mkdir()
    deps = [
        Dependency("good", good),
        Dependency("bad", bad, declared_license_file=bad / "missing"),
    ]

    sets = search_for_all_licenses(deps, set())

    assert next(sets).name == "good"
    with pytest.raises(DeclaredLicenseError):
        next(sets)


def test_scenario_filename_match(tmp_path: Path) -> None:
    foo = tmp_path / "deps" / "foo"
    _write(foo / "LICENSE-MIT", "MIT")
    _write(foo / "src" / "main.rs", "fn main() {}\n")
    out = tmp_path / "out"

    report = copy_licenses_to(out, search_for_all_licenses([Dependency("foo", foo)], set()))

    assert report.ok
    assert _files(out) == ["foo/LICENSE-MIT"]


def test_scenario_declared_file(tmp_path: Path) -> None:
    bar = tmp_path / "deps" / "bar"
    declared = _write(bar / "LICENSES" / "BSD.txt", "BSD")
    _write(bar / "NOTICE", "unrelated")
    out = tmp_path / "out"

    report = copy_licenses_to(
        out,
        search_for_all_licenses([Dependency("bar", bar, declared_license_file=declared)], set()),
    )

    assert report.ok
    assert _files(out) == ["bar/LICENSES/BSD.txt"]


def test_scenario_prose_content(tmp_path: Path) -> None:
    baz = tmp_path / "deps" / "baz"
    _write(baz / "README.md", "This project is licensed under Copyright (c) 2020\n")
    _write(baz / "src" / "lib.rs", "pub fn f() {}\n")
    out = tmp_path / "out"

    report = copy_licenses_to(out, search_for_all_licenses([Dependency("baz", baz)], set()))

    assert report.ok
    assert _files(out) == ["baz/README.md"]


def test_scenario_workspace_member_excluded(tmp_path: Path) -> None:
    app = tmp_path / "ws" / "app"
    _write(app / "LICENSE", "ours")
    foo = tmp_path / "deps" / "foo"
    _write(foo / "COPYING", "theirs")
    out = tmp_path / "out"

    report = copy_licenses_to(
        out,
        search_for_all_licenses(
            [Dependency("app", app, id="app-id"), Dependency("foo", foo)],
            {"app-id"},
        ),
    )

    assert report.ok
    assert _files(out) == ["foo/COPYING"]
    assert not (out / "app").exists()


def test_destination_paths_stay_inside_namespaces(tmp_path: Path) -> None:
    foo = tmp_path / "deps" / "foo"
    _write(foo / "AUTHORS", "a")
    _write(foo / "docs" / "PATENTS", "p")
    out = tmp_path / "out"

    report = copy_licenses_to(out, search_for_all_licenses([Dependency("foo", foo)], set()))

    assert len(report) == 2
    for outcome in report.outcomes:
        assert outcome.destination_path.is_relative_to(out / "foo")
        assert outcome.destination_path != out / "foo"
