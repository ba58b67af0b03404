"""Collator: copies discovered license files into a namespaced tree.

Layout: ``<destination>/<dependency-name>/<path-relative-to-dependency-root>``.
Every candidate produces one CopyOutcome; a failed copy never stops the run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from deplicenses.core.errors import DestinationError, RelativizeError
from deplicenses.core.models import CollationReport, CopyOutcome, LicenseSet
from deplicenses.engine.relativize import with_relative_paths
from deplicenses.utils.validation import is_safe_component, validate_contained

logger = logging.getLogger("deplicenses.engine.collator")


def describe_copy_error(exc: OSError) -> str:
    """Flatten an I/O error into one descriptive message.

    ``shutil.copytree`` gathers every failed entry into a single
    ``shutil.Error`` whose first argument is a list of
    ``(src, dst, reason)`` tuples.
    """
    if isinstance(exc, shutil.Error) and exc.args and isinstance(exc.args[0], list):
        details = exc.args[0]
        parts = []
        for item in details:
            if isinstance(item, tuple) and len(item) == 3:
                src, dst, why = item
                parts.append(f"{src} -> {dst}: {why}")
            else:
                parts.append(str(item))
        return f"{len(details)} error(s) copying directory: " + "; ".join(parts)
    return str(exc) or exc.__class__.__name__


def copy_path(source: Path, target: Path) -> None:
    """Copy a file, or a whole directory tree, to ``target``.

    Existing files at the target are overwritten.
    """
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
    else:
        shutil.copy2(source, target)


def copy_candidate(dependency: str, source: Path, target: Path, namespace: Path) -> CopyOutcome:
    """Place one candidate and report how it went."""
    if not validate_contained(target, namespace):
        return CopyOutcome(dependency, source, target, f"{target} escapes {namespace}")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        copy_path(source, target)
    except OSError as exc:
        message = describe_copy_error(exc)
        logger.debug("Copy failed for %s: %s -> %s: %s", dependency, source, target, message)
        return CopyOutcome(dependency, source, target, message)
    logger.debug("Copied %s -> %s", source, target)
    return CopyOutcome(dependency, source, target)


def collate_dependency(destination: Path, licenses: LicenseSet, report: CollationReport) -> None:
    """Copy all candidates of one dependency, recording outcomes in ``report``.

    An unusable dependency name or a candidate outside the dependency root
    aborts this dependency only; a single failed outcome is recorded.
    """
    name, root_path, candidates = licenses
    namespace = destination / name

    if not is_safe_component(name):
        report.add(CopyOutcome(name, None, namespace, f"Unsafe dependency name: {name!r}"))
        return

    try:
        for candidate in with_relative_paths(root_path, candidates):
            target = namespace / candidate.relative_path
            report.add(copy_candidate(name, candidate.source_path, target, namespace))
    except RelativizeError as exc:
        logger.debug("Aborting %s: %s", name, exc)
        report.add(CopyOutcome(name, exc.path, namespace, str(exc)))


def copy_licenses_to(destination: Path, licenses: Iterable[LicenseSet]) -> CollationReport:
    """Copy every discovered license file below ``destination``.

    The destination directory is created first, even when ``licenses`` is
    empty. The input is consumed lazily; errors raised while producing it
    (such as an unresolvable declared license) propagate.

    Args:
        destination: Root of the output tree.
        licenses: ``(name, root_path, candidates)`` triples.

    Returns:
        CollationReport with one outcome per candidate.

    Raises:
        DestinationError: If the destination directory cannot be created.
    """
    destination = Path(destination)
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationError(f"Cannot create destination {destination}: {exc}") from exc

    report = CollationReport(destination)
    for license_set in licenses:
        collate_dependency(destination, license_set, report)
    return report


__all__ = [
    "collate_dependency",
    "copy_candidate",
    "copy_licenses_to",
    "copy_path",
    "describe_copy_error",
]
