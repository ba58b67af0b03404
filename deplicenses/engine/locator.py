"""License locator: finds the license-related files of one dependency."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Tuple

from deplicenses.core.errors import DeclaredLicenseError
from deplicenses.core.models import Dependency
from deplicenses.engine.matcher import LicensePatterns, is_license_candidate

logger = logging.getLogger("deplicenses.engine.locator")


def resolve_root(dependency: Dependency) -> Optional[Path]:
    """Return the canonical root directory of a dependency, or None.

    A dependency whose root is unknown or cannot be canonicalized is skipped
    by the caller rather than failing the run.
    """
    if dependency.root_path is None:
        logger.debug("Skipping %s: no root directory", dependency.key)
        return None
    try:
        return Path(dependency.root_path).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        logger.debug("Skipping %s: cannot resolve %s: %s", dependency.key, dependency.root_path, exc)
        return None


def resolve_declared_license(dependency: Dependency) -> Path:
    """Canonicalize the declared license file of a dependency.

    Raises:
        DeclaredLicenseError: If the declared path does not exist or cannot
            be canonicalized.
    """
    declared = Path(dependency.declared_license_file)
    if not declared.is_absolute() and dependency.root_path is not None:
        declared = Path(dependency.root_path) / declared
    try:
        return declared.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise DeclaredLicenseError(dependency.name, declared, exc) from exc


def walk_entries(root: Path) -> Iterator[Path]:
    """Yield every regular file and symlink at or below ``root``.

    Symlinks are never followed; directories are traversed but not yielded.
    Directories that cannot be listed are skipped.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            # Sort for deterministic order
            entries = sorted(os.scandir(current), key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", current, exc)
            continue

        dirs = []
        for entry in entries:
            try:
                if entry.is_symlink() or entry.is_file(follow_symlinks=False):
                    yield Path(entry.path)
                elif entry.is_dir(follow_symlinks=False):
                    dirs.append(Path(entry.path))
            except OSError as exc:
                logger.debug("Cannot stat %s: %s", entry.path, exc)

        # Reversed so that popping visits directories in name order
        stack.extend(reversed(dirs))


def scan_for_licenses(root: Path, patterns: LicensePatterns) -> Iterator[Path]:
    """Lazily yield the files below ``root`` selected by the heuristic."""
    for path in walk_entries(root):
        if is_license_candidate(path, patterns):
            yield path


def locate_licenses(
    dependency: Dependency,
    patterns: Optional[LicensePatterns] = None,
) -> Optional[Tuple[Path, Iterator[Path]]]:
    """Locate license candidates for a single dependency.

    A declared license file is authoritative: it is returned as the only
    candidate and no scan takes place.

    Args:
        dependency: Dependency to inspect.
        patterns: Compiled heuristic patterns; defaults are used when omitted.

    Returns:
        ``(canonical_root, candidates)`` or None when the root directory
        cannot be resolved.

    Raises:
        DeclaredLicenseError: If a declared license file cannot be resolved.
    """
    root = resolve_root(dependency)
    if root is None:
        return None

    if dependency.declared_license_file is not None:
        declared = resolve_declared_license(dependency)
        logger.debug("%s declares license file %s", dependency.key, declared)
        return root, iter([declared])

    return root, scan_for_licenses(root, patterns or LicensePatterns.default())


__all__ = [
    "locate_licenses",
    "resolve_declared_license",
    "resolve_root",
    "scan_for_licenses",
    "walk_entries",
]
