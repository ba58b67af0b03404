"""Dependency filtering and whole-graph license search."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Iterator, List, Optional

from deplicenses.core.models import Dependency, LicenseSet
from deplicenses.engine.locator import locate_licenses
from deplicenses.engine.matcher import LicensePatterns

logger = logging.getLogger("deplicenses.engine.pipeline")


def filter_external(
    dependencies: Iterable[Dependency],
    workspace_members: AbstractSet[str],
) -> List[Dependency]:
    """Return the dependencies that are not workspace members.

    Membership is decided by ``Dependency.id``; input order is kept.
    """
    return [dep for dep in dependencies if dep.id not in workspace_members]


def search_for_all_licenses(
    dependencies: Iterable[Dependency],
    workspace_members: AbstractSet[str],
    patterns: Optional[LicensePatterns] = None,
) -> Iterator[LicenseSet]:
    """Lazily yield the license candidates of every external dependency.

    Dependencies whose root directory cannot be resolved are skipped.
    A broken declared license raises DeclaredLicenseError when that
    dependency is reached.
    """
    patterns = patterns or LicensePatterns.default()
    external = filter_external(dependencies, workspace_members)
    logger.debug("%d external dependencies to inspect", len(external))

    for dependency in external:
        located = locate_licenses(dependency, patterns)
        if located is None:
            continue
        root_path, candidates = located
        yield LicenseSet(dependency.name, root_path, candidates)


__all__ = ["filter_external", "search_for_all_licenses"]
