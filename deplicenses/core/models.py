"""Data model shared by the discovery engine, metadata provider and CLI."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple, Optional


@dataclass(frozen=True)
class Dependency:
    """A resolved package of the dependency graph.

    Attributes:
        name: Package name, used as the destination namespace.
        root_path: Package root directory, or None when it cannot be
            determined from the metadata.
        declared_license_file: Explicit license file declared by the package.
        id: Unique package identity inside the graph. Defaults to ``name``.
        version: Package version, informational only.
        manifest_path: Manifest the root was derived from.
    """

    name: str
    root_path: Optional[Path] = None
    declared_license_file: Optional[Path] = None
    id: str = ""
    version: str = ""
    manifest_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", self.name)

    @property
    def key(self) -> str:
        """Human readable key (``name@version`` when a version is known)."""
        return f"{self.name}@{self.version}" if self.version else self.name


class LicenseSet(NamedTuple):
    """Candidate license paths of one dependency, produced lazily."""

    name: str
    root_path: Path
    candidates: Iterator[Path]


class Candidate(NamedTuple):
    """A discovered path together with its location inside the dependency."""

    source_path: Path
    relative_path: Path


@dataclass
class CopyOutcome:
    """Result of placing one candidate into the destination tree."""

    dependency: str
    source_path: Optional[Path]
    destination_path: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CollationReport:
    """All per-candidate outcomes of a collation run, in processing order."""

    destination: Path
    outcomes: List[CopyOutcome] = field(default_factory=list)

    def add(self, outcome: CopyOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> List[CopyOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[CopyOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def by_dependency(self) -> Dict[str, List[CopyOutcome]]:
        """Group outcomes by dependency name, keeping first-seen order."""
        grouped: Dict[str, List[CopyOutcome]] = OrderedDict()
        for outcome in self.outcomes:
            grouped.setdefault(outcome.dependency, []).append(outcome)
        return grouped

    def __len__(self) -> int:
        return len(self.outcomes)


__all__ = [
    "Candidate",
    "CollationReport",
    "CopyOutcome",
    "Dependency",
    "LicenseSet",
]
