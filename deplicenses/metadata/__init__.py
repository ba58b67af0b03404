"""Dependency graph providers."""

from deplicenses.metadata.cargo import (
    dependency_from_package,
    load_metadata_file,
    run_cargo_metadata,
)
from deplicenses.metadata.graph import DependencyGraph

__all__ = [
    "DependencyGraph",
    "dependency_from_package",
    "load_metadata_file",
    "run_cargo_metadata",
]
