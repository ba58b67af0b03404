"""Path relativizer for placing candidates under a dependency namespace."""

import os
from pathlib import Path
from typing import Iterable, Iterator

from deplicenses.core.errors import RelativizeError
from deplicenses.core.models import Candidate


def _strictly_below(path: Path, root: Path) -> Path:
    rel = path.relative_to(root)
    if not rel.parts or ".." in rel.parts:
        raise ValueError(f"{path} is not strictly below {root}")
    return rel


def relativize(root_path: Path, path: Path) -> Path:
    """Return ``path`` relative to ``root_path``.

    The lexical absolute forms are compared first so that symlinked
    candidates keep the location they were found at; the canonical forms
    are the fallback for paths recorded through symlinks or ``..`` segments.

    Raises:
        RelativizeError: If ``path`` is not strictly beneath ``root_path``.
    """
    root = Path(root_path)
    candidate = Path(path)
    try:
        return _strictly_below(Path(os.path.abspath(candidate)), Path(os.path.abspath(root)))
    except ValueError:
        pass
    try:
        return _strictly_below(candidate.resolve(), root.resolve())
    except (OSError, RuntimeError, ValueError) as exc:
        raise RelativizeError(root, candidate, str(exc)) from exc


def with_relative_paths(root_path: Path, paths: Iterable[Path]) -> Iterator[Candidate]:
    """Pair each source path with its location relative to ``root_path``."""
    for path in paths:
        yield Candidate(Path(path), relativize(root_path, path))


__all__ = ["relativize", "with_relative_paths"]
