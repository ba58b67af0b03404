"""Path validation utilities guarding the destination tree."""

import logging
import os
from pathlib import Path

logger = logging.getLogger("deplicenses.utils.validation")


def is_safe_component(name: str) -> bool:
    """Check that ``name`` can be used as a single directory name.

    Rejects empty names, ``.``/``..`` and anything containing a path
    separator, so that ``base / name`` always stays a direct child of base.

    Args:
        name: Candidate directory name (e.g. a dependency name).

    Returns:
        bool: True if safe, False otherwise.
    """
    if not name or name in (".", ".."):
        return False
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in name for sep in separators) or "\0" in name:
        logger.debug("Unsafe path component: %r", name)
        return False
    return True


def validate_contained(path: Path, base_dir: Path) -> bool:
    """Validate that ``path`` lies strictly inside ``base_dir``.

    The comparison is lexical (after making both paths absolute and
    collapsing ``..``); nothing needs to exist on disk yet.

    Args:
        path: Path to validate.
        base_dir: The trusted base directory.

    Returns:
        bool: True if ``path`` is inside and not equal to ``base_dir``.
    """
    base = Path(os.path.normpath(os.path.abspath(base_dir)))
    target = Path(os.path.normpath(os.path.abspath(path)))
    if target == base or not target.is_relative_to(base):
        logger.debug("Path escapes destination: %s is not inside %s", target, base)
        return False
    return True


__all__ = ["is_safe_component", "validate_contained"]
