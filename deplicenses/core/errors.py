"""Exception hierarchy for license discovery and collation.

Errors fall into two groups:

- Recoverable errors affect a single dependency. The collator records them
  as failed outcomes and moves on to the next dependency.
- Everything else is structural (bad destination, broken license
  declaration, unusable metadata or configuration) and terminates the run.
"""

from pathlib import Path
from typing import Optional


class DepLicensesError(Exception):
    """Base class for all deplicenses errors."""

    pass


# =============================================================================
# Recoverable (per-dependency) errors
# =============================================================================


class RecoverableError(DepLicensesError):
    """Base class for errors that only abort the current dependency."""

    pass


class RelativizeError(RecoverableError):
    """A candidate path does not lie beneath its dependency root."""

    def __init__(self, root_path: Path, path: Path, reason: str = "") -> None:
        self.root_path = root_path
        self.path = path
        message = f"Couldn't remove the prefix {root_path} from {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# =============================================================================
# Fatal errors
# =============================================================================


class DeclaredLicenseError(DepLicensesError):
    """An explicitly declared license file cannot be resolved.

    A broken declaration is treated as more severe than a heuristic scan that
    finds nothing, so it is never downgraded to "no candidates".
    """

    def __init__(self, dependency: str, path: Path, cause: Optional[BaseException] = None) -> None:
        self.dependency = dependency
        self.path = path
        message = f"Declared license file of {dependency} cannot be resolved: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class DestinationError(DepLicensesError):
    """The destination directory cannot be created."""

    pass


class MetadataError(DepLicensesError):
    """Dependency metadata could not be obtained or parsed."""

    pass


class ConfigError(DepLicensesError):
    """Configuration is malformed or fails validation."""

    pass


__all__ = [
    "ConfigError",
    "DeclaredLicenseError",
    "DepLicensesError",
    "DestinationError",
    "MetadataError",
    "RecoverableError",
    "RelativizeError",
]
