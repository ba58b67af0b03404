"""Core data model and error types."""

from deplicenses.core.errors import (
    ConfigError,
    DeclaredLicenseError,
    DepLicensesError,
    DestinationError,
    MetadataError,
    RecoverableError,
    RelativizeError,
)
from deplicenses.core.models import (
    Candidate,
    CollationReport,
    CopyOutcome,
    Dependency,
    LicenseSet,
)

__all__ = [
    "Candidate",
    "CollationReport",
    "ConfigError",
    "CopyOutcome",
    "DeclaredLicenseError",
    "Dependency",
    "DepLicensesError",
    "DestinationError",
    "LicenseSet",
    "MetadataError",
    "RecoverableError",
    "RelativizeError",
]
