"""Configuration schema definitions using Pydantic for validation.

The defaults reproduce the built-in heuristic; a configuration file only
needs to mention the values it changes.
"""

from typing import Any, Dict, List
from pydantic import BaseModel, Field, field_validator


DEFAULT_FILENAME_KEYWORDS = [
    "LICENSE",
    "COPYRIGHT",
    "NOTICE",
    "AUTHORS",
    "CONTRIBUTORS",
    "COPYING",
    "PATENT",
]

# Narrower than the filename set: NOTICE/AUTHORS/CONTRIBUTORS are too common
# in ordinary prose.
DEFAULT_CONTENT_KEYWORDS = [
    "LICENSE",
    "COPYRIGHT",
    "COPYING",
    "PATENT",
]

DEFAULT_CONTENT_MARKERS = [
    ".html",
    ".txt",
    ".md",
    "README",
]


def _check_keywords(v: List[str]) -> List[str]:
    if not v:
        raise ValueError("keyword list must not be empty")
    for keyword in v:
        if not keyword or not keyword.strip():
            raise ValueError(f"Invalid keyword: {keyword!r}")
    return v


class PatternConfig(BaseModel):
    """Keywords driving the two-tier license heuristic.

    Attributes:
        filename_keywords: Substrings that select a file by its path alone.
        content_keywords: Substrings searched line by line in prose files.
        content_markers: Substrings of the path that make a file eligible
            for the content scan.
    """

    filename_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FILENAME_KEYWORDS)
    )
    content_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_KEYWORDS)
    )
    content_markers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_MARKERS)
    )

    model_config = {"extra": "forbid"}

    @field_validator("filename_keywords", "content_keywords", "content_markers")
    @classmethod
    def validate_keywords(cls, v: List[str]) -> List[str]:
        """Validate that keyword lists are non-empty and contain no blanks."""
        return _check_keywords(v)


class MetadataConfig(BaseModel):
    """Configuration for the cargo metadata provider.

    Attributes:
        cargo: Cargo executable to invoke.
        extra_args: Additional arguments appended to ``cargo metadata``.
        only_reachable: Keep only packages reachable from a workspace member.
        timeout: Timeout for the metadata command (seconds).
    """

    cargo: str = "cargo"
    extra_args: List[str] = Field(default_factory=list)
    only_reachable: bool = False
    timeout: float = Field(default=300.0, ge=1.0, le=3600.0)

    model_config = {"extra": "forbid"}


class CollectConfig(BaseModel):
    """Top-level configuration for a collection run."""

    patterns: PatternConfig = Field(default_factory=PatternConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def default(cls) -> "CollectConfig":
        """Return a CollectConfig instance with default values."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
