"""Content matcher: pure predicates classifying paths and lines of text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from deplicenses.config.schema import (
    DEFAULT_CONTENT_KEYWORDS,
    DEFAULT_CONTENT_MARKERS,
    DEFAULT_FILENAME_KEYWORDS,
    PatternConfig,
)

logger = logging.getLogger("deplicenses.engine.matcher")


def compile_keywords(keywords: Iterable[str]) -> re.Pattern[str]:
    """Compile keywords into one case-insensitive substring alternation."""
    words = [w for w in keywords if w]
    if not words:
        raise ValueError("at least one keyword is required")
    return re.compile("|".join(re.escape(w) for w in words), re.IGNORECASE)


@dataclass(frozen=True)
class LicensePatterns:
    """Immutable compiled patterns for the two-tier license heuristic.

    Built once per run and passed to the locator.

    Attributes:
        filename: Matches license-related keywords anywhere in a path.
        content_eligible: Matches paths that look like prose documentation.
        content: Matches license-related keywords inside a line of text.
    """

    filename: re.Pattern[str]
    content_eligible: re.Pattern[str]
    content: re.Pattern[str]

    @classmethod
    def default(cls) -> "LicensePatterns":
        return cls.from_keywords(
            DEFAULT_FILENAME_KEYWORDS,
            DEFAULT_CONTENT_KEYWORDS,
            DEFAULT_CONTENT_MARKERS,
        )

    @classmethod
    def from_keywords(
        cls,
        filename_keywords: Iterable[str],
        content_keywords: Iterable[str],
        content_markers: Iterable[str],
    ) -> "LicensePatterns":
        return cls(
            filename=compile_keywords(filename_keywords),
            content_eligible=compile_keywords(content_markers),
            content=compile_keywords(content_keywords),
        )

    @classmethod
    def from_config(cls, config: Optional[PatternConfig]) -> "LicensePatterns":
        if config is None:
            return cls.default()
        return cls.from_keywords(
            config.filename_keywords,
            config.content_keywords,
            config.content_markers,
        )

    def matches_filename(self, path_text: str) -> bool:
        return self.filename.search(path_text) is not None

    def is_content_eligible(self, path_text: str) -> bool:
        return self.content_eligible.search(path_text) is not None

    def matches_line(self, line: str) -> bool:
        return self.content.search(line) is not None


def file_has_matching_line(path: Path, patterns: LicensePatterns) -> bool:
    """Return True if any line of ``path`` matches the content pattern.

    Lines that are not valid UTF-8 are skipped. A file that cannot be opened
    or read counts as no match.
    """
    try:
        with open(path, "rb") as handle:
            for raw in handle:
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError:
                    continue
                if patterns.matches_line(line):
                    return True
    except OSError as exc:
        logger.debug("Content scan skipped for %s: %s", path, exc)
    return False


def is_license_candidate(path: Path, patterns: LicensePatterns) -> bool:
    """Apply both heuristic tiers to a single file system entry."""
    text = str(path)
    if patterns.matches_filename(text):
        return True
    return patterns.is_content_eligible(text) and file_has_matching_line(path, patterns)


__all__ = [
    "LicensePatterns",
    "compile_keywords",
    "file_has_matching_line",
    "is_license_candidate",
]
