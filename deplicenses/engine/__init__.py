"""License discovery and collation engine."""

from deplicenses.engine.collator import copy_licenses_to
from deplicenses.engine.locator import locate_licenses
from deplicenses.engine.matcher import LicensePatterns
from deplicenses.engine.pipeline import filter_external, search_for_all_licenses
from deplicenses.engine.relativize import relativize

__all__ = [
    "LicensePatterns",
    "copy_licenses_to",
    "filter_external",
    "locate_licenses",
    "relativize",
    "search_for_all_licenses",
]
