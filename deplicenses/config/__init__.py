"""Configuration schema and loading for deplicenses."""

from .schema import CollectConfig, MetadataConfig, PatternConfig
from .loader import load_collect_config

__all__ = [
    "CollectConfig",
    "MetadataConfig",
    "PatternConfig",
    "load_collect_config",
]
