"""Helpers for loading collection configuration from TOML/JSON sources.

`load_collect_config` accepts:

* None -> default CollectConfig
* dict -> CollectConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from deplicenses.config.schema import CollectConfig
from deplicenses.core.errors import ConfigError

logger = logging.getLogger("deplicenses.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    if stripped.startswith("{"):
        return "json"
    if stripped.startswith("["):
        # A JSON array or a TOML table header
        try:
            json.loads(text)
        except json.JSONDecodeError:
            return "toml"
        return "json"
    return "toml"


def _is_config_file(path: Path) -> bool:
    try:
        return path.is_file()
    except (OSError, ValueError):
        # Inline strings are not always valid path names
        return False


def _parse(text: str, fmt: str) -> Any:
    try:
        if fmt == "json":
            return json.loads(text)
        return tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Invalid {fmt.upper()} configuration: {exc}") from exc


def load_collect_config(source: ConfigSource) -> CollectConfig:
    """Load CollectConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns CollectConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        CollectConfig instance.

    Raises:
        ConfigError: If the source cannot be read, parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default CollectConfig")
        return CollectConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading CollectConfig from provided dict")
        data: Any = source
    elif isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None

        if _is_config_file(path):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        data = _parse(text, fmt)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    if not isinstance(data, dict):
        raise ConfigError("Top-level configuration must be a mapping/dict")

    try:
        return CollectConfig.from_dict(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = ["ConfigSource", "load_collect_config"]
