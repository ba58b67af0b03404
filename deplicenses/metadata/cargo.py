"""Reading resolved dependency metadata from cargo.

Runs ``cargo metadata --format-version 1`` (or reads a saved copy of its
output) and turns the package entries into Dependency objects. Subprocess
and JSON failures are raised as MetadataError.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from deplicenses.core.errors import MetadataError
from deplicenses.core.models import Dependency

logger = logging.getLogger("deplicenses.metadata.cargo")

METADATA_FORMAT_VERSION = "1"


def run_cargo_metadata(
    manifest_path: Optional[Union[str, Path]] = None,
    cargo: str = "cargo",
    extra_args: Sequence[str] = (),
    timeout: float = 300.0,
) -> Dict[str, Any]:
    """Run ``cargo metadata`` and return its parsed JSON output.

    Args:
        manifest_path: Optional Cargo.toml to inspect instead of the
            current directory's project.
        cargo: Cargo executable.
        extra_args: Extra arguments (e.g. ``--locked``, ``--offline``).
        timeout: Command timeout in seconds.

    Raises:
        MetadataError: If cargo cannot be run, fails, or prints invalid JSON.
    """
    cmd = [cargo, "metadata", "--format-version", METADATA_FORMAT_VERSION]
    if manifest_path is not None:
        cmd.extend(["--manifest-path", str(manifest_path)])
    cmd.extend(extra_args)
    logger.debug("Running: %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise MetadataError(f"Cargo executable not found: {cargo}") from exc
    except subprocess.TimeoutExpired as exc:
        raise MetadataError(f"cargo metadata timed out after {timeout}s") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise MetadataError(
            f"cargo metadata failed with exit code {exc.returncode}: {stderr}"
        ) from exc

    return parse_metadata(result.stdout)


def parse_metadata(text: str) -> Dict[str, Any]:
    """Parse metadata JSON text.

    Raises:
        MetadataError: If the text is not a JSON object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"Invalid metadata JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MetadataError("Metadata must be a JSON object")
    return data


def load_metadata_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a saved ``cargo metadata`` JSON document."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataError(f"Cannot read metadata file {path}: {exc}") from exc
    logger.info("Loading metadata from file: %s", path)
    return parse_metadata(text)


def root_from_manifest(manifest_path: Optional[str]) -> Optional[Path]:
    """Return the directory containing a manifest, or None if it has none."""
    if not manifest_path:
        return None
    manifest = Path(manifest_path)
    parent = manifest.parent
    if parent == manifest or str(parent) in ("", "."):
        return None
    return parent


def dependency_from_package(package: Dict[str, Any]) -> Dependency:
    """Build a Dependency from one ``packages`` entry.

    Raises:
        MetadataError: If the entry has no name.
    """
    name = package.get("name")
    if not name or not isinstance(name, str):
        raise MetadataError(f"Package entry without a name: {package.get('id')!r}")

    manifest = package.get("manifest_path")
    root = root_from_manifest(manifest)

    declared: Optional[Path] = None
    license_file = package.get("license_file")
    if license_file:
        declared = Path(license_file)
        if not declared.is_absolute() and root is not None:
            declared = root / declared

    return Dependency(
        name=name,
        root_path=root,
        declared_license_file=declared,
        id=str(package.get("id") or name),
        version=str(package.get("version") or ""),
        manifest_path=Path(manifest) if manifest else None,
    )


__all__ = [
    "dependency_from_package",
    "load_metadata_file",
    "parse_metadata",
    "root_from_manifest",
    "run_cargo_metadata",
]
