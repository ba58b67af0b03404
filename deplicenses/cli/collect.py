"""include-licenses command implementation.

Fatal errors are reported once here and mapped to an exit code.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from deplicenses.config import load_collect_config
from deplicenses.core.errors import DepLicensesError
from deplicenses.engine.collator import copy_licenses_to
from deplicenses.engine.matcher import LicensePatterns
from deplicenses.engine.pipeline import search_for_all_licenses
from deplicenses.metadata.cargo import load_metadata_file, run_cargo_metadata
from deplicenses.metadata.graph import DependencyGraph
from deplicenses.runtime.display import ReportDisplay

logger = logging.getLogger("deplicenses.cli.collect")


def _setup_file_logging(log_file: str) -> Optional[logging.FileHandler]:
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to set up file logging: %s", e)
        return None
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    logging.getLogger("deplicenses").addHandler(handler)
    logger.info("File logging enabled: %s", log_file)
    return handler


def collect_command(args, display: Optional[ReportDisplay] = None) -> int:
    """Execute the include-licenses command.

    Args:
        args: Parsed command-line arguments.
        display: Report renderer; a stderr ReportDisplay when omitted.

    Returns:
        int: Exit code.
    """
    log_file = getattr(args, "log_file", None)
    file_handler = _setup_file_logging(log_file) if log_file else None
    try:
        return _collect_command_impl(args, display or ReportDisplay())
    except DepLicensesError as e:
        logger.error("%s", e)
        return 1
    finally:
        if file_handler is not None:
            logging.getLogger("deplicenses").removeHandler(file_handler)
            file_handler.close()


def _collect_command_impl(args, display: ReportDisplay) -> int:
    out_dir = Path(args.out_dir)
    logger.debug("=== deplicenses include-licenses ===")
    logger.debug("Destination: %s", out_dir)

    start_time = time.time()

    config = load_collect_config(getattr(args, "config", None))
    if getattr(args, "only_reachable", False):
        config.metadata.only_reachable = True

    metadata_file = getattr(args, "metadata", None)
    if metadata_file:
        data = load_metadata_file(metadata_file)
    else:
        data = run_cargo_metadata(
            manifest_path=getattr(args, "manifest_path", None),
            cargo=config.metadata.cargo,
            extra_args=config.metadata.extra_args,
            timeout=config.metadata.timeout,
        )

    graph = DependencyGraph.from_metadata(data)
    external = graph.external_dependencies(only_reachable=config.metadata.only_reachable)
    logger.info(
        "%d packages, %d workspace members, %d external dependencies",
        len(graph),
        len(graph.workspace_members),
        len(external),
    )

    patterns = LicensePatterns.from_config(config.patterns)
    licenses = search_for_all_licenses(external, graph.workspace_members, patterns)
    report = copy_licenses_to(out_dir, licenses)

    elapsed = time.time() - start_time
    logger.info(
        "Copied %d file(s) for %d dependencies in %.2fs",
        len(report.succeeded),
        len(report.by_dependency()),
        elapsed,
    )
    for outcome in report.failed:
        logger.warning(
            "Failed to copy %s for %s: %s",
            outcome.source_path,
            outcome.dependency,
            outcome.error,
        )

    display.render(report)

    if report.failed and getattr(args, "strict", False):
        return 1
    return 0


__all__ = ["collect_command"]
