"""Runs a full clean: locate the mirror, collect artifacts, delete them."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .cleaner import ProfdataCleaner
from .collector import collect_profiling_artifacts
from .locator import locate_mirror_directory
from .models import CleanOutcome
from cargo_profclean.plugins.base import ReporterPlugin
from cargo_profclean.plugins.builtin.reporters import SilentReporterPlugin
from cargo_profclean.utils.filesystem import FileSystemAdapter, resolve_filesystem
from cargo_profclean.utils.logging import OperationLogger, get_logger

logger = get_logger(__name__)


def run_clean(
    cache_root: Union[str, Path],
    *,
    fs: Optional[FileSystemAdapter] = None,
    reporter: Optional[ReporterPlugin] = None,
) -> CleanOutcome:
    """Cleans all profdata files under a Cargo cache root.

    A missing mirror directory and an empty one are both normal outcomes,
    reported through ``reporter`` and returned without a summary.

    Args:
        cache_root (Union[str, Path]): The Cargo cache root.
        fs (Optional[FileSystemAdapter], optional): The filesystem adapter to use. Defaults to RealFileSystem.
        reporter (Optional[ReporterPlugin], optional): Receives progress and summary events. Defaults to silent.

    Returns:
        CleanOutcome: The located mirror and, if files were found, the summary.
    """
    cache_root = Path(cache_root)
    fs = resolve_filesystem(fs)
    reporter = reporter or SilentReporterPlugin()

    with OperationLogger(f"clean {cache_root}", logger):
        mirror_dir = locate_mirror_directory(cache_root, fs)

        if mirror_dir is None:
            logger.info(f"No mirror directory under {cache_root}")
            reporter.on_mirror_not_found(cache_root)
            return CleanOutcome(cache_root=cache_root)

        artifacts = collect_profiling_artifacts(mirror_dir, fs)

        if not artifacts:
            logger.info(f"No profdata files in {mirror_dir}")
            reporter.on_no_artifacts(mirror_dir)
            return CleanOutcome(cache_root=cache_root, mirror_dir=mirror_dir)

        summary = ProfdataCleaner(fs=fs, reporter=reporter).clean(
            artifacts, mirror_dir=mirror_dir
        )

    return CleanOutcome(cache_root=cache_root, mirror_dir=mirror_dir, summary=summary)
