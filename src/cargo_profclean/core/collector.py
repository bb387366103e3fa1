"""Collects profiling artifacts from the crate folders of a mirror directory."""

from pathlib import Path
from typing import Iterator, List, Optional

from .constants import PROFDATA_SUFFIX
from cargo_profclean.utils.filesystem import FileSystemAdapter, resolve_filesystem
from cargo_profclean.utils.logging import get_logger

logger = get_logger(__name__)


def collect_profiling_artifacts(
    mirror_dir: Path, fs: Optional[FileSystemAdapter] = None
) -> List[Path]:
    """Collects ``.mm_profdata`` files exactly two levels below the mirror.

    Only ``<mirror_dir>/<crate-folder>/<name>.mm_profdata`` is considered.
    Files directly in ``mirror_dir`` or nested deeper are never returned.

    Args:
        mirror_dir (Path): The crates.io mirror directory.
        fs (Optional[FileSystemAdapter]): The filesystem adapter to use. Defaults to RealFileSystem.

    Returns:
        List[Path]: The matching files, sorted by path.
    """
    fs = resolve_filesystem(fs)

    try:
        crate_dirs = fs.list_dir(mirror_dir)
    except OSError as e:
        logger.debug(f"Cannot list mirror directory {mirror_dir}: {e}")
        return []

    artifacts: List[Path] = []
    for crate_dir in crate_dirs:
        artifacts.extend(_collect_from_crate_dir(crate_dir, fs))

    logger.debug(f"Collected {len(artifacts)} profdata files from {mirror_dir}")
    return sorted(artifacts)


def _collect_from_crate_dir(crate_dir: Path, fs: FileSystemAdapter) -> Iterator[Path]:
    """Yields direct children of a crate folder that are profiling artifacts.

    Entries that cannot be listed, plain files included, yield nothing.
    """
    try:
        entries = fs.list_dir(crate_dir)
    except OSError as e:
        logger.debug(f"Skipping {crate_dir}: {e}")
        return

    for entry in entries:
        if entry.name.endswith(PROFDATA_SUFFIX):
            yield entry
