"""Resolves the Cargo cache root and its crates.io mirror directory."""

from pathlib import Path
from typing import Optional

from .constants import DEFAULT_CACHE_DIRNAME, MIRROR_PREFIX, REGISTRY_SRC
from cargo_profclean.utils.filesystem import FileSystemAdapter, resolve_filesystem
from cargo_profclean.utils.logging import get_logger

logger = get_logger(__name__)


def default_cache_root() -> Path:
    """Returns the default Cargo cache root, ``$HOME/.cargo``."""
    return Path.home() / DEFAULT_CACHE_DIRNAME


def registry_src_dir(cache_root: Path) -> Path:
    """Returns ``<cache_root>/registry/src``."""
    return cache_root.joinpath(*REGISTRY_SRC)


def locate_mirror_directory(
    cache_root: Path, fs: Optional[FileSystemAdapter] = None
) -> Optional[Path]:
    """Finds the crates.io mirror directory under a Cargo cache root.

    The mirror lives at ``<cache_root>/registry/src/index.crates.io-<hash>``.
    If more than one entry carries the prefix, the lexicographically smallest
    name is chosen.

    Args:
        cache_root (Path): The Cargo cache root. Need not exist.
        fs (Optional[FileSystemAdapter]): The filesystem adapter to use. Defaults to RealFileSystem.

    Returns:
        Optional[Path]: The mirror directory, or None if it cannot be found.
    """
    fs = resolve_filesystem(fs)
    src_dir = registry_src_dir(cache_root)

    try:
        entries = fs.list_dir(src_dir)
    except OSError as e:
        logger.debug(f"Cannot list {src_dir}: {e}")
        return None

    candidates = sorted(
        (entry for entry in entries if entry.name.startswith(MIRROR_PREFIX)),
        key=lambda entry: entry.name,
    )

    if not candidates:
        logger.debug(f"No {MIRROR_PREFIX}* entry in {src_dir}")
        return None

    if len(candidates) > 1:
        logger.warning(
            f"Found {len(candidates)} mirror directories in {src_dir}, "
            f"using {candidates[0].name}"
        )

    logger.debug(f"Located mirror directory: {candidates[0]}")
    return candidates[0]
