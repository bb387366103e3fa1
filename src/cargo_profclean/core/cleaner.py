"""Deletes profiling artifacts, one file at a time, without aborting the batch."""

import time
from pathlib import Path
from typing import Iterable, Optional

from .models import CleanerStats, CleanResult, CleanStatus, CleanSummary
from cargo_profclean.plugins.base import ReporterPlugin
from cargo_profclean.plugins.builtin.reporters import SilentReporterPlugin
from cargo_profclean.utils.filesystem import FileSystemAdapter, resolve_filesystem
from cargo_profclean.utils.logging import get_logger

logger = get_logger(__name__)


class ProfdataCleaner:
    """Removes a batch of files and reports the outcome of each one."""

    def __init__(
        self,
        fs: Optional[FileSystemAdapter] = None,
        reporter: Optional[ReporterPlugin] = None,
    ) -> None:
        """Initialises the ProfdataCleaner.

        Args:
            fs (Optional[FileSystemAdapter], optional): The filesystem adapter to use. Defaults to RealFileSystem.
            reporter (Optional[ReporterPlugin], optional): Receives per-file and summary events. Defaults to silent.
        """
        self.fs = resolve_filesystem(fs)
        self.reporter = reporter or SilentReporterPlugin()

    def remove_file(self, path: Path) -> CleanResult:
        """Removes a single file.

        Args:
            path (Path): The file to remove.

        Returns:
            CleanResult: SUCCESS, or FAILED carrying the error.
        """
        try:
            self.fs.remove_file(path)
            logger.debug(f"Removed {path}")
            return CleanResult(status=CleanStatus.SUCCESS, path=path)

        except PermissionError as e:
            logger.info(f"Permission denied removing {path}: {e}")
            return CleanResult(status=CleanStatus.FAILED, path=path, error=e)

        except OSError as e:
            logger.info(f"Error removing {path}: {e}")
            return CleanResult(status=CleanStatus.FAILED, path=path, error=e)

        except Exception as e:
            logger.warning(f"Unexpected error removing {path}: {e}")
            return CleanResult(status=CleanStatus.FAILED, path=path, error=e)

    def clean(
        self, files: Iterable[Path], mirror_dir: Optional[Path] = None
    ) -> CleanSummary:
        """Removes every file in ``files``, in order.

        A failed removal is reported and recorded, then the next file is
        attempted.

        Args:
            files (Iterable[Path]): The files to remove.
            mirror_dir (Optional[Path], optional): The directory the files came from, for reporting.

        Returns:
            CleanSummary: Counts of found, removed and failed files.

        Raises:
            KeyboardInterrupt: If the operation is interrupted by the user.
        """
        files = list(files)
        start_time = time.time()
        stats = CleanerStats(files_found=len(files))

        self.reporter.on_start(total_files=len(files), mirror_dir=mirror_dir)

        try:
            for path in files:
                result = self.remove_file(path)
                stats.record_result(result)

                if result.success:
                    self.reporter.on_file_cleaned(result)
                else:
                    self.reporter.on_file_failed(result)

        except KeyboardInterrupt:
            logger.warning("Cleaning interrupted by user.")
            raise

        finally:
            duration = time.time() - start_time
            summary = CleanSummary.from_stats(stats, duration, mirror_dir)
            self.reporter.on_complete(summary)

            logger.info(
                f"Cleaning complete: {summary.files_removed} removed, "
                f"{summary.files_failed} failed of {summary.files_found} found "
                f"(Duration: {duration:.2f}s)"
            )

        return summary


def clean(
    files: Iterable[Path],
    fs: Optional[FileSystemAdapter] = None,
    reporter: Optional[ReporterPlugin] = None,
) -> int:
    """Removes ``files`` and returns how many were attempted.

    Args:
        files (Iterable[Path]): The files to remove.
        fs (Optional[FileSystemAdapter]): The filesystem adapter to use. Defaults to RealFileSystem.
        reporter (Optional[ReporterPlugin]): Receives per-file and summary events. Defaults to silent.

    Returns:
        int: The number of files attempted, failed ones included.
    """
    summary = ProfdataCleaner(fs=fs, reporter=reporter).clean(files)
    return summary.files_found
