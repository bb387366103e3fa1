"""Models for profdata cleaning results and statistics."""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional, Tuple


class CleanStatus(Enum):
    """Enumeration for file removal status."""

    SUCCESS = auto()
    FAILED = auto()


@dataclass(frozen=True)
class CleanResult:
    """Data class to hold the result of removing a single file."""

    status: CleanStatus
    path: Path
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        """Indicates if the file was removed."""
        return self.status == CleanStatus.SUCCESS

    @property
    def failed(self) -> bool:
        """Indicates if removing the file failed."""
        return self.status == CleanStatus.FAILED


@dataclass
class CleanerStats:
    """Data class to track statistics of a cleaning pass."""

    files_found: int = 0
    files_removed: int = 0
    files_failed: int = 0
    errors: List[Tuple[Path, Exception]] = field(default_factory=list)

    def record_result(self, result: CleanResult) -> None:
        """Updates statistics based on a removal result."""
        if result.success:
            self.files_removed += 1

        elif result.failed:
            self.files_failed += 1
            if result.error:
                self.errors.append((result.path, result.error))


@dataclass(frozen=True)
class CleanSummary:
    """Data class to encapsulate the overall result of a cleaning pass.

    ``files_found`` is the number of files the pass attempted, which is the
    count reported as cleaned. ``files_removed`` and ``files_failed`` split it
    by outcome.
    """

    mirror_dir: Optional[Path]
    files_found: int
    files_removed: int
    files_failed: int
    errors: List[Tuple[Path, Exception]]
    duration_seconds: float

    @classmethod
    def from_stats(
        cls,
        stats: CleanerStats,
        duration_seconds: float,
        mirror_dir: Optional[Path] = None,
    ) -> "CleanSummary":
        """Creates a CleanSummary from CleanerStats."""
        return cls(
            mirror_dir=mirror_dir,
            files_found=stats.files_found,
            files_removed=stats.files_removed,
            files_failed=stats.files_failed,
            errors=stats.errors.copy(),
            duration_seconds=duration_seconds,
        )

    @property
    def success(self) -> bool:
        """Indicates if every file was removed."""
        return self.files_failed == 0


@dataclass(frozen=True)
class CleanOutcome:
    """Result of a whole clean run, from mirror lookup to summary."""

    cache_root: Path
    mirror_dir: Optional[Path] = None
    summary: Optional[CleanSummary] = None

    @property
    def mirror_found(self) -> bool:
        return self.mirror_dir is not None

    @property
    def cleaned_count(self) -> int:
        """Number of files reported as cleaned."""
        return self.summary.files_found if self.summary else 0

    @property
    def success(self) -> bool:
        """False only when at least one deletion failed."""
        return self.summary is None or self.summary.success
