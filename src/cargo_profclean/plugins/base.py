"""Base classes and structures for reporter plugins."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cargo_profclean.core.models import CleanResult, CleanSummary


@dataclass
class PluginMetadata:
    """Metadata for a plugin."""

    name: str
    version: str
    author: str
    description: str


class Plugin(ABC):
    """Abstract base class for all plugins."""

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Returns the metadata for the plugin."""
        ...


class ReporterPlugin(Plugin):
    """Abstract base class for progress reporting plugins.

    Every hook is a no-op by default, so a reporter only overrides the
    events it cares about.
    """

    def on_mirror_not_found(self, cache_root: Path) -> None:
        """Called when no crates.io mirror directory exists under the cache root.

        Args:
            cache_root (Path): The cache root that was searched.
        """
        pass

    def on_no_artifacts(self, mirror_dir: Path) -> None:
        """Called when the mirror directory holds no profdata files.

        Args:
            mirror_dir (Path): The mirror directory that was searched.
        """
        pass

    def on_start(self, total_files: int, mirror_dir: Optional[Path] = None) -> None:
        """Called before the first file is removed.

        Args:
            total_files (int): The number of files about to be removed.
            mirror_dir (Optional[Path], optional): The mirror the files were found in.
        """
        pass

    def on_file_cleaned(self, result: CleanResult) -> None:
        """Called after a file was removed.

        Args:
            result (CleanResult): The successful removal result.
        """
        pass

    def on_file_failed(self, result: CleanResult) -> None:
        """Called after removing a file failed.

        Args:
            result (CleanResult): The failed removal result, carrying the error.
        """
        pass

    def on_complete(self, summary: CleanSummary) -> None:
        """Called once every file has been attempted.

        Args:
            summary (CleanSummary): The overall result of the cleaning pass.
        """
        pass
