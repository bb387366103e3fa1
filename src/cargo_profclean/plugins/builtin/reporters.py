"""Builtin reporter plugins."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from cargo_profclean.core.constants import REGISTRY_SRC
from cargo_profclean.core.models import CleanResult, CleanSummary
from cargo_profclean.utils.logging import get_logger
from ..base import PluginMetadata, ReporterPlugin

logger = get_logger(__name__)

AUTHOR = "cargo-profclean developers"


def _path(path: Path) -> str:
    """Formats a path the way every console line highlights it."""
    return f"[magenta bold]{escape(str(path))}[/magenta bold]"


def _cache_root_of(mirror_dir: Optional[Path]) -> Optional[Path]:
    """Returns the cache root a mirror directory lives under."""
    if mirror_dir is None or len(mirror_dir.parents) <= len(REGISTRY_SRC):
        return None
    return mirror_dir.parents[len(REGISTRY_SRC)]


class RichReporterPlugin(ReporterPlugin):
    """Rich console reporter plugin."""

    def __init__(self, verbose: bool = False, console: Optional[Console] = None) -> None:
        """Initialises the RichReporterPlugin.

        Args:
            verbose (bool, optional): Also show the duration of the run.
            console (Optional[Console], optional): Console to print to. Defaults to stdout.
        """
        self.verbose = verbose
        self.console = console or Console()

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="rich",
            version="0.1.0",
            author=AUTHOR,
            description="Coloured terminal output",
        )

    def on_mirror_not_found(self, cache_root: Path) -> None:
        self.console.print(
            f"No [magenta bold]index.crates.io[/magenta bold] directory found in {_path(cache_root)}"
        )

    def on_no_artifacts(self, mirror_dir: Path) -> None:
        self.console.print(f"No profdata files found in {_path(mirror_dir)}")

    def on_start(self, total_files: int, mirror_dir: Optional[Path] = None) -> None:
        if mirror_dir is None:
            self.console.print(f"Found {total_files} profdata files")
        else:
            self.console.print(
                f"Found {total_files} profdata files in {_path(mirror_dir)}"
            )

    def on_file_cleaned(self, result: CleanResult) -> None:
        self.console.print(f" Cleaned {_path(result.path)}")

    def on_file_failed(self, result: CleanResult) -> None:
        self.console.print(
            f"  [bold red]Error cleaning[/bold red] {_path(result.path)}: "
            f"{escape(str(result.error))}"
        )

    def on_complete(self, summary: CleanSummary) -> None:
        """Prints the final count, and the failures if there were any.

        The count is the number of files found, failed ones included.
        """
        self.console.print(
            f"Cleaned [magenta bold]{summary.files_found}[/magenta bold] profdata files"
        )

        if summary.files_failed > 0:
            self.console.print(
                f"[bold red]{summary.files_failed} failed[/bold red], "
                f"{summary.files_removed} removed"
            )

        if self.verbose:
            self.console.print(f"[dim]Duration: {summary.duration_seconds:.2f}s[/dim]")


class SilentReporterPlugin(ReporterPlugin):
    """Silent reporter plugin - no output."""

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="silent",
            version="0.1.0",
            author=AUTHOR,
            description="No output reporter for testing or silent operations",
        )


class JSONReporterPlugin(ReporterPlugin):
    """JSON reporter plugin - outputs for scripting.

    Every outcome emits a document with the same keys. ``mirror_dir`` is
    null when no mirror was found.
    """

    def __init__(
        self, output_path: Optional[Path] = None, console: Optional[Console] = None
    ) -> None:
        """Initialises the JSONReporterPlugin.

        Args:
            output_path (Optional[Path], optional): Path to output JSON file.
                If None, outputs to stdout.
            console (Optional[Console], optional): Console used for stdout output.
        """
        self.output_path = output_path
        self.console = console or Console()

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="json",
            version="0.1.0",
            author=AUTHOR,
            description="JSON output reporter for programmatic consumption",
        )

    def on_mirror_not_found(self, cache_root: Path) -> None:
        self._emit(self._document(cache_root, None))

    def on_no_artifacts(self, mirror_dir: Path) -> None:
        self._emit(self._document(_cache_root_of(mirror_dir), mirror_dir))

    def on_complete(self, summary: CleanSummary) -> None:
        """Outputs JSON summary.

        Args:
            summary (CleanSummary): The overall result of the cleaning pass.
        """
        self._emit(
            self._document(
                _cache_root_of(summary.mirror_dir),
                summary.mirror_dir,
                success=summary.success,
                statistics={
                    "files_found": summary.files_found,
                    "files_removed": summary.files_removed,
                    "files_failed": summary.files_failed,
                    "duration_seconds": summary.duration_seconds,
                },
                errors=[
                    {"file": str(path), "error": str(error)}
                    for path, error in summary.errors
                ],
            )
        )

    @staticmethod
    def _document(
        cache_root: Optional[Path],
        mirror_dir: Optional[Path],
        success: bool = True,
        statistics: Optional[Dict[str, Any]] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ) -> Dict[str, Any]:
        return {
            "success": success,
            "cache_root": str(cache_root) if cache_root else None,
            "mirror_dir": str(mirror_dir) if mirror_dir else None,
            "statistics": statistics
            or {
                "files_found": 0,
                "files_removed": 0,
                "files_failed": 0,
                "duration_seconds": 0.0,
            },
            "errors": errors or [],
        }

    def _emit(self, output: Dict[str, Any]) -> None:
        """Writes the document to the output file, or to the console.

        A file that cannot be written is logged and the document goes to the
        console instead, since the files are already deleted by then.
        """
        json_output = json.dumps(output, indent=4)

        if self.output_path:
            try:
                self.output_path.write_text(json_output)
                return
            except OSError as e:
                logger.error(f"Cannot write JSON report to {self.output_path}: {e}")

        self.console.print(json_output, soft_wrap=True, markup=False, highlight=False)
