"""Run configuration built from command-line arguments."""

from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .locator import default_cache_root


@dataclass
class CleanConfig:
    """Configuration options for a clean run."""

    cache_root: Path
    reporter: str = "rich"
    strict: bool = False  # exit non-zero when any deletion fails
    verbose: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    output: Optional[Path] = None  # JSON reporter target file

    @classmethod
    def from_args(
        cls, args: Namespace, default_root: Optional[Path] = None
    ) -> "CleanConfig":
        """Builds a CleanConfig from parsed ``clean`` arguments.

        Args:
            args (Namespace): Parsed command-line arguments.
            default_root (Optional[Path], optional): Cache root used when no input path
                was given. Computed with default_cache_root() if None.

        Returns:
            CleanConfig: The run configuration.
        """
        if args.input is not None:
            cache_root = Path(args.input).expanduser()
        else:
            cache_root = default_root or default_cache_root()

        return cls(
            cache_root=cache_root,
            reporter=args.reporter,
            strict=args.strict,
            verbose=args.verbose,
            log_level=args.log_level,
            log_file=args.log_file,
            output=args.output,
        )

    def reporter_options(self) -> Dict[str, Any]:
        """Returns the keyword arguments for the selected reporter."""
        if self.reporter == "rich":
            return {"verbose": self.verbose}
        if self.reporter == "json":
            return {"output_path": self.output}
        return {}
