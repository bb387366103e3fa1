"""Remove stale .mm_profdata files from the Cargo registry cache."""

__version__ = "0.1.0"
