"""Builtin plugins."""

from .reporters import JSONReporterPlugin, RichReporterPlugin, SilentReporterPlugin

__all__ = ["JSONReporterPlugin", "RichReporterPlugin", "SilentReporterPlugin"]
