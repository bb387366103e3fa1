"""Locating, collecting and deleting profiling artifacts."""
