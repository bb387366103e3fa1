"""Reporter plugins."""
