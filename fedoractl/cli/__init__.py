"""Command-line interface for fedoractl."""
