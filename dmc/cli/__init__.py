"""Command-line interface for dmc."""
