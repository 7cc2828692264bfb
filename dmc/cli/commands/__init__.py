"""dmc CLI commands."""
