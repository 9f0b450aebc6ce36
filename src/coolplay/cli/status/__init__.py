"""Status commands."""
