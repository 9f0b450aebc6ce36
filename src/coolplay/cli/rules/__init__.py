"""Rules commands."""
