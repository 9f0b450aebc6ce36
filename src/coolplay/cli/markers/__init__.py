"""Markers commands."""
