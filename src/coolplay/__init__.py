"""
coolplay - developer metadata for source workspaces

Tracks per-file workflow status, checkable rules, and inline comment
markers (TODO, FIXME, ...) that can be resolved in place.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
