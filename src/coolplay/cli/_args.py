"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse

from coolplay.core.markers import Partition


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for workspace root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override workspace root path",
    )


def add_file_arg(parser: argparse.ArgumentParser, required: bool = True) -> None:
    """Add --file argument naming the active document.

    Args:
        parser: ArgumentParser to add the argument to
        required: Whether the argument is required
    """
    parser.add_argument(
        "--file",
        "-f",
        dest="file",
        required=required,
        help="Active document (absolute, or relative to the current directory)",
    )


def add_view_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--view",
        choices=[p.value for p in Partition],
        default=Partition.PENDING.value,
        help="Which marker view to show (default: pending)",
    )


def add_tag_arg(parser: argparse.ArgumentParser, required: bool = False) -> None:
    parser.add_argument(
        "--tag",
        "-t",
        required=required,
        help="Marker tag (TODO, FIXME, ...); case-insensitive",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --repo-root
    """
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_file_arg",
    "add_view_arg",
    "add_tag_arg",
    "add_standard_flags",
]
