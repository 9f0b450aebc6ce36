"""
coolplay status show command.

SUMMARY: Show the workflow status of a file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.status import FileStatusStore

SUMMARY = "Show the workflow status of a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Show status, badge and icon; unknown files are recorded as DRAFT."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = FileStatusStore(get_workspace(args))
        item = store.active_item(get_active_file(args))
        decoration = store.decoration(item["filePath"]) if item else None
        data = dict(item or {})
        if decoration is not None:
            data["decoration"] = decoration.to_dict()
        formatter.success(data, item["label"] if item else "No active file")
        return 0

    except Exception as e:
        formatter.error(e, error_code="status_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
