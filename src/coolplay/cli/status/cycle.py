"""
coolplay status cycle command.

SUMMARY: Advance a file to its next status (DRAFT, ONGOING, DONE)
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.status import FileStatusStore

SUMMARY = "Advance a file to its next status (DRAFT, ONGOING, DONE)"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        workspace = get_workspace(args)
        store = FileStatusStore(workspace)
        path = get_active_file(args)
        status = store.cycle(path)
        rel = workspace.relative_path(path)
        formatter.success({"filePath": rel, "status": status.value}, f"{rel} - {status.value}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="status_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
