"""
coolplay status set command.

SUMMARY: Set the workflow status of a file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.status import FileStatusStore, FileStatusValue

SUMMARY = "Set the workflow status of a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "status",
        type=str.upper,
        choices=[s.value for s in FileStatusValue],
        help="New status",
    )
    add_file_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = FileStatusStore(get_workspace(args))
        record = store.set(get_active_file(args), args.status)
        formatter.success(record.to_dict(), f"{record.file_path} - {record.status.value}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="status_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
