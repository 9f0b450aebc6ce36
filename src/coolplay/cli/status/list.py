"""
coolplay status list command.

SUMMARY: List every recorded file status
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_standard_flags, get_workspace
from coolplay.core.status import DECORATIONS, FileStatusStore, FileStatusValue

SUMMARY = "List every recorded file status"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--status",
        type=str.upper,
        choices=[s.value for s in FileStatusValue],
        help="Only list files with this status",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        records = FileStatusStore(get_workspace(args)).all()
        if args.status:
            records = [r for r in records if r.status.value == args.status]

        if args.json:
            formatter.json_output([r.to_dict() for r in records])
        else:
            for record in records:
                formatter.text(f"{DECORATIONS[record.status].badge}  {record.file_path}")
            formatter.text(f"{len(records)} file(s)")
        return 0

    except Exception as e:
        formatter.error(e, error_code="status_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
