"""
coolplay markers scan command.

SUMMARY: Scan the workspace for marker comments
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_standard_flags, add_tag_arg, get_workspace, run_async
from coolplay.core.markers import MarkerScanner

SUMMARY = "Scan the workspace for marker comments"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_tag_arg(parser)
    parser.add_argument(
        "--status",
        choices=["all", "pending", "completed"],
        default="all",
        help="Only show pending or completed markers (default: all)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Print every marker occurrence, sorted by tag then path."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        workspace = get_workspace(args)
        scanner = MarkerScanner.from_config(workspace.markers_config)
        occurrences = run_async(scanner.scan(workspace))

        if args.tag:
            tag = args.tag.upper()
            occurrences = [o for o in occurrences if o.tag == tag]
        if args.status != "all":
            want_resolved = args.status == "completed"
            occurrences = [o for o in occurrences if o.resolved is want_resolved]

        if args.json:
            formatter.json_output({"count": len(occurrences), "markers": [o.to_dict() for o in occurrences]})
        else:
            for occ in occurrences:
                mark = "x" if occ.resolved else " "
                formatter.text(f"[{mark}] {occ.label}  ({occ.description})")
            formatter.text(f"{len(occurrences)} marker(s)")
        return 0

    except Exception as e:
        formatter.error(e, error_code="scan_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
