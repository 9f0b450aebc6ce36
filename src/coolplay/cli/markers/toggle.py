"""
coolplay markers toggle command.

SUMMARY: Toggle a marker between pending and completed
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import (
    OutputFormatter,
    add_file_arg,
    add_standard_flags,
    add_tag_arg,
    get_active_file,
    get_workspace,
    run_async,
)
from coolplay.core.exceptions import MarkerError
from coolplay.core.markers import MarkerOccurrence, MarkerScanner, find_pattern, toggle_occurrence

SUMMARY = "Toggle a marker between pending and completed"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser)
    parser.add_argument("--line", "-l", type=int, required=True, help="1-based line number of the marker")
    add_tag_arg(parser, required=True)
    add_standard_flags(parser)


async def _toggle(args: argparse.Namespace) -> tuple[MarkerOccurrence, bool]:
    workspace = get_workspace(args)
    scanner = MarkerScanner.from_config(workspace.markers_config)
    tag = args.tag.upper()
    if find_pattern(scanner.patterns, tag) is None:
        raise MarkerError(f"Unknown marker tag: {args.tag}", context={"tag": args.tag})

    path = get_active_file(args)
    found = await scanner.scan_file(path, workspace)
    for occ in found:
        if occ.line == args.line and occ.tag == tag:
            return occ, await toggle_occurrence(occ, scanner.patterns)
    raise MarkerError(
        f"No {tag} marker at {workspace.relative_path(path)}:{args.line}",
        context={"file": str(path), "line": args.line, "tag": tag},
    )


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        occ, changed = run_async(_toggle(args))
        resolved = occ.resolved != changed
        state = "completed" if resolved else "pending"
        formatter.success(
            {"marker": occ.to_dict(), "changed": changed, "resolved": resolved},
            f"{occ.tag} at {occ.description} is now {state}" if changed else f"{occ.description} left unchanged",
        )
        return 0

    except Exception as e:
        formatter.error(e, error_code="toggle_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
