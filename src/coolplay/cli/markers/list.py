"""
coolplay markers list command.

SUMMARY: Show the pending or completed markers of one file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import (
    OutputFormatter,
    add_file_arg,
    add_standard_flags,
    add_tag_arg,
    add_view_arg,
    get_active_file,
    get_workspace,
    run_async,
)
from coolplay.core.markers import MarkerView

SUMMARY = "Show the pending or completed markers of one file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser)
    add_view_arg(parser)
    add_tag_arg(parser)
    add_standard_flags(parser)


def render_view(view: MarkerView, formatter: OutputFormatter) -> None:
    items = view.visible
    if formatter.json_mode:
        formatter.json_output(
            {
                "view": view.partition.value,
                "file": view.active_document,
                "tag": view.tag_filter,
                "availableTags": view.available_tags(),
                "markers": [o.to_dict() for o in items],
            }
        )
        return
    title = "Completed" if view.partition.value == "completed" else "Pending"
    formatter.text(f"{title} markers ({len(items)})")
    for occ in items:
        formatter.text(f"  [{occ.icon_hint}] {occ.label}  ({occ.description})")


async def _load(args: argparse.Namespace) -> MarkerView:
    workspace = get_workspace(args)
    view = MarkerView(workspace, args.view)
    view.set_active_document(get_active_file(args))
    view.set_tag_filter(args.tag)
    await view.refresh()
    view.close()
    return view


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        view = run_async(_load(args))
        render_view(view, formatter)
        return 0

    except Exception as e:
        formatter.error(e, error_code="list_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
