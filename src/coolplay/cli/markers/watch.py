"""
coolplay markers watch command.

SUMMARY: Re-print a marker view whenever watched files change
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

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
from coolplay.cli.markers.list import render_view
from coolplay.core.markers import MarkerView, PollingWatcher

SUMMARY = "Re-print a marker view whenever watched files change"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser)
    add_view_arg(parser)
    add_tag_arg(parser)
    parser.add_argument(
        "--interval",
        type=float,
        help="Polling interval in seconds (default: markers.watch_interval_ms)",
    )
    parser.add_argument(
        "--max-updates",
        type=int,
        help="Exit after printing this many updates after the initial view",
    )
    add_standard_flags(parser)


async def watch(
    view: MarkerView,
    watcher: PollingWatcher,
    formatter: OutputFormatter,
    *,
    max_updates: Optional[int] = None,
) -> int:
    """Print ``view`` now and after every rescan; returns the number of updates printed."""
    updates = 0
    done = asyncio.Event()

    def on_change(changed: MarkerView) -> None:
        nonlocal updates
        render_view(changed, formatter)
        updates += 1
        if max_updates is not None and updates >= max_updates:
            done.set()

    await view.refresh()
    unsubscribe = view.on_change(on_change)
    render_view(view, formatter)
    if max_updates is not None and max_updates <= 0:
        done.set()
    watcher.start()
    try:
        await done.wait()
    finally:
        unsubscribe()
        await watcher.stop()
        view.close()
    return updates


async def _run(args: argparse.Namespace, formatter: OutputFormatter) -> int:
    workspace = get_workspace(args)
    cfg = workspace.markers_config
    view = MarkerView(workspace, args.view, config=cfg)
    view.set_active_document(get_active_file(args))
    view.set_tag_filter(args.tag)
    watcher = PollingWatcher(
        workspace,
        lambda kind, path: view.notify_change(path),
        extensions=cfg.extensions,
        excluded_dirs=cfg.excluded_dirs,
        interval=args.interval if args.interval is not None else cfg.watch_interval_seconds,
    )
    return await watch(view, watcher, formatter, max_updates=args.max_updates)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        run_async(_run(args, formatter))
        return 0

    except KeyboardInterrupt:
        return 0
    except Exception as e:
        formatter.error(e, error_code="watch_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
