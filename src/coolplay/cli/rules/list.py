"""
coolplay rules list command.

SUMMARY: List the rules that apply to a file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.rules import FilterMode, RulesStore, SortMode

SUMMARY = "List the rules that apply to a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_file_arg(parser, required=False)
    parser.add_argument(
        "--filter",
        choices=[m.value for m in FilterMode],
        default=FilterMode.ALL.value,
        help="Which rules to show (default: all)",
    )
    parser.add_argument(
        "--sort",
        choices=[m.value for m in SortMode],
        default=SortMode.DEFAULT.value,
        help="Ordering of checked rules (default: insertion order)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = RulesStore(get_workspace(args))
        store.set_filter_mode(args.filter)
        store.sort_mode = SortMode(args.sort)
        items = store.visible_rules(get_active_file(args))

        if args.json:
            formatter.json_output([item.to_dict() for item in items])
        else:
            for item in items:
                mark = "x" if item.is_checked else " "
                formatter.text(f"[{mark}] {item.label}  {item.short_description}  ({item.rule_id})")
            if not items:
                formatter.text("No rules")
        return 0

    except Exception as e:
        formatter.error(e, error_code="rules_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
