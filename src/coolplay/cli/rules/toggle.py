"""
coolplay rules toggle command.

SUMMARY: Check or uncheck a rule for a file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.rules import RulesStore

SUMMARY = "Check or uncheck a rule for a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("rule_id", help="Rule identifier")
    add_file_arg(parser, required=False)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = RulesStore(get_workspace(args))
        checked = store.toggle_rule(args.rule_id, get_active_file(args))
        formatter.success(
            {"id": args.rule_id, "isChecked": checked},
            f"{args.rule_id} {'checked' if checked else 'unchecked'}",
        )
        return 0

    except Exception as e:
        formatter.error(e, error_code="rules_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
