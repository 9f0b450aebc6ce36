"""
coolplay rules remove command.

SUMMARY: Delete a rule and its per-file check states
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_standard_flags, get_workspace
from coolplay.core.rules import RulesStore

SUMMARY = "Delete a rule and its per-file check states"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("rule_id", help="Rule identifier")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        RulesStore(get_workspace(args)).remove_rule(args.rule_id)
        formatter.success({"id": args.rule_id}, f"Removed {args.rule_id}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="rules_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
