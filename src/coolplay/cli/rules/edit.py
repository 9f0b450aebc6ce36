"""
coolplay rules edit command.

SUMMARY: Rename a rule or change its description
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_standard_flags, get_workspace
from coolplay.core.rules import RulesStore

SUMMARY = "Rename a rule or change its description"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("rule_id", help="Rule identifier")
    parser.add_argument("--name", "-n", help="New name (default: keep)")
    parser.add_argument(
        "--description",
        "-d",
        help="New description (default: keep; empty resets to Custom rule)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = RulesStore(get_workspace(args))
        current = store.find(args.rule_id)
        name = args.name if args.name is not None else current.name
        description = args.description if args.description is not None else current.description
        rule = store.edit_rule(args.rule_id, name, description)
        formatter.success({"rule": rule.to_dict()}, f"Updated {rule.id}: {rule.name}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="rules_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
