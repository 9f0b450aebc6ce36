"""
coolplay rules add command.

SUMMARY: Add a global rule, or a local rule for one file
"""

from __future__ import annotations

import argparse
import sys

from coolplay.cli import OutputFormatter, add_file_arg, add_standard_flags, get_active_file, get_workspace
from coolplay.core.rules import RulesStore

SUMMARY = "Add a global rule, or a local rule for one file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Rule name")
    parser.add_argument("--description", "-d", help="Rule description (default: Custom rule)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Attach the rule to --file instead of every file",
    )
    add_file_arg(parser, required=False)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = RulesStore(get_workspace(args))
        if args.local:
            rule = store.add_local_rule(args.name, args.description, get_active_file(args))
            scope = "local"
        else:
            rule = store.add_global_rule(args.name, args.description)
            scope = "global"
        formatter.success({"scope": scope, "rule": rule.to_dict()}, f"Added {scope} rule {rule.id}")
        return 0

    except Exception as e:
        formatter.error(e, error_code="rules_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    args = parser.parse_args()
    sys.exit(main(args))
