# src/semaudit_cli/core/handlers/check_handler.py
import argparse
import sys

from semaudit_cli.core.driver import run


def handle_check(parsed_args: argparse.Namespace, rule_settings: dict) -> int:
    """
    Handler for 'check': audits one file, or stdin when the path is '-'.
    """
    if parsed_args.source == "-":
        return run(text=sys.stdin.read(), style=parsed_args.format, rule_settings=rule_settings)
    return run(path=parsed_args.source, style=parsed_args.format, rule_settings=rule_settings)
