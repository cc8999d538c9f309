from __future__ import annotations

import argparse
import logging
import sys

from semaudit.controllers.audit_controller import EXIT_UNREADABLE
from semaudit.engine.registry import RuleRegistry
from semaudit.services.report_service import ReportStyle
from semaudit_cli.core.handlers.batch_handler import handle_batch
from semaudit_cli.core.handlers.check_handler import handle_check
from semaudit_cli.core.handlers.rules_handler import handle_rules
from semaudit_cli.core.managers.config_manager import config_manager
from semaudit_cli.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

HANDLERS = {
    "check": handle_check,
    "batch": handle_batch,
    "rules": handle_rules,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semaudit",
        description="Audit HTML documents for semantic structure and landmark mistakes.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: debug.level from settings).")
    parser.add_argument("--config", default=None, help="JSON settings file merged over the defaults.")
    parser.add_argument("--disable", action="append", default=[], metavar="RULE", help="Disable a rule (repeatable).")

    formats = [s.value for s in ReportStyle]
    subparsers = parser.add_subparsers(dest="subcommand", help="Subcommands")

    # 1. Subcommand: CHECK
    check_parser = subparsers.add_parser("check", help="Audit a single document")
    check_parser.add_argument("source", help="Path of the HTML file, or '-' to read stdin.")
    check_parser.add_argument("--format", choices=formats, default=None, help="Report style.")

    # 2. Subcommand: BATCH
    batch_parser = subparsers.add_parser("batch", help="Audit many documents in parallel")
    batch_parser.add_argument("sources", nargs="+", help="Paths of the HTML files.")
    batch_parser.add_argument("--format", choices=formats, default=None, help="Report style.")
    batch_parser.add_argument("--workers", type=int, default=None, help="Worker processes.")
    batch_parser.add_argument("--summary", action="store_true", help="Print per-rule counts.")
    batch_parser.add_argument("--export", default=None, help="Write all findings to a CSV file.")
    batch_parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")

    # 3. Subcommand: RULES
    subparsers.add_parser("rules", help="List the available rules")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the auditor from the command line."""
    parser = build_parser()
    try:
        parsed_args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_UNREADABLE if e.code else 0

    if parsed_args.config and not config_manager.load_file(parsed_args.config):
        print(f"error: could not load settings from '{parsed_args.config}'", file=sys.stderr)
        return EXIT_UNREADABLE

    configure_logger(
        parsed_args.log_level or config_manager.get_nested("debug.level", "WARNING"),
        config_manager.get_nested("debug.modules", {}),
    )

    if not parsed_args.subcommand:
        parser.print_help()
        return 0

    rule_settings = config_manager.rule_settings()
    for rule_id in parsed_args.disable:
        if RuleRegistry.get(rule_id) is None:
            logger.warning("Unknown rule '%s' in --disable; ignoring.", rule_id)
            continue
        rule_settings.setdefault(rule_id, {})["enabled"] = False

    if getattr(parsed_args, "format", None) is None and parsed_args.subcommand != "rules":
        parsed_args.format = config_manager.get_nested("report.default_format", "plain")

    return HANDLERS[parsed_args.subcommand](parsed_args, rule_settings)


if __name__ == "__main__":
    sys.exit(main())
