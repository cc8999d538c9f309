# src/semaudit_cli/core/handlers/batch_handler.py
import argparse
import logging

from semaudit.controllers.audit_controller import AuditController, BatchResult, EXIT_UNREADABLE
from semaudit.services.json_service import to_json
from semaudit.services.report_service import format_report, ReportStyle
from semaudit.services.summary_service import export_csv, summarize
from semaudit_cli.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


def _print_batch(batch: BatchResult, style: str) -> None:
    if style == ReportStyle.JSON.value:
        payload = [
            {
                "source": doc.source,
                "error": doc.error,
                "findings": [f.to_row() for f in doc.findings],
            }
            for doc in batch.documents
        ]
        print(to_json(payload))
        return

    for doc in batch.documents:
        print(f"== {doc.source}")
        if doc.error:
            print(f"error: {doc.error}")
        elif doc.findings:
            print(format_report(doc.findings, style))


def handle_batch(parsed_args: argparse.Namespace, rule_settings: dict) -> int:
    """
    Handler for 'batch': audits many documents in parallel worker processes.
    """
    workers = parsed_args.workers or config_manager.get_nested("batch.workers", 1)
    controller = AuditController(
        workers=workers,
        rule_settings=rule_settings,
        strict=bool(config_manager.get_nested("parser.strict", True)),
        show_progress=not parsed_args.no_progress,
    )

    batch = controller.run_batch(parsed_args.sources)
    _print_batch(batch, parsed_args.format)

    rows = batch.rows()
    if parsed_args.summary:
        summary = summarize(rows)
        print()
        print("No findings." if summary.empty else summary.to_string(index=False))

    if parsed_args.export:
        try:
            path = export_csv(rows, parsed_args.export)
            print(f"Findings exported to {path}")
        except OSError as e:
            logger.error("Export to %s failed: %s", parsed_args.export, e)
            print(f"error: could not write export file: {e}")
            return EXIT_UNREADABLE

    return batch.exit_code
