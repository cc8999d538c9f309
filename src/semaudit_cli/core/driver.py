# src/semaudit_cli/core/driver.py
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from semaudit.controllers.audit_controller import EXIT_UNREADABLE, exit_code_for
from semaudit.errors import ParseError, SourceReadError
from semaudit.services.analysis_service import analyze
from semaudit.services.report_service import format_report
from semaudit_cli.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


def run(
        path: Optional[Union[str, Path]] = None,
        text: Optional[str] = None,
        style: Optional[str] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        rule_settings: Optional[Dict[str, Dict[str, Any]]] = None,
        strict: Optional[bool] = None,
) -> int:
    """
    Audits one document (a file path or in-memory text) and writes the report.

    Returns:
        0 if there are no error-severity findings, 1 if there is at least one,
        2 if the input could not be read or parsed.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    style = style or config_manager.get_nested("report.default_format", "plain")
    if rule_settings is None:
        rule_settings = config_manager.rule_settings()
    if strict is None:
        strict = bool(config_manager.get_nested("parser.strict", True))

    try:
        result = analyze(text=text, path=path, rule_settings=rule_settings, strict=strict)
    except (ParseError, SourceReadError) as e:
        logger.debug("Audit aborted: %s", e)
        print(f"error: {e}", file=err)
        return EXIT_UNREADABLE

    report = format_report(result.findings, style)
    if report:
        print(report, file=out)

    for rule_error in result.rule_errors:
        print(f"internal: {rule_error}", file=err)

    return exit_code_for(result.findings)
