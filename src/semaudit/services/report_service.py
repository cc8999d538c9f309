# src/semaudit/services/report_service.py
from enum import Enum
from typing import List, Sequence, Union

from .json_service import to_json, from_json
from ..model import Finding


class ReportStyle(str, Enum):
    PLAIN = "plain"  # human-readable, one line per finding
    JSON = "json"  # machine-readable array


def _style(style: Union[str, ReportStyle]) -> ReportStyle:
    try:
        return ReportStyle(style)
    except ValueError:
        choices = ", ".join(s.value for s in ReportStyle)
        raise ValueError(f"Unknown report style '{style}' (choose from: {choices})") from None


def format_plain_line(finding: Finding) -> str:
    return f"{finding.severity.value}: {finding.rule_id} at {finding.path}: {finding.message}"


def format_report(findings: Sequence[Finding], style: Union[str, ReportStyle] = ReportStyle.PLAIN) -> str:
    """
    Renders findings in the requested style, keeping their order.
    Output depends only on the input, so equal input gives byte-identical text.
    """
    style = _style(style)
    if style is ReportStyle.JSON:
        return to_json([f.to_row() for f in findings])
    return "\n".join(format_plain_line(f) for f in findings)


def parse_json_report(text: str) -> List[Finding]:
    """Reads a report produced with the json style back into Findings."""
    data = from_json(text)
    if not isinstance(data, list):
        raise ValueError("JSON report must be an array of findings")
    return [Finding.from_row(row) for row in data]
