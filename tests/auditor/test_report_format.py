# tests/auditor/test_report_format.py
import json

import pytest

from semaudit.model import Finding, Severity
from semaudit.services.report_service import format_report, parse_json_report
from semaudit.services.summary_service import export_csv, summarize

FINDINGS = [
    Finding(rule_id="landmark-presence", severity=Severity.WARNING,
            message="Document has no <main> or <header> landmark", path=":root"),
    Finding(rule_id="heading-sequence", severity=Severity.ERROR,
            message="Heading level skipped: <h3> follows <h1>", path="div:nth-of-type(2) > h3"),
]


def test_plain_format():
    """Eén regel per finding in het vaste formaat."""
    assert format_report(FINDINGS, "plain").splitlines() == [
        "warning: landmark-presence at :root: Document has no <main> or <header> landmark",
        "error: heading-sequence at div:nth-of-type(2) > h3: Heading level skipped: <h3> follows <h1>",
    ]


def test_plain_format_empty():
    assert format_report([], "plain") == ""


def test_json_format_fields_and_order():
    data = json.loads(format_report(FINDINGS, "json"))

    assert data == [
        {"rule": "landmark-presence", "severity": "warning",
         "message": "Document has no <main> or <header> landmark", "path": ":root"},
        {"rule": "heading-sequence", "severity": "error",
         "message": "Heading level skipped: <h3> follows <h1>", "path": "div:nth-of-type(2) > h3"},
    ]


def test_json_round_trip():
    """Formatteren naar json en terug lezen geeft dezelfde geordende findings."""
    assert parse_json_report(format_report(FINDINGS, "json")) == FINDINGS


def test_format_is_deterministic():
    assert format_report(list(FINDINGS), "json") == format_report(list(FINDINGS), "json")


def test_unknown_style():
    with pytest.raises(ValueError, match="Unknown report style"):
        format_report(FINDINGS, "xml")


def test_parse_json_report_rejects_objects():
    with pytest.raises(ValueError):
        parse_json_report('{"rule": "x"}')


def test_findings_are_immutable():
    with pytest.raises(Exception):
        FINDINGS[0].message = "changed"


# --- batch summaries ---

ROWS = [
    {"source": "a.html", **FINDINGS[0].to_row()},
    {"source": "a.html", **FINDINGS[1].to_row()},
    {"source": "b.html", **FINDINGS[1].to_row()},
]


def test_summarize_counts_per_rule():
    summary = summarize(ROWS)

    assert list(summary["rule"]) == ["heading-sequence", "landmark-presence"]
    assert list(summary["count"]) == [2, 1]
    assert list(summary["documents"]) == [2, 1]


def test_summarize_empty():
    assert summarize([]).empty


def test_export_csv(tmp_path):
    out = export_csv(ROWS, tmp_path / "reports" / "findings.csv")

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "source,rule,severity,message,path"
    assert len(lines) == 4
