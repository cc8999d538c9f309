# tests/core/test_cli_app.py
import io
import json

import pytest

from semaudit.services.report_service import parse_json_report
from semaudit_cli.app import main


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<div><h1>A</h1></div><div><h3>B</h3></div>", encoding="utf-8")
    return path


def test_check_plain(page, capsys):
    """Test 'check <pad>'."""
    assert main(["check", str(page)]) == 1

    out = capsys.readouterr().out
    assert "error: heading-sequence at div:nth-of-type(2) > h3:" in out
    assert "warning: landmark-presence at :root:" in out


def test_check_json(page, capsys):
    assert main(["check", str(page), "--format", "json"]) == 1

    findings = parse_json_report(capsys.readouterr().out)
    assert [f.rule_id for f in findings] == ["landmark-presence", "heading-sequence"]


def test_check_stdin(monkeypatch, capsys):
    """Test 'check -' met invoer via stdin."""
    monkeypatch.setattr("sys.stdin", io.StringIO("<main>1</main><main>2</main>"))

    assert main(["check", "-"]) == 1
    assert "single-main" in capsys.readouterr().out


def test_disable_rule(page, capsys):
    assert main(["--disable", "heading-sequence", "check", str(page)]) == 0
    assert "heading-sequence" not in capsys.readouterr().out


def test_config_file(page, tmp_path, capsys):
    settings = tmp_path / "strict.json"
    settings.write_text(json.dumps({"rules": {"heading-sequence": {"severity": "warning"}}}))

    try:
        assert main(["--config", str(settings), "check", str(page)]) == 0
    finally:
        from semaudit_cli.core.managers.config_manager import config_manager
        config_manager.reset()


def test_missing_config_file(page, tmp_path):
    assert main(["--config", str(tmp_path / "nope.json"), "check", str(page)]) == 2


def test_unreadable_source(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.html")]) == 2
    assert "Cannot read" in capsys.readouterr().err


def test_rules_listing(capsys):
    assert main(["rules"]) == 0

    out = capsys.readouterr().out
    for rule_id in ("single-main", "heading-sequence", "section-heading",
                    "interactive-div", "landmark-presence", "article-nesting"):
        assert rule_id in out


def test_batch_with_summary_and_export(page, tmp_path, capsys):
    clean = tmp_path / "clean.html"
    clean.write_text("<header></header><main></main>", encoding="utf-8")
    export = tmp_path / "out.csv"

    code = main(["batch", str(page), str(clean), "--summary", "--no-progress", "--export", str(export)])

    assert code == 1
    out = capsys.readouterr().out
    assert f"== {page}" in out and f"== {clean}" in out
    assert "heading-sequence" in out
    assert export.exists()


def test_usage_error_exits_with_2():
    assert main(["check"]) == 2
