# tests/auditor/test_rule_engine.py
import logging

import pytest

from semaudit.dom.builder import DOMBuilder
from semaudit.engine.core import RuleDefinition
from semaudit.engine.registry import RuleRegistry
from semaudit.engine.rule_engine import RuleEngine
from semaudit.model import Severity
from semaudit.rules import single_main, heading_sequence


@pytest.fixture
def builder():
    return DOMBuilder()


def broken_check(doc):
    raise RuntimeError("boom")


BROKEN = RuleDefinition("broken", broken_check, Severity.ERROR, priority=1)


def test_registry_discovers_all_rules():
    """Alle regels uit semaudit.rules worden gevonden, gesorteerd op prioriteit."""
    assert RuleRegistry.get_all_rule_ids() == [
        "single-main",
        "heading-sequence",
        "section-heading",
        "interactive-div",
        "landmark-presence",
        "article-nesting",
    ]


def test_findings_ordered_by_position_then_priority(builder):
    doc = builder.parse_doc('<div onclick="f()"></div><h1>a</h1><h3>b</h3>')
    findings = RuleEngine().evaluate(doc)

    assert [(f.rule_id, f.path) for f in findings] == [
        ("landmark-presence", ":root"),
        ("interactive-div", "div"),
        ("heading-sequence", "h3"),
    ]


def test_same_element_ordered_by_rule_priority(builder):
    """Op hetzelfde element komt de regel met de laagste prioriteit eerst."""
    doc = builder.parse_doc("<main><h1>a</h1><section><p>x</p></section></main>")
    first = RuleDefinition("z-first", lambda d: [(d.find_by_path("main > section"), "a")], Severity.WARNING, 0)
    engine = RuleEngine(rules=RuleRegistry.get_all_rules() + [first])

    paths = [(f.rule_id, f.path) for f in engine.evaluate(doc)]
    assert paths.index(("z-first", "main > section")) < paths.index(("section-heading", "main > section"))


def test_duplicate_findings_are_removed(builder):
    doc = builder.parse_doc("<main></main>")
    twice = RuleDefinition(
        "twice",
        lambda d: [(d.elements[0], "first"), (d.elements[0], "second")],
        Severity.WARNING,
        priority=5,
    )
    findings = RuleEngine(rules=[twice]).evaluate(doc)

    assert len(findings) == 1
    assert findings[0].message == "first"


def test_broken_rule_is_isolated(builder, caplog):
    """Eén kapotte regel mag de andere regels niet tegenhouden."""
    doc = builder.parse_doc("<main>1</main><main>2</main>")
    engine = RuleEngine(rules=[BROKEN, single_main.DEFINITION])

    with caplog.at_level(logging.ERROR):
        result = engine.run(doc)

    assert [f.rule_id for f in result.findings] == ["single-main"]
    assert [e.rule_id for e in result.rule_errors] == ["broken"]
    assert isinstance(result.rule_errors[0].cause, RuntimeError)
    assert "broken" in caplog.text


def test_rule_pointing_outside_document_is_rejected(builder):
    other = builder.parse_doc("<main><h1>x</h1></main>")
    doc = builder.parse_doc("<main><h1>x</h1></main>")
    foreign = RuleDefinition("foreign", lambda d: [(other.elements[1], "elsewhere")], Severity.ERROR, 1)

    result = RuleEngine(rules=[foreign, heading_sequence.DEFINITION]).run(doc)

    assert result.findings == []
    assert [e.rule_id for e in result.rule_errors] == ["foreign"]


def test_adding_a_rule_does_not_change_other_output(builder):
    doc = builder.parse_doc("<main><h1>a</h1><h3>b</h3></main><main></main>")
    base = RuleEngine(rules=[single_main.DEFINITION, heading_sequence.DEFINITION]).evaluate(doc)
    extra = RuleDefinition("extra", lambda d: [(d.root, "extra")], Severity.WARNING, priority=99)
    extended = RuleEngine(rules=[single_main.DEFINITION, heading_sequence.DEFINITION, extra]).evaluate(doc)

    assert [f for f in extended if f.rule_id != "extra"] == base


def test_evaluate_is_idempotent(builder):
    doc = builder.parse_doc(
        '<div role="button"></div><section><p>x</p></section><h2>a</h2><h5>b</h5><main></main><main></main>'
    )
    engine = RuleEngine()

    first = engine.evaluate(doc)
    second = engine.evaluate(doc)

    assert first == second
    assert len(first) == 4


def test_engine_does_not_mutate_document(builder):
    doc = builder.parse_doc("<main><section><h2>T</h2></section></main>")
    before = doc.model_dump()

    RuleEngine().evaluate(doc)

    assert doc.model_dump() == before


def test_rule_settings_disable_and_override(builder):
    doc = builder.parse_doc("<div><p>x</p></div><section></section>")
    engine = RuleEngine({
        "landmark-presence": {"severity": "error"},
        "section-heading": {"enabled": False},
    })

    findings = engine.evaluate(doc)

    assert [(f.rule_id, f.severity) for f in findings] == [("landmark-presence", Severity.ERROR)]


def test_unknown_severity_override_falls_back(builder):
    engine = RuleEngine({"landmark-presence": {"severity": "fatal"}})
    findings = engine.evaluate(builder.parse_doc(""))
    assert findings[0].severity == Severity.WARNING
