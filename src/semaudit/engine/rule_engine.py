# src/semaudit/engine/rule_engine.py
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

from .core import RuleDefinition
from .registry import RuleRegistry
from ..dom.models import HTMLDocument
from ..errors import RuleError
from ..model import Finding, Severity

logger = logging.getLogger(__name__)


class EvaluationResult(NamedTuple):
    findings: List[Finding]
    rule_errors: List[RuleError]


class RuleEngine:
    """
    Runs every enabled rule once against a parsed HTMLDocument.

    Rules run independently: each one sees only the document, a failing rule
    is logged and dropped from the report, and the combined findings are
    ordered by document position, then rule priority.
    """

    def __init__(
            self,
            rule_settings: Optional[Dict[str, Dict[str, Any]]] = None,
            rules: Optional[Sequence[RuleDefinition]] = None,
    ):
        """
        Args:
            rule_settings: Per-rule overrides, e.g. {"section-heading": {"enabled": False}}
                           or {"landmark-presence": {"severity": "error"}}.
            rules: Explicit rule set; defaults to everything in the RuleRegistry.
        """
        self.rule_settings = rule_settings or {}
        candidates = list(rules) if rules is not None else RuleRegistry.get_all_rules()
        candidates.sort(key=lambda r: (r.priority, r.rule_id))

        self.rules: List[RuleDefinition] = [r for r in candidates if self._is_enabled(r)]
        self._severities: Dict[str, Severity] = {r.rule_id: self._severity_for(r) for r in self.rules}

    def _settings_for(self, rule: RuleDefinition) -> Dict[str, Any]:
        return self.rule_settings.get(rule.rule_id) or {}

    def _is_enabled(self, rule: RuleDefinition) -> bool:
        return bool(self._settings_for(rule).get("enabled", True))

    def _severity_for(self, rule: RuleDefinition) -> Severity:
        override = self._settings_for(rule).get("severity")
        if not override:
            return rule.default_severity
        try:
            return Severity(str(override).lower())
        except ValueError:
            logger.warning(
                "Ignoring unknown severity '%s' for rule '%s'; using '%s'.",
                override, rule.rule_id, rule.default_severity.value
            )
            return rule.default_severity

    def evaluate(self, document: HTMLDocument) -> List[Finding]:
        """Returns the ordered, de-duplicated findings for `document`."""
        return self.run(document).findings

    def run(self, document: HTMLDocument) -> EvaluationResult:
        """Like `evaluate`, but also returns the errors of rules that failed."""
        ranked: List[Tuple[int, int, Finding]] = []
        rule_errors: List[RuleError] = []

        for rule in self.rules:
            try:
                ranked.extend(self._apply(rule, document))
            except Exception as exc:
                error = exc if isinstance(exc, RuleError) else RuleError(rule.rule_id, exc)
                logger.error("%s (excluded from report)", error, exc_info=error.cause)
                rule_errors.append(error)

        ranked.sort(key=lambda item: (item[0], item[1]))

        findings: List[Finding] = []
        seen: Set[Tuple[str, str]] = set()
        for _, _, finding in ranked:
            key = (finding.rule_id, finding.path)
            if key in seen:
                continue
            seen.add(key)
            findings.append(finding)

        logger.debug(
            "Evaluated %d rules on %s: %d findings, %d rule errors",
            len(self.rules), document.source, len(findings), len(rule_errors)
        )
        return EvaluationResult(findings, rule_errors)

    def _apply(self, rule: RuleDefinition, document: HTMLDocument) -> List[Tuple[int, int, Finding]]:
        """Runs a single rule; its output is only kept if every hit is valid."""
        severity = self._severities[rule.rule_id]
        results = []

        for element, message in rule.check(document):
            # Every finding must point at an element of this very document.
            if element is None or document.find_by_path(element.path) is not element:
                where = getattr(element, "path", None)
                raise RuleError(rule.rule_id, LookupError(f"finding references unknown element path {where!r}"))

            results.append((
                element.position,
                rule.priority,
                Finding(rule_id=rule.rule_id, severity=severity, message=message, path=element.path),
            ))

        return results
