# src/semaudit_cli/core/handlers/rules_handler.py
import argparse

from semaudit.engine.registry import RuleRegistry


def handle_rules(parsed_args: argparse.Namespace, rule_settings: dict) -> int:
    """Handler for 'rules': lists every registered rule and its effective state."""
    rules = RuleRegistry.get_all_rules()
    width = max((len(r.rule_id) for r in rules), default=0)

    for rule in rules:
        settings = rule_settings.get(rule.rule_id, {})
        severity = settings.get("severity") or rule.default_severity.value
        state = "" if settings.get("enabled", True) else " (disabled)"
        print(f"{rule.rule_id.ljust(width)}  {severity:<7}  {rule.description}{state}")
    return 0
