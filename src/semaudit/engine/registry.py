# src/semaudit/engine/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional

from .core import RuleDefinition

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry for audit rules.

    Dynamically discovers rule modules from the 'semaudit.rules' package.
    Every module exposing a `DEFINITION` (instance of `RuleDefinition`) is
    registered; rules are kept sorted by priority.
    """

    _rules: Dict[str, RuleDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        if cls._loaded:
            return

        import semaudit.rules as rules_pkg

        for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
            full_name = f"semaudit.rules.{name}"
            try:
                module = importlib.import_module(full_name)
            except ImportError as e:
                logger.error("Error loading rule module %s: %s", name, e)
                continue

            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, RuleDefinition):
                cls.register(defn)

        cls._loaded = True

    @classmethod
    def register(cls, definition: RuleDefinition) -> None:
        """Registers a rule. A second rule with the same id replaces the first."""
        if definition.rule_id in cls._rules:
            logger.warning("Rule '%s' registered twice; keeping the latest.", definition.rule_id)
        cls._rules[definition.rule_id] = definition
        logger.debug("Rule loaded: %s", definition.rule_id)

    @classmethod
    def unregister(cls, rule_id: str) -> None:
        cls._rules.pop(rule_id, None)

    @classmethod
    def get(cls, rule_id: str) -> Optional[RuleDefinition]:
        cls.discover()
        return cls._rules.get(rule_id)

    @classmethod
    def get_all_rules(cls) -> List[RuleDefinition]:
        """Returns all registered rules ordered by priority, then id."""
        cls.discover()
        return sorted(cls._rules.values(), key=lambda r: (r.priority, r.rule_id))

    @classmethod
    def get_all_rule_ids(cls) -> List[str]:
        return [rule.rule_id for rule in cls.get_all_rules()]
