from typing import Callable, Iterable, Tuple

from ..dom.core import ElementBase
from ..dom.models import HTMLDocument
from ..model import Severity


# What a rule check yields: (offending element, message)
RuleHit = Tuple[ElementBase, str]

RuleCheck = Callable[[HTMLDocument], Iterable[RuleHit]]


class RuleDefinition:
    """
    Binds a rule id to its check function and metadata.

    Rules are plain functions over a whole HTMLDocument; they are added by
    dropping a module exposing a `DEFINITION` into `semaudit.rules`,
    not by subclassing.
    """

    def __init__(
            self,
            rule_id: str,
            check: RuleCheck,
            default_severity: Severity,
            priority: int,
            description: str = "",
    ):
        self.rule_id = rule_id
        self.check = check
        self.default_severity = Severity(default_severity)
        self.priority = priority
        self.description = description

    def __repr__(self) -> str:
        return f"RuleDefinition({self.rule_id!r}, priority={self.priority})"
