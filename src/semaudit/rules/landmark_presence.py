from typing import Iterator

from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity


def check_landmark_presence(doc: HTMLDocument) -> Iterator[RuleHit]:
    """Rule: A page needs at least a <main> or a <header> landmark."""
    if next(doc.find_all("main", "header"), None) is None:
        yield (
            doc.root,
            "Document has no <main> or <header> landmark",
        )


DEFINITION = RuleDefinition(
    rule_id="landmark-presence",
    check=check_landmark_presence,
    default_severity=Severity.WARNING,
    priority=50,
    description="The document must have a <main> or <header> landmark.",
)
