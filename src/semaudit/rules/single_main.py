from typing import Iterator

from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity


def check_single_main(doc: HTMLDocument) -> Iterator[RuleHit]:
    """
    Rule: A page has exactly one <main> landmark.
    Reports once, at the first surplus <main>, however many there are.
    """
    mains = list(doc.find_all("main"))
    if len(mains) > 1:
        yield (
            mains[1],
            f"Document contains {len(mains)} <main> elements; only one main landmark is allowed",
        )


DEFINITION = RuleDefinition(
    rule_id="single-main",
    check=check_single_main,
    default_severity=Severity.ERROR,
    priority=10,
    description="Only one <main> landmark per page.",
)
