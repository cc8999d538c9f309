from typing import Iterator, Optional

from ..dom.core import HEADING_TAGS
from ..dom.elements.heading import HeadingElement
from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity


def check_heading_sequence(doc: HTMLDocument) -> Iterator[RuleHit]:
    """
    Rule: Heading levels must not skip when going deeper.
    h1 -> h2 -> h3 is fine, h1 -> h3 is not. Going back up (h4 -> h2) is always allowed.
    """
    previous: Optional[HeadingElement] = None

    for heading in doc.find_all(*HEADING_TAGS):
        if not isinstance(heading, HeadingElement):
            continue
        if previous is not None and heading.level > previous.level + 1:
            yield (
                heading,
                f"Heading level skipped: <{heading.tag}> follows <{previous.tag}>; "
                f"expected <h{previous.level + 1}> or higher",
            )
        previous = heading


DEFINITION = RuleDefinition(
    rule_id="heading-sequence",
    check=check_heading_sequence,
    default_severity=Severity.ERROR,
    priority=20,
    description="Heading levels must not increase by more than one step.",
)
