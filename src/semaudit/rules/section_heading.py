from typing import Iterator

from ..dom.core import ElementBase, HEADING_TAGS, SECTIONING_TAGS
from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity


def _has_own_heading(section: ElementBase) -> bool:
    """
    Looks for a heading among the descendants of `section`, in document order,
    stopping at the first nested sectioning element.
    """
    for node in section.iter_descendants():
        if node.tag in SECTIONING_TAGS:
            return False
        if node.tag in HEADING_TAGS or node.tag == "hgroup":
            return True
    return False


def check_section_heading(doc: HTMLDocument) -> Iterator[RuleHit]:
    """Rule: Every <section> needs a heading of its own."""
    for section in doc.find_all("section"):
        if not _has_own_heading(section):
            yield (
                section,
                "<section> has no heading; use a heading to label it or use a <div> instead",
            )


DEFINITION = RuleDefinition(
    rule_id="section-heading",
    check=check_section_heading,
    default_severity=Severity.WARNING,
    priority=30,
    description="A <section> must contain a heading before any nested sectioning element.",
)
