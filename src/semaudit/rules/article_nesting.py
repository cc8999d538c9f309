from typing import Iterator

from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity


def check_article_nesting(doc: HTMLDocument) -> Iterator[RuleHit]:
    """Rule: <article> is flow content and cannot sit directly inside a <p>."""
    for article in doc.find_all("article"):
        parent = article.parent
        if parent is not None and parent.tag == "p":
            yield (
                article,
                "<article> is nested directly inside <p>",
            )


DEFINITION = RuleDefinition(
    rule_id="article-nesting",
    check=check_article_nesting,
    default_severity=Severity.ERROR,
    priority=60,
    description="<article> must not be a direct child of <p>.",
)
