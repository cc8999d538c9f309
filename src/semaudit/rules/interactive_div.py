from typing import Iterator, Optional

from ..dom.models import HTMLDocument
from ..engine.core import RuleDefinition, RuleHit
from ..model import Severity

CLICK_HANDLERS = ("onclick", "ondblclick")

NATIVE_FOR_ROLE = {
    "button": "<button>",
    "link": "<a href>",
}


def _widget_role(value: Optional[str]) -> Optional[str]:
    """Returns the first token of a space-separated ARIA role list that names a native control."""
    for token in (value or "").lower().split():
        if token in NATIVE_FOR_ROLE:
            return token
    return None


def check_interactive_div(doc: HTMLDocument) -> Iterator[RuleHit]:
    """
    Rule: Generic containers must not be made interactive.
    A <div>/<span> with a click handler or role="button"/"link" should be the native element.
    """
    for node in doc.find_all("div", "span"):
        role = _widget_role(node.get_attr("role"))

        if role:
            yield (
                node,
                f'<{node.tag} role="{role}"> imitates a native control; use {NATIVE_FOR_ROLE[role]} instead',
            )
            continue

        handlers = [name for name in CLICK_HANDLERS if name in node.attrs]
        if handlers:
            yield (
                node,
                f"<{node.tag}> has a click handler ({', '.join(handlers)}); "
                f"use <button> for actions or <a href> for navigation",
            )


DEFINITION = RuleDefinition(
    rule_id="interactive-div",
    check=check_interactive_div,
    default_severity=Severity.ERROR,
    priority=40,
    description='No <div>/<span> with click handlers or role="button"/"link".',
)
