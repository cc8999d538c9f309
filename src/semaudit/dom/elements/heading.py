from typing import List
from bs4 import Tag
from ..core import ElementBase, ElementDefinition, HEADING_TAGS


class HeadingElement(ElementBase):
    """
    Model representing a heading element (h1-h6).
    Stores the heading level for structural analysis.
    """
    level: int


def parse_heading(tag: Tag, children: List[ElementBase]) -> HeadingElement:
    """
    Parses heading tags and determines their hierarchy level (e.g., h1 -> 1).
    """
    try:
        # Extract level from tag name (e.g., 'h1' -> 1)
        level = int(tag.name[1])
    except (ValueError, IndexError, TypeError):
        level = 0

    return HeadingElement(
        tag=tag.name,
        attrs=dict(tag.attrs),
        text=tag.get_text(" ", strip=True)[:50],
        children=children,
        level=level
    )


DEFINITION = ElementDefinition(
    tag_names=sorted(HEADING_TAGS),
    model=HeadingElement,
    parser=parse_heading,
)
