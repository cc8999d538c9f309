# src/semaudit/dom/builder.py
import logging
from collections import Counter, defaultdict
from typing import Dict, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag, Doctype, UnicodeDammit

from .models import HTMLDocument
from .core import ElementBase, ROOT_TAG, ROOT_PATH
from .registry import DOMRegistry
from .wellformed import check_well_formed
from ..errors import ParseError

logger = logging.getLogger(__name__)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a structured HTMLDocument model.
    Wraps BeautifulSoup; element paths and document positions are assigned here.
    """

    def __init__(self, strict: bool = True):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        DOMRegistry.discover()
        self.strict = strict

    def decode(self, raw: bytes, source: str = "<text>") -> str:
        """
        Decodes raw bytes with BeautifulSoup's encoding detection.
        Raises ParseError when no encoding yields text.
        """
        dammit = UnicodeDammit(raw, is_html=True)
        if dammit.unicode_markup is None:
            raise ParseError("Unable to detect the character encoding of the document", source)
        logger.debug("Decoded %s as %s", source, dammit.original_encoding)
        return dammit.unicode_markup

    def parse_doc(self, html: Union[str, bytes], source: str = "<text>") -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument object.

        Args:
            html: The raw HTML string (bytes are decoded first).
            source: The file path or '<text>', used in error messages.

        Returns:
            HTMLDocument: A structured, read-only representation of the page.

        Raises:
            ParseError: If the markup is not well-formed (strict mode) or undecodable.
        """
        if isinstance(html, bytes):
            html = self.decode(html, source)

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '')

        if self.strict:
            check_well_formed(clean_html, source)

        soup = BeautifulSoup(clean_html, 'html.parser')
        has_doctype = any(isinstance(item, Doctype) for item in soup.contents)

        elements, top_level = self._build_elements(soup)

        root = ElementBase(tag=ROOT_TAG, path=ROOT_PATH, position=-1, children=top_level)
        root.adopt_children()

        logger.debug("Built %d elements from %s", len(elements), source)
        return HTMLDocument(
            source=source,
            has_doctype=has_doctype,
            root=root,
            elements=elements,
        )

    def _build_elements(self, soup: BeautifulSoup) -> Tuple[List[ElementBase], List[ElementBase]]:
        """
        Builds the simplified element tree without recursion, so nesting depth is
        bounded by memory only.

        A pre-order pass numbers every Tag and assigns its path. Elements are then
        created in reverse pre-order, which puts every child before its parent.

        Returns:
            The elements in document order and the top-level elements.
        """
        entries: List[Tuple[Tag, str, int]] = []  # (tag, path, parent position)
        pending = [(child, path, -1) for child, path in reversed(self._child_paths(soup, ""))]
        while pending:
            tag, path, parent_position = pending.pop()
            position = len(entries)
            entries.append((tag, path, parent_position))
            pending.extend(
                (child, child_path, position)
                for child, child_path in reversed(self._child_paths(tag, path))
            )

        elements: List[Optional[ElementBase]] = [None] * len(entries)
        children_of: Dict[int, List[ElementBase]] = defaultdict(list)
        for position in range(len(entries) - 1, -1, -1):
            tag, path, parent_position = entries[position]
            # Siblings were collected last-to-first.
            children = children_of.pop(position, [])
            children.reverse()

            element = self._make_element(tag, children)
            element.path = path
            element.position = position
            element.line = self._line_of(tag)
            element.column = self._column_of(tag)
            element.adopt_children()

            elements[position] = element
            children_of[parent_position].append(element)

        top_level = children_of.pop(-1, [])
        top_level.reverse()
        return elements, top_level

    @staticmethod
    def _child_paths(tag: Tag, parent_path: str) -> List[Tuple[Tag, str]]:
        """Pairs every Tag child with its path; same-tag siblings get :nth-of-type(n)."""
        child_tags = [child for child in tag.children if isinstance(child, Tag)]
        totals = Counter(child.name for child in child_tags)
        seen: Counter = Counter()

        paired = []
        for child in child_tags:
            seen[child.name] += 1
            segment = child.name
            if totals[child.name] > 1:
                segment = f"{child.name}:nth-of-type({seen[child.name]})"
            paired.append((child, f"{parent_path} > {segment}" if parent_path else segment))
        return paired

    @staticmethod
    def _make_element(tag: Tag, children: List[ElementBase]) -> ElementBase:
        # Retrieve specific parser from registry if available
        parser = DOMRegistry.get_parser(tag.name)
        if parser:
            return parser(tag, children)
        # Fallback for generic elements
        text = tag.get_text(" ", strip=True)[:50]
        return ElementBase(tag=tag.name, attrs=dict(tag.attrs), text=text, children=children)

    @staticmethod
    def _line_of(tag: Tag) -> Optional[int]:
        return getattr(tag, "sourceline", None)

    @staticmethod
    def _column_of(tag: Tag) -> Optional[int]:
        pos = getattr(tag, "sourcepos", None)
        return pos + 1 if pos is not None else None
