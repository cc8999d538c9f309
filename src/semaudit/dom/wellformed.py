# src/semaudit/dom/wellformed.py
import logging
from html.parser import HTMLParser
from typing import List, Tuple

from ..errors import ParseError

logger = logging.getLogger(__name__)

VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose end tag HTML allows to be omitted.
OPTIONAL_END_TAGS = frozenset({
    "html", "head", "body", "p", "li", "dt", "dd", "option", "optgroup",
    "colgroup", "caption", "thead", "tbody", "tfoot", "tr", "td", "th",
    "rb", "rt", "rtc", "rp",
})


class TagBalanceChecker(HTMLParser):
    """
    Tokenizes markup with the same tokenizer BeautifulSoup's 'html.parser'
    builder uses and verifies that start and end tags balance.

    BeautifulSoup repairs broken markup silently, so this pass runs first and
    raises ParseError on stray end tags, mis-nested elements and elements
    with a required end tag that are never closed.
    """

    def __init__(self, source: str = "<text>"):
        super().__init__(convert_charrefs=True)
        self.source = source
        self._stack: List[Tuple[str, int, int]] = []

    def check(self, markup: str) -> None:
        self._stack = []
        self.reset()
        self.feed(markup)
        self.close()

        # Anything left open must be allowed to end implicitly.
        for tag, line, col in reversed(self._stack):
            if tag not in OPTIONAL_END_TAGS:
                raise ParseError(f"Unclosed element <{tag}>", self.source, line, col)

    def _location(self) -> Tuple[int, int]:
        line, offset = self.getpos()
        return line, offset + 1

    def handle_starttag(self, tag, attrs):
        if tag in VOID_TAGS:
            return
        line, col = self._location()
        self._stack.append((tag, line, col))

    def handle_startendtag(self, tag, attrs):
        # <div/> style self-closing tags open and close in one token.
        return

    def handle_endtag(self, tag):
        line, col = self._location()

        if tag in VOID_TAGS:
            # </br> and friends are tolerated by every HTML parser.
            return

        if not any(open_tag == tag for open_tag, _, _ in self._stack):
            raise ParseError(f"Unexpected end tag </{tag}> with no open <{tag}>", self.source, line, col)

        # Implicitly close elements whose end tag is optional.
        while self._stack and self._stack[-1][0] != tag:
            open_tag, open_line, open_col = self._stack[-1]
            if open_tag not in OPTIONAL_END_TAGS:
                raise ParseError(
                    f"End tag </{tag}> closes <{tag}> while <{open_tag}> "
                    f"(opened at {open_line}:{open_col}) is still open",
                    self.source, line, col
                )
            self._stack.pop()

        self._stack.pop()


def check_well_formed(markup: str, source: str = "<text>") -> None:
    """Raises ParseError if `markup` is not well-formed HTML."""
    TagBalanceChecker(source).check(markup)
    logger.debug("Markup from %s is well-formed.", source)
