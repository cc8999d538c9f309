from typing import Dict, Any, List, Callable, Type, Optional, Iterator, Sequence
from pydantic import BaseModel, Field, PrivateAttr
from bs4 import Tag


ROOT_TAG = "#document"
ROOT_PATH = ":root"

# Elements that establish their own outline scope.
SECTIONING_TAGS = frozenset({"article", "section", "nav", "aside"})
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


class ElementBase(BaseModel):
    """
    Base data model representing a generic DOM element in the simplified tree.

    The parent is kept as a private back-reference so that it is neither
    validated nor serialized; only `children` is an ownership edge.
    """
    tag: str
    attrs: Dict[str, Any] = Field(default_factory=dict)
    text: Optional[str] = ""
    children: List['ElementBase'] = Field(default_factory=list)
    path: str = ""
    position: int = -1
    line: Optional[int] = None
    column: Optional[int] = None

    _parent: Optional['ElementBase'] = PrivateAttr(default=None)

    # Nodes compare by identity; field-wise comparison would recurse through _parent.
    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    @property
    def parent(self) -> Optional['ElementBase']:
        return self._parent

    @property
    def is_root(self) -> bool:
        return self.tag == ROOT_TAG

    @property
    def is_empty(self) -> bool:
        """Returns True if the element contains no text and no children."""
        return not self.text and not self.children

    def adopt_children(self) -> None:
        """Points the back-reference of every direct child at this element."""
        for child in self.children:
            child._parent = self

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Returns an attribute as a string; multi-valued attributes (class) are space-joined."""
        value = self.attrs.get(name, default)
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return value

    def iter_descendants(self) -> Iterator['ElementBase']:
        """Yields all descendants in document (pre-order) order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class ElementDefinition:
    """
    Configuration object binding one or more HTML tags to a model and a parser.
    """

    def __init__(
            self,
            tag_names: Sequence[str],
            model: Type[ElementBase],
            parser: Callable[[Tag, List[ElementBase]], ElementBase],
    ):
        self.tag_names = list(tag_names)
        self.model = model
        self.parser = parser
