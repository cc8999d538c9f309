# src/semaudit/dom/models.py
from typing import Any, Dict, Iterator, List, Optional
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from .core import ElementBase, ROOT_PATH


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    The root is a pseudo element ('#document', path ':root') whose children are
    the top-level elements of the input. `elements` lists every real element in
    document order, so `elements[i].position == i`.
    The model is frozen: one analysis run owns it and rules only read it.
    """
    model_config = ConfigDict(frozen=True)

    source: str = "<text>"
    has_doctype: bool = False
    root: ElementBase
    elements: List[ElementBase] = Field(default_factory=list)

    _by_path: Dict[str, ElementBase] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context: Any, /) -> None:
        index = {ROOT_PATH: self.root}
        for element in self.elements:
            index[element.path] = element
        self._by_path = index

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def find_by_path(self, path: str) -> Optional[ElementBase]:
        """Resolves an element path back to its element (':root' gives the root)."""
        return self._by_path.get(path)

    def has_path(self, path: str) -> bool:
        return path in self._by_path

    def find_all(self, *tags: str) -> Iterator[ElementBase]:
        """Yields the elements with one of the given tag names in document order."""
        wanted = set(tags)
        return (el for el in self.elements if el.tag in wanted)
