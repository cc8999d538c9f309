# src/semaudit/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Callable, Optional

from .core import ElementDefinition

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for specialised element parsers.

    Dynamically discovers ElementDefinition modules from the
    'semaudit.dom.elements' package. Tags without a registered parser
    fall back to the generic ElementBase model in the DOMBuilder.
    """

    _parsers: Dict[str, Callable] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers the parser of every module in `semaudit.dom.elements`
        that exposes a `DEFINITION` attribute (instance of `ElementDefinition`).
        """
        if cls._loaded:
            return

        import semaudit.dom.elements as elements_pkg

        for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
            full_name = f"semaudit.dom.elements.{name}"
            try:
                module = importlib.import_module(full_name)
            except ImportError as e:
                logger.error("Error loading element module %s: %s", name, e)
                continue

            defn = getattr(module, "DEFINITION", None)
            if not isinstance(defn, ElementDefinition):
                continue

            for tag_name in defn.tag_names:
                cls._parsers[tag_name] = defn.parser
            logger.debug("Element parser loaded: %s", ", ".join(defn.tag_names))

        cls._loaded = True

    @classmethod
    def get_parser(cls, tag_name: str) -> Optional[Callable]:
        """Retrieves the parser function for a specific HTML tag."""
        return cls._parsers.get(tag_name)
