# src/semaudit/services/analysis_service.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..dom.builder import DOMBuilder
from ..dom.models import HTMLDocument
from ..engine.rule_engine import EvaluationResult, RuleEngine
from ..errors import SourceReadError

logger = logging.getLogger(__name__)

TEXT_SOURCE = "<text>"


def read_source(path: Union[str, Path]) -> bytes:
    """Reads a document from disk; any OS-level failure becomes SourceReadError."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(str(path), e) from e


def parse_source(
        text: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
        strict: bool = True,
) -> HTMLDocument:
    """
    Builds the HTMLDocument for exactly one of `text` or `path`.

    Raises:
        ParseError: malformed or undecodable markup.
        SourceReadError: `path` cannot be read.
    """
    if (text is None) == (path is None):
        raise ValueError("Provide exactly one of 'text' or 'path'.")

    builder = DOMBuilder(strict=strict)
    if path is not None:
        return builder.parse_doc(read_source(path), source=str(path))
    return builder.parse_doc(text, source=TEXT_SOURCE)


def analyze(
        text: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
        rule_settings: Optional[Dict[str, Dict[str, Any]]] = None,
        strict: bool = True,
) -> EvaluationResult:
    """Parses one document and runs the rule engine over it."""
    doc = parse_source(text=text, path=path, strict=strict)
    return RuleEngine(rule_settings).run(doc)


def analyze_text(text: str, **kwargs):
    """Findings for an in-memory document."""
    return analyze(text=text, **kwargs).findings


def analyze_path(path: Union[str, Path], **kwargs):
    """Findings for a document on disk."""
    return analyze(path=path, **kwargs).findings
