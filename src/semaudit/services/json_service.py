import json
from typing import Any


def to_json(data: Any, indent: int = 2, ensure_ascii: bool = False) -> str:
    """
    Serializes report payloads (lists of finding rows, batch summaries) to JSON.
    Non-ASCII text from the audited pages is kept as-is unless `ensure_ascii` is set.
    """
    return json.dumps(data, ensure_ascii=ensure_ascii, indent=indent)


def from_json(text: str) -> Any:
    """Parse a JSON string; raises ValueError on malformed input."""
    return json.loads(text)
