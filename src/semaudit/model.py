from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Finding(BaseModel):
    """
    A single rule violation.
    Produced by exactly one rule and immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    rule_id: str  # e.g. 'single-main', 'heading-sequence'
    severity: Severity
    message: str  # Human-readable description of the violation
    path: str  # Element path in the source document, ':root' for document-level findings

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_row(self) -> Dict[str, Any]:
        """Flat, JSON-ready representation used by the report formatter."""
        return {
            "rule": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Finding":
        return cls(
            rule_id=row["rule"],
            severity=Severity(row["severity"]),
            message=row["message"],
            path=row["path"],
        )
