from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


class IssueCategory(str, Enum):
    UNRESOLVED_IMPORT = "unresolved-import"
    NAMING_SIMILARITY = "naming-similarity"
    TYPE_SHAPE_MISMATCH = "type-shape-mismatch"
    CIRCULAR_DEPENDENCY = "circular-dependency"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Issue:
    severity: Severity
    category: IssueCategory
    message: str
    document: str
    line: int | None = None
    suggestion: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(self, "category", IssueCategory(self.category))
        object.__setattr__(self, "message", str(self.message).strip())

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def as_dict(self) -> dict[str, object]:
        return {
            "severity": str(self.severity),
            "category": str(self.category),
            "message": self.message,
            "document": self.document,
            "line": self.line,
            "suggestion": self.suggestion,
        }


def error(category: IssueCategory, message: str, document: str, line: int | None = None, suggestion: str | None = None) -> Issue:
    return Issue(Severity.ERROR, category, message, document, line, suggestion)


def warning(category: IssueCategory, message: str, document: str, line: int | None = None, suggestion: str | None = None) -> Issue:
    return Issue(Severity.WARNING, category, message, document, line, suggestion)
