from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_DOCUMENT, ERR_INTERNAL


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class DocumentReadError(ScriptError):
    """A document could not be read; verification aborts without a report."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read document {path}: {reason}", ERR_DOCUMENT, kind="document_read_error")
        self.path = path
        self.reason = reason
