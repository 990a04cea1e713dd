"""Best-effort extraction of declarations and imports from contract documents."""

from __future__ import annotations

from .declarations import extract_declarations, scan_region
from .fences import CodeRegion, code_regions, split_document
from .imports import extract_imports
from .model import (
    ApiRoute,
    Declaration,
    DeclarationKind,
    Document,
    Field,
    ImportRef,
    Parameter,
    ServiceMethod,
    SourceLocation,
)
from .parser import parse_document, parse_text

__all__ = [
    "ApiRoute",
    "CodeRegion",
    "Declaration",
    "DeclarationKind",
    "Document",
    "Field",
    "ImportRef",
    "Parameter",
    "ServiceMethod",
    "SourceLocation",
    "code_regions",
    "extract_declarations",
    "extract_imports",
    "parse_document",
    "parse_text",
    "scan_region",
    "split_document",
]
