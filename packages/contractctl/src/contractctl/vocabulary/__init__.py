"""Completeness checks for the shared vocabulary document."""

from __future__ import annotations

from .report import build_vocabulary_payload, render_vocabulary_text
from .schema import DEFAULT_SCHEMA, CommonExpectation, DomainExpectation, VocabularySchema
from .validate import (
    DomainResult,
    ItemResult,
    VocabularyResult,
    VocabularySummary,
    parse_domains,
    validate_vocabulary,
    validate_vocabulary_document,
)

__all__ = [
    "DEFAULT_SCHEMA",
    "CommonExpectation",
    "DomainExpectation",
    "DomainResult",
    "ItemResult",
    "VocabularyResult",
    "VocabularySchema",
    "VocabularySummary",
    "build_vocabulary_payload",
    "parse_domains",
    "render_vocabulary_text",
    "validate_vocabulary",
    "validate_vocabulary_document",
]
