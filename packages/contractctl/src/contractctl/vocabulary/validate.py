from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core.config import VerifierConfig
from ..core.context import RunContext
from ..core.logging import log_event
from ..extract.model import Declaration, DeclarationKind, Document
from ..extract.parser import parse_document
from .schema import DEFAULT_SCHEMA, CommonExpectation, DomainExpectation, VocabularySchema


@dataclass(frozen=True)
class ItemResult:
    label: str
    expected: tuple[str, ...]
    found: bool
    actual: str | None = None
    suggestion: str | None = None

    @property
    def missing_label(self) -> str:
        return " or ".join(self.expected)

    def as_dict(self) -> dict[str, object]:
        return {
            "label": self.label,
            "expected": list(self.expected),
            "found": self.found,
            "actual": self.actual,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class DomainResult:
    domain: str
    items: tuple[ItemResult, ...]


@dataclass(frozen=True)
class VocabularySummary:
    total_expected: int
    total_found: int
    missing: tuple[str, ...]
    coverage: float


@dataclass(frozen=True)
class VocabularyResult:
    primitives: str
    domains: tuple[DomainResult, ...]
    common: tuple[ItemResult, ...]
    summary: VocabularySummary

    @property
    def passed(self) -> bool:
        return not self.summary.missing


def describe(declaration: Declaration) -> str:
    if declaration.kind is DeclarationKind.ALIAS:
        return declaration.type_expression
    if declaration.kind is DeclarationKind.RECORD:
        return f"record with {len(declaration.fields)} fields"
    if declaration.kind is DeclarationKind.ENUMERATION:
        return f"enumeration with values: {', '.join(declaration.field_names)}"
    return str(declaration.kind)


def _lookup(document: Document, names: Sequence[str], kind: DeclarationKind) -> Declaration | None:
    for name in names:
        for declaration in document.declarations:
            if declaration.name == name and declaration.kind is kind:
                return declaration
    return None


def _domain_item(document: Document, domain: str, expectation: DomainExpectation) -> ItemResult:
    names = expectation.names(domain)
    hit = _lookup(document, names, expectation.kind)
    if hit is None:
        return ItemResult(expectation.label, names, False, suggestion=expectation.suggest(domain))
    return ItemResult(expectation.label, names, True, actual=describe(hit))


def _common_item(document: Document, expectation: CommonExpectation) -> ItemResult:
    hit = _lookup(document, (expectation.name,), expectation.kind)
    if hit is None:
        return ItemResult(expectation.name, (expectation.name,), False, suggestion=expectation.suggestion)
    return ItemResult(expectation.name, (expectation.name,), True, actual=describe(hit))


def validate_vocabulary_document(
    document: Document,
    domains: Sequence[str],
    schema: VocabularySchema = DEFAULT_SCHEMA,
) -> VocabularyResult:
    domain_results: list[DomainResult] = []
    missing: list[str] = []
    expected = 0
    found = 0
    for domain in domains:
        items = tuple(_domain_item(document, domain, expectation) for expectation in schema.domain_items)
        domain_results.append(DomainResult(domain=domain, items=items))
        for item in items:
            expected += 1
            if item.found:
                found += 1
            else:
                missing.append(item.missing_label)
    common = tuple(_common_item(document, expectation) for expectation in schema.common_items)
    for item in common:
        expected += 1
        if item.found:
            found += 1
        else:
            missing.append(item.missing_label)
    coverage = (found / expected) * 100 if expected else 100.0
    return VocabularyResult(
        primitives=document.identifier,
        domains=tuple(domain_results),
        common=common,
        summary=VocabularySummary(total_expected=expected, total_found=found, missing=tuple(missing), coverage=coverage),
    )


def parse_domains(raw: str) -> list[str]:
    return list(dict.fromkeys(item.strip() for item in raw.split(",") if item.strip()))


def validate_vocabulary(
    primitives_path: str | Path,
    domains: Sequence[str],
    *,
    schema: VocabularySchema = DEFAULT_SCHEMA,
    config: VerifierConfig | None = None,
    ctx: RunContext | None = None,
) -> VocabularyResult:
    document = parse_document(primitives_path, config=config or (ctx.config if ctx is not None else None))
    result = validate_vocabulary_document(document, domains, schema)
    log_event(
        ctx,
        "info",
        "vocabulary",
        "validated",
        primitives=document.identifier,
        domains=len(result.domains),
        missing=len(result.summary.missing),
        coverage=f"{result.summary.coverage:.1f}",
    )
    return result
