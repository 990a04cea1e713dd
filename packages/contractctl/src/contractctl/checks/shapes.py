"""Structural comparison of same-named records across documents."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.config import VerifierConfig, default_config
from ..extract.model import Declaration, DeclarationKind, Document
from .model import Issue, IssueCategory, error, warning


def _normalize(expression: str) -> str:
    return "".join(expression.split()).lower()


def types_compatible(a: str, b: str, equivalences: Iterable[tuple[str, str]] = ()) -> bool:
    if _normalize(a) == _normalize(b):
        return True
    left, right = a.strip(), b.strip()
    return any((left == x and right == y) or (left == y and right == x) for x, y in equivalences)


def _optionality(optional: bool) -> str:
    return "optional" if optional else "required"


def compare_declarations(
    baseline: Declaration,
    other: Declaration,
    *,
    equivalences: Iterable[tuple[str, str]] = (),
    reported_baseline_gaps: set[tuple[str, str, str]] | None = None,
) -> list[Issue]:
    """Field-level differences between two records sharing a name.

    ``reported_baseline_gaps`` collects ``(document, record, field)`` keys already
    reported against the baseline so that several documents carrying the same
    extra field produce one report.
    """
    if baseline.kind is not DeclarationKind.RECORD or other.kind is not DeclarationKind.RECORD:
        return []
    pairs = tuple(equivalences)
    gaps = reported_baseline_gaps if reported_baseline_gaps is not None else set()
    name = baseline.name
    issues: list[Issue] = []
    for item in baseline.fields:
        if other.get_field(item.name) is None:
            issues.append(
                error(
                    IssueCategory.TYPE_SHAPE_MISMATCH,
                    f"Type '{name}' is missing property '{item.name}' in {other.document}",
                    other.document,
                    other.line,
                    f"Add property '{item.name}: {item.type_expression}' to match {baseline.document}",
                )
            )
    for item in other.fields:
        base = baseline.get_field(item.name)
        if base is None:
            key = (baseline.document, name, item.name)
            if key in gaps:
                continue
            gaps.add(key)
            issues.append(
                error(
                    IssueCategory.TYPE_SHAPE_MISMATCH,
                    f"Type '{name}' is missing property '{item.name}' in {baseline.document}",
                    baseline.document,
                    baseline.line,
                    f"Add property '{item.name}: {item.type_expression}' to match {other.document}",
                )
            )
            continue
        if not types_compatible(base.type_expression, item.type_expression, pairs):
            issues.append(
                error(
                    IssueCategory.TYPE_SHAPE_MISMATCH,
                    f"Type mismatch for '{name}.{item.name}': '{base.type_expression}' in {baseline.document} vs '{item.type_expression}' in {other.document}",
                    other.document,
                    other.line,
                    f"Ensure '{item.name}' has consistent type across all definitions",
                )
            )
        if base.optional != item.optional:
            issues.append(
                warning(
                    IssueCategory.TYPE_SHAPE_MISMATCH,
                    f"Optionality mismatch for '{name}.{item.name}': {_optionality(base.optional)} in {baseline.document} vs {_optionality(item.optional)} in {other.document}",
                    other.document,
                    other.line,
                    f"Ensure '{item.name}' has consistent optionality",
                )
            )
    return issues


def _records_by_name(vocabulary: Document, contracts: Sequence[Document]) -> dict[str, list[Declaration]]:
    grouped: dict[str, list[Declaration]] = {}
    for document in (vocabulary, *contracts):
        for declaration in document.declarations:
            if declaration.kind is DeclarationKind.RECORD:
                grouped.setdefault(declaration.name, []).append(declaration)
    return grouped


def select_baseline(records: Sequence[Declaration], vocabulary: str) -> Declaration:
    """Shared vocabulary first, otherwise the alphabetically first document."""
    for record in records:
        if record.document == vocabulary:
            return record
    return min(records, key=lambda record: (record.document, record.line))


def check_kind_conflicts(vocabulary: Document, contracts: Sequence[Document]) -> list[Issue]:
    issues: list[Issue] = []
    for contract in contracts:
        seen: set[str] = set()
        for item in contract.imports:
            if item.name in seen:
                continue
            seen.add(item.name)
            local = contract.declaration(item.name)
            shared = vocabulary.declaration(item.name)
            if local is None or shared is None or local.kind is shared.kind:
                continue
            issues.append(
                error(
                    IssueCategory.TYPE_SHAPE_MISMATCH,
                    f"Import '{item.name}' is redefined as {local.kind} but primitives defines it as {shared.kind}",
                    contract.identifier,
                    local.line,
                    "Remove local definition and use the imported type, or rename to avoid conflict",
                )
            )
    return issues


def check_type_shapes(vocabulary: Document, contracts: Sequence[Document], *, config: VerifierConfig | None = None) -> list[Issue]:
    cfg = config or default_config()
    issues: list[Issue] = []
    gaps: set[tuple[str, str, str]] = set()
    for records in _records_by_name(vocabulary, contracts).values():
        if len(records) < 2:
            continue
        baseline = select_baseline(records, vocabulary.identifier)
        for other in records:
            if other is baseline:
                continue
            issues.extend(compare_declarations(baseline, other, equivalences=cfg.type_equivalences, reported_baseline_gaps=gaps))
    issues.extend(check_kind_conflicts(vocabulary, contracts))
    return issues
