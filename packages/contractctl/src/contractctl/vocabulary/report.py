from __future__ import annotations

from typing import Any

from ..contracts.schema.validate import validate_self
from .validate import ItemResult, VocabularyResult

VOCABULARY_SCHEMA = "contractctl.vocabulary.v1"
_RULE = "=" * 60
_SUBRULE = "-" * 60


def build_vocabulary_payload(result: VocabularyResult, *, run_id: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": VOCABULARY_SCHEMA,
        "schema_version": 1,
        "tool": "contractctl",
        "kind": "vocabulary-validation",
        "run_id": run_id,
        "status": "pass" if result.passed else "fail",
        "passed": result.passed,
        "primitives": result.primitives,
        "domains": [{"domain": row.domain, "items": [item.as_dict() for item in row.items]} for row in result.domains],
        "common": [item.as_dict() for item in result.common],
        "summary": {
            "total_expected": result.summary.total_expected,
            "total_found": result.summary.total_found,
            "missing": list(result.summary.missing),
            "coverage": round(result.summary.coverage, 1),
        },
    }
    return validate_self(VOCABULARY_SCHEMA, payload)


def _item_line(prefix: str, item: ItemResult, verbose: bool) -> str:
    line = f"{prefix}{item.missing_label}: {'[OK]' if item.found else '[MISSING]'}"
    if verbose and item.found and item.actual:
        line += f" ({item.actual})"
    return line


def render_vocabulary_text(result: VocabularyResult, verbose: bool = False) -> str:
    summary = result.summary
    out = [
        _RULE,
        f"  VOCABULARY VALIDATION: {'PASSED' if result.passed else 'FAILED'}",
        _RULE,
        "",
        f"Coverage: {summary.coverage:.1f}% ({summary.total_found}/{summary.total_expected})",
        "",
        "DOMAIN VALIDATION",
        _SUBRULE,
    ]
    for row in result.domains:
        out.append(f"[{row.domain}]")
        out.extend(_item_line(f"  {item.label} ", item, verbose) for item in row.items)
    out.extend(["", "COMMON PATTERNS", _SUBRULE])
    out.extend(_item_line("  ", item, verbose) for item in result.common)
    if summary.missing:
        out.extend(["", "MISSING ITEMS", _SUBRULE])
        out.extend(f"  - {name}" for name in summary.missing)
    if verbose and summary.missing:
        out.extend(["", "SUGGESTED ADDITIONS", _SUBRULE])
        for row in result.domains:
            for item in row.items:
                if not item.found and item.suggestion:
                    out.extend(["", f"// {row.domain} {item.label}", item.suggestion])
        for item in result.common:
            if not item.found and item.suggestion:
                out.extend(["", item.suggestion])
    out.extend(["", _RULE])
    return "\n".join(out)
