"""Verification report model, payload and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence

from .checks.model import Issue, IssueCategory, Severity
from .contracts.schema.validate import validate_self
from .core.clock import utc_now
from .core.serialize import dumps_json

REPORT_SCHEMA = "contractctl.report.v1"
_RULE = "=" * 80
_SUBRULE = "-" * 40

__all__ = [
    "Issue",
    "IssueCategory",
    "REPORT_SCHEMA",
    "ReportStats",
    "Severity",
    "VerificationReport",
    "build_report_payload",
    "render_json",
    "render_text",
]


@dataclass(frozen=True)
class ReportStats:
    documents: int = 0
    contracts: int = 0
    declarations: int = 0
    imports: int = 0
    service_methods: int = 0
    api_routes: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "documents": self.documents,
            "contracts": self.contracts,
            "declarations": self.declarations,
            "imports": self.imports,
            "service_methods": self.service_methods,
            "api_routes": self.api_routes,
        }


@dataclass(frozen=True)
class VerificationReport:
    shared_vocabulary: str
    contracts: tuple[str, ...]
    issues: tuple[Issue, ...]
    stats: ReportStats
    dependency_graph: Mapping[str, Sequence[str]]
    cycles: tuple[tuple[str, ...], ...] = ()
    titles: Mapping[str, str] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def status(self) -> str:
        return "pass" if self.passed else "fail"

    def summary(self) -> dict[str, Any]:
        by_category: dict[str, int] = {}
        for issue in self.issues:
            by_category[str(issue.category)] = by_category.get(str(issue.category), 0) + 1
        return {
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "total": len(self.issues),
            "by_category": dict(sorted(by_category.items())),
        }


def build_report_payload(report: VerificationReport, *, run_id: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": REPORT_SCHEMA,
        "schema_version": 1,
        "tool": "contractctl",
        "kind": "verification-report",
        "run_id": run_id,
        "timestamp": report.timestamp.isoformat().replace("+00:00", "Z"),
        "status": report.status,
        "passed": report.passed,
        "shared_vocabulary": report.shared_vocabulary,
        "contracts": list(report.contracts),
        "titles": {name: report.titles.get(name, "") for name in report.contracts},
        "summary": report.summary(),
        "stats": report.stats.as_dict(),
        "dependency_graph": [{"name": name, "dependencies": list(deps)} for name, deps in report.dependency_graph.items()],
        "cycles": [list(cycle) for cycle in report.cycles],
        "issues": [issue.as_dict() for issue in report.issues],
    }
    return validate_self(REPORT_SCHEMA, payload)


def render_json(payload: dict[str, Any]) -> str:
    return dumps_json(payload)


def _issue_lines(issue: Mapping[str, Any]) -> list[str]:
    location = str(issue["document"])
    if issue.get("line"):
        location = f"{location}:{issue['line']}"
    lines = [f"  [{str(issue['category']).upper()}] {issue['message']}", f"    Document: {location}"]
    if issue.get("suggestion"):
        lines.append(f"    Suggestion: {issue['suggestion']}")
    lines.append("")
    return lines


def render_text(payload: dict[str, Any], *, verbose: bool = False) -> str:
    stats = payload["stats"]
    summary = payload["summary"]
    out = [
        _RULE,
        "CONTRACT VERIFICATION REPORT",
        _RULE,
        "",
        f"Timestamp: {payload['timestamp']}",
        f"Shared vocabulary: {payload['shared_vocabulary']}",
        f"Contracts analyzed: {len(payload['contracts'])}",
    ]
    titles = payload["titles"]
    out.extend(f"  - {titles[name]} ({name})" if titles.get(name) else f"  - {name}" for name in payload["contracts"])
    out += [
        "",
        _SUBRULE,
        "STATISTICS",
        _SUBRULE,
        f"Documents: {stats['documents']}",
        f"Contracts: {stats['contracts']}",
        f"Declarations: {stats['declarations']}",
        f"Imports: {stats['imports']}",
        f"Service methods: {stats['service_methods']}",
        f"API routes: {stats['api_routes']}",
        "",
        _SUBRULE,
        "DEPENDENCY GRAPH",
        _SUBRULE,
    ]
    for node in payload["dependency_graph"]:
        if node["dependencies"]:
            out.append(f"{node['name']} -> [{', '.join(node['dependencies'])}]")
        else:
            out.append(f"{node['name']} (no dependencies)")
    out.append("")
    if verbose:
        for category, count in summary["by_category"].items():
            out.append(f"category {category}: {count}")
        out.append("")
    out.extend([_SUBRULE, f"ISSUES ({summary['errors']} errors, {summary['warnings']} warnings)", _SUBRULE])
    errors = [issue for issue in payload["issues"] if issue["severity"] == "error"]
    warnings = [issue for issue in payload["issues"] if issue["severity"] == "warning"]
    if errors:
        out.extend(["", "ERRORS:"])
        for issue in errors:
            out.extend(_issue_lines(issue))
    if warnings:
        out.extend(["", "WARNINGS:"])
        for issue in warnings:
            out.extend(_issue_lines(issue))
    if not payload["issues"]:
        out.extend(["No issues found!", ""])
    out.extend([_RULE, "RESULT: PASS" if payload["passed"] else "RESULT: FAIL"])
    return "\n".join(out)
