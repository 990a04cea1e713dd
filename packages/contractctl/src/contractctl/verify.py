"""Verification orchestrator.

Every document is parsed before any check runs; a document that cannot be read
aborts the run with ``DocumentReadError`` and no report. The checks then run
in a fixed order (imports, cycles, naming, shapes) and never short-circuit one
another.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

from .checks.graph import build_dependency_graph, cycle_issues, find_cycles
from .checks.imports import check_imports
from .checks.model import Issue
from .checks.naming import check_naming
from .checks.shapes import check_type_shapes
from .core.config import VerifierConfig
from .core.context import RunContext
from .core.logging import log_event
from .extract.model import Document
from .extract.parser import parse_document
from .report import ReportStats, VerificationReport


def _stats(vocabulary: Document, contracts: Sequence[Document]) -> ReportStats:
    documents = (vocabulary, *contracts)
    return ReportStats(
        documents=len(documents),
        contracts=len(contracts),
        declarations=sum(len(doc.declarations) for doc in documents),
        imports=sum(len(doc.imports) for doc in documents),
        service_methods=sum(len(doc.service_methods) for doc in documents),
        api_routes=sum(len(doc.api_routes) for doc in documents),
    )


def verify_documents(
    vocabulary: Document,
    contracts: Sequence[Document],
    *,
    config: VerifierConfig | None = None,
    ctx: RunContext | None = None,
) -> VerificationReport:
    cfg = config or (ctx.config if ctx is not None else None)
    issues: list[Issue] = []

    stage = check_imports(vocabulary, contracts, config=cfg)
    log_event(ctx, "info", "verify", "imports", issues=len(stage))
    issues.extend(stage)

    graph = build_dependency_graph(contracts)
    cycles = find_cycles(graph)
    stage = cycle_issues(cycles)
    log_event(ctx, "info", "verify", "cycles", nodes=len(graph), issues=len(stage))
    issues.extend(stage)

    stage = check_naming(vocabulary, contracts, config=cfg)
    log_event(ctx, "info", "verify", "naming", issues=len(stage))
    issues.extend(stage)

    stage = check_type_shapes(vocabulary, contracts, config=cfg)
    log_event(ctx, "info", "verify", "shapes", issues=len(stage))
    issues.extend(stage)

    return VerificationReport(
        shared_vocabulary=vocabulary.identifier,
        contracts=tuple(doc.identifier for doc in contracts),
        issues=tuple(issues),
        stats=_stats(vocabulary, contracts),
        dependency_graph=graph,
        cycles=tuple(tuple(cycle) for cycle in cycles),
        titles={doc.identifier: doc.title for doc in contracts},
    )


def _parse_all(paths: Sequence[Path], config: VerifierConfig | None, jobs: int) -> list[Document]:
    if jobs <= 1 or len(paths) <= 1:
        return [parse_document(path, config=config) for path in paths]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda path: parse_document(path, config=config), paths))


def verify_contracts(
    primitives_path: str | Path,
    contract_paths: Sequence[str | Path],
    *,
    verbose: bool = False,
    config: VerifierConfig | None = None,
    ctx: RunContext | None = None,
    jobs: int = 1,
) -> VerificationReport:
    cfg = config or (ctx.config if ctx is not None else None)
    paths = [Path(primitives_path), *(Path(path) for path in contract_paths)]
    started = time.perf_counter()
    documents = _parse_all(paths, cfg, jobs)
    vocabulary, contracts = documents[0], documents[1:]
    for document in documents:
        log_event(
            ctx,
            "info" if verbose else "debug",
            "verify",
            "parsed",
            document=document.identifier,
            declarations=len(document.declarations),
            imports=len(document.imports),
        )
    report = verify_documents(vocabulary, contracts, config=cfg, ctx=ctx)
    log_event(
        ctx,
        "info",
        "verify",
        "done",
        status=report.status,
        errors=len(report.errors),
        warnings=len(report.warnings),
        duration_ms=int((time.perf_counter() - started) * 1000),
    )
    return report
