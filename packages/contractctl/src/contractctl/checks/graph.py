from __future__ import annotations

from typing import Mapping, Sequence

from ..extract.model import Document
from .model import Issue, IssueCategory, error


def build_dependency_graph(contracts: Sequence[Document]) -> dict[str, list[str]]:
    """Contract -> contracts it imports from, in contract order.

    An edge exists when a contract imports a name another contract declares.
    The shared vocabulary is never a node.
    """
    graph: dict[str, list[str]] = {}
    for contract in contracts:
        imported = contract.imported_names()
        deps: list[str] = []
        for other in contracts:
            if other.identifier == contract.identifier or other.identifier in deps:
                continue
            if any(other.declares(name) for name in imported):
                deps.append(other.identifier)
        graph[contract.identifier] = deps
    return graph


def find_cycles(graph: Mapping[str, Sequence[str]]) -> list[list[str]]:
    visiting: set[str] = set()
    visited: set[str] = set()
    stack: list[str] = []
    cycles: list[list[str]] = []

    def _visit(node: str) -> None:
        if node in visited:
            return
        if node in visiting:
            start = stack.index(node)
            cycles.append(stack[start:] + [node])
            return
        visiting.add(node)
        stack.append(node)
        for nxt in graph.get(node, ()):
            _visit(nxt)
        stack.pop()
        visiting.remove(node)
        visited.add(node)

    for node in graph:
        _visit(node)
    return cycles


def cycle_issues(cycles: Sequence[Sequence[str]]) -> list[Issue]:
    return [
        error(
            IssueCategory.CIRCULAR_DEPENDENCY,
            f"Circular dependency detected: {' -> '.join(cycle)}",
            cycle[0],
            None,
            "Refactor to break the circular dependency, possibly by extracting shared types to primitives",
        )
        for cycle in cycles
    ]


def check_cycles(contracts: Sequence[Document]) -> tuple[dict[str, list[str]], list[Issue]]:
    graph = build_dependency_graph(contracts)
    return graph, cycle_issues(find_cycles(graph))
