from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from contractctl.checks import Severity, compare_declarations, find_cycles, find_similar_names
from contractctl.checks.naming import check_naming
from contractctl.core.config import VerifierConfig
from contractctl.extract import Declaration, DeclarationKind, Document, Field, SourceLocation

_NAMES = st.from_regex(r"[a-z][a-zA-Z0-9]{0,10}", fullmatch=True)
_TYPES = st.sampled_from(["string", "number", "boolean", "OrderId", "string[]", "Array<Money>", "{ a: string }"])
_ROWS = st.tuples(_NAMES, _TYPES, st.booleans())
_FIELDS = st.lists(_ROWS, max_size=8, unique_by=lambda row: row[0])
_SOME_FIELDS = st.lists(_ROWS, min_size=1, max_size=8, unique_by=lambda row: row[0])


def _record(document: str, rows: list[tuple[str, str, bool]]) -> Declaration:
    return Declaration(
        name="Shape",
        kind=DeclarationKind.RECORD,
        location=SourceLocation(document, 1),
        fields=tuple(Field(name, type_expression, optional) for name, type_expression, optional in rows),
    )


@pytest.mark.slow
@given(_FIELDS)
def test_identical_records_compare_clean(rows) -> None:
    assert compare_declarations(_record("a.ts", rows), _record("b.ts", rows)) == []


@pytest.mark.slow
@given(_SOME_FIELDS, st.data())
def test_missing_field_is_always_reported(rows, data) -> None:
    dropped = data.draw(st.sampled_from(rows))
    other = [row for row in rows if row is not dropped]
    for baseline, compared in ((rows, other), (other, rows)):
        issues = compare_declarations(_record("a.ts", baseline), _record("b.ts", compared))
        named = [i for i in issues if i.severity is Severity.ERROR and f"'{dropped[0]}'" in i.message]
        assert named


@pytest.mark.slow
@given(st.integers(min_value=1, max_value=12), st.data())
def test_dag_has_no_cycles(size: int, data) -> None:
    nodes = [f"n{i}" for i in range(size)]
    graph = {
        node: data.draw(st.lists(st.sampled_from(nodes[i + 1 :]), unique=True)) if i + 1 < size else []
        for i, node in enumerate(nodes)
    }
    assert find_cycles(graph) == []


@pytest.mark.slow
@given(st.integers(min_value=2, max_value=10), st.data())
def test_single_ring_yields_one_cycle_from_any_start(size: int, data) -> None:
    nodes = [f"n{i}" for i in range(size)]
    ring = {node: [nodes[(i + 1) % size]] for i, node in enumerate(nodes)}
    order = data.draw(st.permutations(nodes))
    graph = {node: ring[node] for node in order}
    cycles = find_cycles(graph)
    assert len(cycles) == 1
    assert sorted(cycles[0][:-1]) == sorted(nodes)


@pytest.mark.slow
@given(st.lists(st.from_regex(r"[A-Z][a-z]{2,7}(?:Item|Line|Entry)?s?", fullmatch=True), max_size=12))
def test_similar_pairs_are_unique_and_in_range(names: list[str]) -> None:
    found = find_similar_names(names, threshold=0.8)
    keys = [frozenset((a, b)) for a, b, _ in found]
    assert len(keys) == len(set(keys))
    assert all(0.8 <= ratio < 1 for _, _, ratio in found)


@pytest.mark.slow
@given(st.lists(st.from_regex(r"[A-Z][a-z]{2,7}(?:Item|Line)?s?", fullmatch=True), min_size=2, max_size=10, unique=True))
def test_each_similar_pair_warns_at_most_once(names: list[str]) -> None:
    half = len(names) // 2
    docs = [
        Document(
            identifier=identifier,
            declarations=tuple(
                Declaration(name=name, kind=DeclarationKind.ALIAS, location=SourceLocation(identifier, 1), type_expression="string")
                for name in chunk
            ),
        )
        for identifier, chunk in (("a.ts", names[:half]), ("b.ts", names[half:]), ("c.ts", names))
    ]
    cfg = VerifierConfig(naming_pairs=(), strippable_suffixes=())
    issues = check_naming(docs[0], docs[1:], config=cfg)
    messages = [i.message for i in issues]
    assert len(messages) == len(set(messages))
    expected = len(find_similar_names(names, cfg.naming_threshold))
    assert len([m for m in messages if m.startswith("Similar names")]) == expected
