from __future__ import annotations

import pytest

from contractctl.checks import IssueCategory, Severity, check_naming, find_similar_names, is_expected_pair, similarity_ratio
from contractctl.checks.naming import strip_suffix
from contractctl.core.config import DEFAULT_NAMING_PAIRS, DEFAULT_STRIPPABLE_SUFFIXES, NamingPairRule, VerifierConfig
from contractctl.extract import parse_text

EMPTY = parse_text("", "primitives.ts")


def test_similarity_ratio() -> None:
    assert similarity_ratio("", "") == 1.0
    assert similarity_ratio("abc", "abc") == 1.0
    assert similarity_ratio("kitten", "sitting") == pytest.approx(1 - 3 / 7)


def test_find_similar_names_is_case_insensitive_and_excludes_exact_duplicates() -> None:
    found = find_similar_names(["OrderItem", "OrderItems", "orderitem", "Customer", "OrderItem"], threshold=0.85)
    assert [(a, b) for a, b, _ in found] == [("OrderItem", "OrderItems"), ("OrderItems", "orderitem")]
    assert all(0.85 <= ratio < 1 for _, _, ratio in found)


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("CreateUserInput", "UpdateUserInput"),
        ("CreateOrderRequest", "UpdateOrderRequest"),
        ("SearchRequest", "SearchResponse"),
        ("ParseInput", "ParseOutput"),
        ("UserId", "UserRef"),
        ("MatchScore", "MatchScores"),
        ("IUserService", "IUserRepository"),
        ("CustomerId", "CustomersId"),
        ("CustomerRef", "CustomersRef"),
        ("OrderType", "OrderTypes"),
        ("OrderStatus", "OrderStatuses"),
    ],
)
def test_expected_pairs_are_suppressed(a: str, b: str) -> None:
    assert is_expected_pair(a, b, DEFAULT_NAMING_PAIRS, DEFAULT_STRIPPABLE_SUFFIXES)
    assert is_expected_pair(b, a, DEFAULT_NAMING_PAIRS, DEFAULT_STRIPPABLE_SUFFIXES)


def test_unrelated_near_duplicates_are_not_expected() -> None:
    assert not is_expected_pair("CustomerAddress", "CustomerAdress", DEFAULT_NAMING_PAIRS, DEFAULT_STRIPPABLE_SUFFIXES)
    assert not is_expected_pair("OrderLine", "OrderLines", DEFAULT_NAMING_PAIRS, DEFAULT_STRIPPABLE_SUFFIXES)


def test_strip_suffix_prefers_longest_and_keeps_a_base() -> None:
    assert strip_suffix("OrderStatuses", DEFAULT_STRIPPABLE_SUFFIXES) == "Order"
    assert strip_suffix("Ids", DEFAULT_STRIPPABLE_SUFFIXES) == "Ids"


def test_custom_naming_pair_rules() -> None:
    rules = (NamingPairRule(r"^\w+Draft$", r"^\w+Final$"),)
    assert is_expected_pair("OrderDraft", "OrderFinal", rules, ())
    assert not is_expected_pair("OrderDraft", "OrderFinal", (), ())


def test_similar_names_across_documents_warn_once() -> None:
    vocab = parse_text("export interface CustomerAddress { line1: string }\n", "primitives.ts")
    a = parse_text("export interface CustomerAdress { line1: string }\n", "a.ts")
    b = parse_text("export interface CustomerAdress { line1: string }\n", "b.ts")
    issues = check_naming(vocab, [a, b])
    assert len(issues) == 1
    issue = issues[0]
    assert issue.severity is Severity.WARNING
    assert issue.category is IssueCategory.NAMING_SIMILARITY
    assert issue.message == "Similar names detected: 'CustomerAddress' and 'CustomerAdress' (93% similar)"
    assert issue.document == "primitives.ts"
    assert "a.ts" in issue.suggestion


def test_convention_pairs_produce_no_warnings() -> None:
    vocab = parse_text("export type UserId = string;\nexport interface UserRef { id: UserId }\nexport interface User { id: UserId }\n", "primitives.ts")
    a = parse_text("export interface MatchScore { v: number }\nexport type MatchScores = MatchScore[];\n", "a.ts")
    assert check_naming(vocab, [a]) == []


def test_orphaned_reference_is_reported_once() -> None:
    a = parse_text("export interface InvoiceRef { id: string }\n", "a.ts")
    b = parse_text("export interface InvoiceRef { id: string }\n", "b.ts")
    issues = check_naming(EMPTY, [a, b])
    assert [(i.document, i.message) for i in issues] == [
        ("a.ts", "Reference type 'InvoiceRef' has no corresponding full entity 'Invoice'")
    ]


def test_reference_with_entity_anywhere_is_not_orphaned() -> None:
    vocab = parse_text("export interface Invoice { id: string }\n", "primitives.ts")
    a = parse_text("export interface InvoiceRef { id: string }\n", "a.ts")
    assert check_naming(vocab, [a]) == []


def test_naming_threshold_comes_from_config() -> None:
    a = parse_text("export type Shipment = string;\nexport type Shipments = string[];\n", "a.ts")
    assert len(check_naming(EMPTY, [a])) == 1
    assert check_naming(EMPTY, [a], config=VerifierConfig(naming_threshold=0.95)) == []


def test_identifier_and_reference_families_are_not_flagged() -> None:
    vocab = parse_text(
        "export type CustomerId = string;\nexport type CustomersId = string;\n"
        "export interface Customer { id: CustomerId }\nexport interface Customers { ids: CustomersId[] }\n"
        "export interface CustomerRef { id: CustomerId }\nexport interface CustomersRef { ids: CustomersId[] }\n",
        "primitives.ts",
    )
    messages = [issue.message for issue in check_naming(vocab, [])]
    assert not any("'CustomerId' and 'CustomersId'" in m or "'CustomerRef' and 'CustomersRef'" in m for m in messages)
