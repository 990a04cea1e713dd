"""Near-duplicate name auditing.

Names are compared case-insensitively with a normalized Levenshtein ratio.
Pairs that follow a known naming convention are expected and never reported;
the conventions are configuration data (``NamingPairRule`` regex pairs plus a
list of suffixes that, once stripped, reveal a shared base name).
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from ..core.config import NamingPairRule, VerifierConfig, default_config
from ..extract.model import Declaration, Document
from .model import Issue, IssueCategory, warning

__all__ = [
    "NamingPairRule",
    "check_naming",
    "find_similar_names",
    "is_expected_pair",
    "similarity_ratio",
    "strip_suffix",
]


def similarity_ratio(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def find_similar_names(names: Iterable[str], threshold: float = 0.8) -> list[tuple[str, str, float]]:
    unique = list(dict.fromkeys(names))
    similar: list[tuple[str, str, float]] = []
    seen: set[tuple[str, str]] = set()
    for i, first in enumerate(unique):
        for second in unique[i + 1 :]:
            key = (first, second) if first <= second else (second, first)
            if key in seen:
                continue
            ratio = similarity_ratio(first.lower(), second.lower())
            if threshold <= ratio < 1.0:
                similar.append((first, second, ratio))
                seen.add(key)
    return similar


def strip_suffix(name: str, suffixes: Iterable[str]) -> str:
    """``name`` without the longest matching suffix, if any leaves a base."""
    for suffix in sorted(suffixes, key=len, reverse=True):
        if suffix and name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def is_expected_pair(a: str, b: str, rules: Iterable[NamingPairRule] = (), suffixes: Iterable[str] = ()) -> bool:
    if any(rule.matches(a, b) for rule in rules):
        return True
    stripped = tuple(suffixes)
    return strip_suffix(a, stripped).lower() == strip_suffix(b, stripped).lower()


def _first_declarations(documents: Sequence[Document]) -> dict[str, Declaration]:
    first: dict[str, Declaration] = {}
    for document in documents:
        for declaration in document.declarations:
            first.setdefault(declaration.name, declaration)
    return first


def check_naming(vocabulary: Document, contracts: Sequence[Document], *, config: VerifierConfig | None = None) -> list[Issue]:
    cfg = config or default_config()
    first = _first_declarations([vocabulary, *contracts])
    issues: list[Issue] = []
    for a, b, ratio in find_similar_names(first, cfg.naming_threshold):
        if is_expected_pair(a, b, cfg.naming_pairs, cfg.strippable_suffixes):
            continue
        left, right = first[a], first[b]
        issues.append(
            warning(
                IssueCategory.NAMING_SIMILARITY,
                f"Similar names detected: '{a}' and '{b}' ({round(ratio * 100)}% similar)",
                left.document,
                left.line,
                f"Consider standardizing to one name. Found in: {left.document} and {right.document}",
            )
        )
    suffix = cfg.reference_suffix
    if not suffix:
        return issues
    for name, declaration in first.items():
        if not name.endswith(suffix) or len(name) == len(suffix):
            continue
        entity = name[: -len(suffix)]
        if entity in first:
            continue
        issues.append(
            warning(
                IssueCategory.NAMING_SIMILARITY,
                f"Reference type '{name}' has no corresponding full entity '{entity}'",
                declaration.document,
                declaration.line,
                f"Consider defining '{entity}' or renaming if this is not a reference type",
            )
        )
    return issues
