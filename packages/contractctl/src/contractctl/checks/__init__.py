"""Cross-document consistency checks over parsed documents."""

from __future__ import annotations

from .graph import build_dependency_graph, check_cycles, find_cycles
from .imports import check_imports, is_exempt_module
from .model import Issue, IssueCategory, Severity
from .naming import NamingPairRule, check_naming, find_similar_names, is_expected_pair, similarity_ratio
from .shapes import check_type_shapes, compare_declarations, types_compatible

__all__ = [
    "Issue",
    "IssueCategory",
    "NamingPairRule",
    "Severity",
    "build_dependency_graph",
    "check_cycles",
    "check_imports",
    "check_naming",
    "check_type_shapes",
    "compare_declarations",
    "find_cycles",
    "find_similar_names",
    "is_expected_pair",
    "is_exempt_module",
    "similarity_ratio",
    "types_compatible",
]
