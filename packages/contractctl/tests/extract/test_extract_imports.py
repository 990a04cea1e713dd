from __future__ import annotations

from contractctl.extract import CodeRegion, extract_imports
from contractctl.extract.imports import import_names


def _imports(text: str, start_line: int = 1):
    return extract_imports(CodeRegion(start_line=start_line, text=text), "a.md")


def test_names_aliases_and_type_modifiers() -> None:
    found = _imports("import { OrderId, OrderStatus as Status, type Money } from './primitives';\n")
    assert [(i.name, i.source_module) for i in found] == [
        ("OrderId", "./primitives"),
        ("OrderStatus", "./primitives"),
        ("Money", "./primitives"),
    ]


def test_multiline_import_with_comments_keeps_original_lines() -> None:
    text = (
        "export type A = string;\n"
        "import type {\n"
        "  UserId, // the id\n"
        "  /* legacy */ UserRef,\n"
        "} from \"../shared/types\";\n"
    )
    found = _imports(text, start_line=20)
    assert [i.name for i in found] == ["UserId", "UserRef"]
    assert {i.location.line for i in found} == {21}
    assert found[0].source_module == "../shared/types"


def test_default_and_named_import_mix() -> None:
    found = _imports("import React, { useState } from 'react';\nimport z from 'zod';\n")
    assert [(i.name, i.source_module) for i in found] == [("useState", "react")]


def test_import_inside_comment_or_string_is_ignored() -> None:
    found = _imports("// import { Ghost } from './x';\nconst s = \"import { Fake } from './y'\";\n")
    assert found == []


def test_import_names_drops_non_identifier_fragments() -> None:
    assert import_names(" A , , B as C, 123, type D ") == ["A", "B", "D"]
