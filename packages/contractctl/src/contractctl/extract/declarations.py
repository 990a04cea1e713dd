"""Pattern-based declaration matcher.

Recognized shapes (anything else is invisible to the extractor):

* record:        ``[export] interface Name[<T>] [extends A, B] { field[?]: Type; ... }``
* alias:         ``[export] type Name[<T>] = TypeExpression;``
* enumeration:   ``[export] [const] enum Name { A, B = 'b' }``
* constant group: ``[export] const NAME[: Type] = { ... }``

Heads of all four shapes are matched independently, then processed in source
order; text consumed by a block body is never matched again, so declarations
nested inside another body are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from .fences import CodeRegion
from .model import Declaration, DeclarationKind, Field, Parameter, ServiceMethod, SourceLocation
from .scan import IDENT, IDENT_RE, Views, build_views, collapse, matching_brace, matching_paren, split_top_level

_PREFIX = r"^[ \t]*(?:export[ \t]+)?(?:declare[ \t]+)?"
_RECORD_RE = re.compile(_PREFIX + rf"interface[ \t]+(?P<name>{IDENT})(?![\w$])", re.MULTILINE)
_ALIAS_RE = re.compile(_PREFIX + rf"type[ \t]+(?P<name>{IDENT})[ \t]*(?:<[^<>]*(?:<[^<>]*>[^<>]*)*>)?\s*=", re.MULTILINE)
_ENUM_RE = re.compile(_PREFIX + rf"(?:const[ \t]+)?enum[ \t]+(?P<name>{IDENT})\s*\{{", re.MULTILINE)
_CONST_GROUP_RE = re.compile(
    _PREFIX + rf"const[ \t]+(?P<name>{IDENT})\s*(?::[^=;{{]+)?=\s*(?:Object\.freeze\(\s*)?\{{",
    re.MULTILINE,
)
_FIELD_RE = re.compile(rf"^(?:readonly\s+)?(?P<name>{IDENT}|'[^']+'|\"[^\"]+\")(?P<optional>\?)?\s*:\s*(?P<type>.+)$", re.DOTALL)
_METHOD_HEAD_RE = re.compile(rf"^(?:readonly\s+)?(?:async\s+)?(?P<name>{IDENT})\??\s*(?:<[^()]*>)?\s*(?=\()")
_PARAM_RE = re.compile(rf"^(?:readonly\s+)?(?P<name>{IDENT})(?P<optional>\?)?\s*:\s*(?P<type>.+)$", re.DOTALL)
_NEW_STATEMENT_RE = re.compile(r"^\s*(?:export|interface|type|enum|const|let|var|import|function|class|declare|namespace)\b")

_HEADS: tuple[tuple[DeclarationKind, re.Pattern[str]], ...] = (
    (DeclarationKind.RECORD, _RECORD_RE),
    (DeclarationKind.ALIAS, _ALIAS_RE),
    (DeclarationKind.ENUMERATION, _ENUM_RE),
    (DeclarationKind.CONSTANT_GROUP, _CONST_GROUP_RE),
)


@dataclass(frozen=True)
class _Head:
    kind: DeclarationKind
    match: re.Match[str]

    @property
    def start(self) -> int:
        return self.match.start("name")


def _clean_type(text: str) -> str:
    return collapse(text).rstrip(";,").strip()


def _strip_leading_generics(rest: str) -> str:
    text = rest.lstrip()
    if not text.startswith("<"):
        return text
    depth = 0
    for index, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">" and text[index - 1] != "=":
            depth -= 1
            if depth == 0:
                return text[index + 1 :]
    return ""


def _record_open(masked: str, start: int) -> int:
    """Index of the ``{`` opening a record body whose header begins at ``start``.

    Type parameters and ``extends`` clauses may hold defaults or object types,
    so only a ``{`` outside every bracket pair counts. Returns -1 when the
    header ends first.
    """
    angle = 0
    depth = 0
    for index in range(start, len(masked)):
        ch = masked[index]
        if ch == "<":
            angle += 1
        elif ch == ">":
            if masked[index - 1] != "=":
                angle = max(0, angle - 1)
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == "{":
            if not angle and not depth:
                return index
            depth += 1
        elif ch == "}":
            if not angle and not depth:
                return -1
            depth = max(0, depth - 1)
        elif ch in ";=" and not angle and not depth:
            return -1
    return -1


def _supertypes(rest: str) -> tuple[str, ...]:
    tail = _strip_leading_generics(rest)
    match = re.search(r"\bextends\b(?P<list>.*)$", tail, re.DOTALL)
    if not match:
        return ()
    raw = match.group("list")
    names: list[str] = []
    for start, end in split_top_level(raw, 0, len(raw), separators=",", newline_members=False):
        name = collapse(raw[start:end])
        if name:
            names.append(name)
    return tuple(names)


def _record_fields(views: Views, open_index: int, close_index: int) -> tuple[Field, ...]:
    fields: list[Field] = []
    seen: set[str] = set()
    for start, end in split_top_level(views.masked, open_index + 1, close_index):
        member = views.clean[start:end].strip()
        match = _FIELD_RE.match(member)
        if not match:
            continue
        name = match.group("name").strip("'\"")
        if name in seen:
            continue
        seen.add(name)
        fields.append(Field(name=name, type_expression=_clean_type(match.group("type")), optional=bool(match.group("optional"))))
    return tuple(fields)


def _enum_members(views: Views, open_index: int, close_index: int) -> tuple[Field, ...]:
    members: list[Field] = []
    for start, end in split_top_level(views.masked, open_index + 1, close_index, separators=",", newline_members=False):
        name = views.clean[start:end].split("=", 1)[0].strip()
        if IDENT_RE.match(name):
            members.append(Field(name=name))
    return tuple(members)


def _alias_end(views: Views, start: int) -> int:
    masked = views.masked
    depth = 0
    index = start
    n = len(masked)
    while index < n:
        ch = masked[index]
        if ch in "{[(":
            depth += 1
        elif ch in "}])":
            depth = max(0, depth - 1)
        elif depth == 0 and ch == ";":
            return index
        elif depth == 0 and ch == "\n":
            line_end = masked.find("\n", index + 1)
            next_line = masked[index + 1 : n if line_end == -1 else line_end]
            if not next_line.strip() or _NEW_STATEMENT_RE.match(next_line):
                return index
        index += 1
    return n


def _parameters(raw: str) -> tuple[Parameter, ...]:
    params: list[Parameter] = []
    for start, end in split_top_level(raw, 0, len(raw), separators=",", newline_members=False):
        match = _PARAM_RE.match(raw[start:end].strip())
        if match:
            params.append(
                Parameter(
                    name=match.group("name"),
                    type_expression=_clean_type(match.group("type")),
                    optional=bool(match.group("optional")),
                )
            )
    return tuple(params)


def _service_methods(views: Views, owner: str, open_index: int, close_index: int, document: str, first_line: int) -> list[ServiceMethod]:
    methods: list[ServiceMethod] = []
    for start, end in split_top_level(views.masked, open_index + 1, close_index):
        leading = len(views.masked[start:end]) - len(views.masked[start:end].lstrip())
        member_start = start + leading
        masked_member = views.masked[member_start:end]
        head = _METHOD_HEAD_RE.match(masked_member)
        if not head:
            continue
        paren_open = member_start + head.end()
        paren_close = matching_paren(views.masked, paren_open)
        if paren_close == -1 or paren_close >= end:
            continue
        tail = views.clean[paren_close + 1 : end].strip()
        if not tail.startswith(":"):
            continue
        methods.append(
            ServiceMethod(
                owner=owner,
                name=head.group("name"),
                parameters=_parameters(views.clean[paren_open + 1 : paren_close]),
                return_type=_clean_type(tail[1:]),
                location=SourceLocation(document, first_line + views.line_of(member_start)),
            )
        )
    return methods


@dataclass(frozen=True)
class RegionDeclarations:
    declarations: tuple[Declaration, ...]
    service_methods: tuple[ServiceMethod, ...]


def _heads(masked: str) -> list[_Head]:
    heads = [_Head(kind, match) for kind, pattern in _HEADS for match in pattern.finditer(masked)]
    heads.sort(key=lambda head: head.match.start())
    return heads


def scan_region(region: CodeRegion, document: str, *, service_suffixes: Iterable[str] = ()) -> RegionDeclarations:
    views = build_views(region.text)
    suffixes = tuple(service_suffixes)
    declarations: list[Declaration] = []
    methods: list[ServiceMethod] = []
    consumed_until = -1
    for head in _heads(views.masked):
        if head.match.start() < consumed_until:
            continue
        name = head.match.group("name")
        location = SourceLocation(document, region.start_line + views.line_of(head.start))
        if head.kind is DeclarationKind.ALIAS:
            expr_start = head.match.end()
            expr_end = _alias_end(views, expr_start)
            expression = _clean_type(views.clean[expr_start:expr_end])
            if not expression:
                continue
            declarations.append(Declaration(name=name, kind=DeclarationKind.ALIAS, location=location, type_expression=expression))
            consumed_until = expr_end
            continue
        if head.kind is DeclarationKind.RECORD:
            open_index = _record_open(views.masked, head.match.end())
        else:
            open_index = head.match.end() - 1
        if open_index == -1:
            continue
        close_index = matching_brace(views.masked, open_index)
        if close_index == -1:
            continue
        consumed_until = close_index + 1
        if head.kind is DeclarationKind.RECORD:
            declarations.append(
                Declaration(
                    name=name,
                    kind=DeclarationKind.RECORD,
                    location=location,
                    fields=_record_fields(views, open_index, close_index),
                    supertypes=_supertypes(views.clean[head.match.end() : open_index]),
                )
            )
            if suffixes and name.endswith(suffixes):
                methods.extend(_service_methods(views, name, open_index, close_index, document, region.start_line))
        elif head.kind is DeclarationKind.ENUMERATION:
            declarations.append(
                Declaration(
                    name=name,
                    kind=DeclarationKind.ENUMERATION,
                    location=location,
                    fields=_enum_members(views, open_index, close_index),
                )
            )
        else:
            declarations.append(Declaration(name=name, kind=DeclarationKind.CONSTANT_GROUP, location=location))
    return RegionDeclarations(declarations=tuple(declarations), service_methods=tuple(methods))


def extract_declarations(region: CodeRegion, document: str) -> list[Declaration]:
    return list(scan_region(region, document).declarations)
