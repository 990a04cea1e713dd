"""Character-level helpers shared by the declaration and import matchers.

Two views of a code region are produced, both the same length as the input so
offsets and line numbers stay interchangeable:

* ``clean``: comments blanked out, string literals intact.
* ``masked``: comments blanked out and string literal contents blanked too,
  so braces, semicolons or keywords inside strings never affect structure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

IDENT = r"[A-Za-z_$][\w$]*"
IDENT_RE = re.compile(rf"^{IDENT}$")

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {"}", "]", ")"}
_MEMBER_START_RE = re.compile(rf"\s*(?:(?:readonly\s+)?{IDENT}\??\s*[:(<]|\[)")


@dataclass(frozen=True)
class Views:
    clean: str
    masked: str

    def line_of(self, offset: int) -> int:
        """Zero-based line index of ``offset`` inside the region."""
        return self.masked.count("\n", 0, offset)


def _blank(chunk: str) -> str:
    return "".join("\n" if ch == "\n" else " " for ch in chunk)


def build_views(text: str) -> Views:
    clean: list[str] = []
    masked: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            end = text.find("\n", i)
            end = n if end == -1 else end
            blank = _blank(text[i:end])
            clean.append(blank)
            masked.append(blank)
            i = end
            continue
        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            blank = _blank(text[i:end])
            clean.append(blank)
            masked.append(blank)
            i = end
            continue
        if ch in "'\"`":
            j = i + 1
            while j < n and text[j] != ch:
                if text[j] == "\\":
                    j += 1
                elif text[j] == "\n" and ch != "`":
                    break
                j += 1
            end = min(j + 1, n)
            literal = text[i:end]
            clean.append(literal)
            inner = _blank(literal[1:-1]) if len(literal) >= 2 and literal[-1] == ch else _blank(literal[1:])
            closing = ch if len(literal) >= 2 and literal[-1] == ch else ""
            masked.append(ch + inner + closing)
            i = end
            continue
        clean.append(ch)
        masked.append(ch)
        i += 1
    return Views(clean="".join(clean), masked="".join(masked))


def matching_brace(masked: str, open_index: int) -> int:
    """Index of the ``}`` closing the ``{`` at ``open_index``, or -1."""
    depth = 0
    for index in range(open_index, len(masked)):
        ch = masked[index]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def matching_paren(masked: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(masked)):
        ch = masked[index]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _starts_member(masked: str, index: int) -> bool:
    return bool(_MEMBER_START_RE.match(masked, index))


def split_top_level(masked: str, start: int, end: int, *, separators: str = ";,", newline_members: bool = True) -> list[tuple[int, int]]:
    """Split ``masked[start:end]`` into member spans at nesting depth zero.

    Members end at any character of ``separators`` or, when ``newline_members``
    is set, at a newline followed by something shaped like a new member.
    Angle brackets count as nesting except for the ``=>`` arrow.
    """
    spans: list[tuple[int, int]] = []
    stack: list[str] = []
    angle = 0
    member_start = start
    for index in range(start, end):
        ch = masked[index]
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
            continue
        if ch in _CLOSERS:
            if stack and stack[-1] == ch:
                stack.pop()
            continue
        if ch == "<":
            angle += 1
            continue
        if ch == ">":
            if index > 0 and masked[index - 1] == "=":
                continue
            angle = max(0, angle - 1)
            continue
        if stack or angle:
            continue
        if ch in separators:
            spans.append((member_start, index))
            member_start = index + 1
            continue
        if ch == "\n" and newline_members and masked[member_start:index].strip() and _starts_member(masked, index + 1):
            spans.append((member_start, index))
            member_start = index + 1
    spans.append((member_start, end))
    return [(s, e) for s, e in spans if masked[s:e].strip()]


def collapse(text: str) -> str:
    return " ".join(text.split())
