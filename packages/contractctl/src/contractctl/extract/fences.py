"""Split prose documents into scannable code regions.

Only fenced regions whose info string names one of the configured languages
are scanned; every other fence is skipped as a whole so that its closing
marker is never mistaken for an opening one. Line numbers are kept relative
to the original document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_FENCE_RE = re.compile(r"^\s{0,3}(?P<marker>`{3,}|~{3,})\s*(?P<info>[^`]*)$")


@dataclass(frozen=True)
class CodeRegion:
    start_line: int
    text: str

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


@dataclass(frozen=True)
class SplitDocument:
    regions: tuple[CodeRegion, ...]
    prose: tuple[tuple[int, str], ...]


def _info_language(info: str) -> str:
    head = info.strip().split(None, 1)
    if not head:
        return ""
    return head[0].strip("{}.").lower()


def split_markdown(text: str, languages: Iterable[str]) -> SplitDocument:
    wanted = {lang.lower() for lang in languages}
    regions: list[CodeRegion] = []
    prose: list[tuple[int, str]] = []
    fence: str | None = None
    scanning = False
    buffer: list[str] = []
    start = 0
    for index, line in enumerate(text.splitlines(), start=1):
        match = _FENCE_RE.match(line)
        if fence is None:
            if match:
                fence = match.group("marker")
                scanning = _info_language(match.group("info")) in wanted
                buffer = []
                start = index + 1
                continue
            prose.append((index, line))
            continue
        closing = line.strip()
        if closing and set(closing) == {fence[0]} and len(closing) >= len(fence):
            if scanning:
                regions.append(CodeRegion(start_line=start, text="\n".join(buffer)))
            fence = None
            scanning = False
            continue
        if scanning:
            buffer.append(line)
    # an unterminated fence still yields what it collected
    if fence is not None and scanning and buffer:
        regions.append(CodeRegion(start_line=start, text="\n".join(buffer)))
    return SplitDocument(regions=tuple(regions), prose=tuple(prose))


def split_document(text: str, *, markdown: bool, languages: Iterable[str]) -> SplitDocument:
    if markdown:
        return split_markdown(text, languages)
    return SplitDocument(regions=(CodeRegion(start_line=1, text=text),), prose=())


def code_regions(text: str, *, markdown: bool, languages: Iterable[str]) -> list[CodeRegion]:
    return list(split_document(text, markdown=markdown, languages=languages).regions)
