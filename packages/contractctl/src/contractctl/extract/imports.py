from __future__ import annotations

import re

from .fences import CodeRegion
from .model import ImportRef, SourceLocation
from .scan import IDENT, IDENT_RE, build_views, collapse

_IMPORT_RE = re.compile(
    rf"\bimport\s+(?:type\s+)?(?:{IDENT}\s*,\s*)?\{{(?P<names>[^{{}}]*)\}}\s*from\s*(?P<quote>['\"])(?P<module>[^'\"\n]*)(?P=quote)"
)
_TYPE_MODIFIER_RE = re.compile(r"^type\s+")
_ALIAS_RE = re.compile(rf"^(?P<name>{IDENT})\s+as\s+{IDENT}$")


def import_names(raw: str) -> list[str]:
    """Names bound by an import list, with ``as`` aliases reduced to the original name."""
    names: list[str] = []
    for chunk in raw.split(","):
        item = _TYPE_MODIFIER_RE.sub("", collapse(chunk))
        if not item:
            continue
        alias = _ALIAS_RE.match(item)
        if alias:
            item = alias.group("name")
        if IDENT_RE.match(item):
            names.append(item)
    return names


def extract_imports(region: CodeRegion, document: str) -> list[ImportRef]:
    views = build_views(region.text)
    imports: list[ImportRef] = []
    for match in _IMPORT_RE.finditer(views.masked):
        module = views.clean[match.start("module") : match.end("module")].strip()
        if not module:
            continue
        line = region.start_line + views.line_of(match.start())
        location = SourceLocation(document, line)
        for name in import_names(views.clean[match.start("names") : match.end("names")]):
            imports.append(ImportRef(name=name, source_module=module, location=location))
    return imports
