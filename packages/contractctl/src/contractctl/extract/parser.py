from __future__ import annotations

import re
from pathlib import Path

from ..core.config import VerifierConfig, default_config
from ..errors import DocumentReadError
from .declarations import scan_region
from .fences import split_document
from .imports import extract_imports
from .model import ApiRoute, Declaration, Document, ImportRef, ServiceMethod, SourceLocation

_ROUTE_RE = re.compile(r"^###\s+(?P<method>GET|POST|PUT|PATCH|DELETE)\s+(?P<path>\S+)")
_TITLE_RE = re.compile(r"^#\s+(?P<title>.+?)\s*$")


def is_markdown(identifier: str, config: VerifierConfig) -> bool:
    return identifier.lower().endswith(tuple(suffix.lower() for suffix in config.markdown_suffixes))


def _title(prose: tuple[tuple[int, str], ...], identifier: str) -> str:
    for _, line in prose:
        match = _TITLE_RE.match(line)
        if match:
            title = re.sub(r"\s+Contract$", "", match.group("title"))
            return re.sub(r"\s+Domain$", "", title).strip()
    stem = Path(identifier).stem
    return re.sub(r"-CONTRACT$", "", stem, flags=re.IGNORECASE).replace("-", " ")


def parse_text(text: str, identifier: str, *, config: VerifierConfig | None = None) -> Document:
    cfg = config or default_config()
    markdown = is_markdown(identifier, cfg)
    split = split_document(text, markdown=markdown, languages=cfg.fence_languages)
    declarations: list[Declaration] = []
    imports: list[ImportRef] = []
    methods: list[ServiceMethod] = []
    for region in split.regions:
        imports.extend(extract_imports(region, identifier))
        found = scan_region(region, identifier, service_suffixes=cfg.service_suffixes)
        declarations.extend(found.declarations)
        methods.extend(found.service_methods)
    routes: list[ApiRoute] = []
    for line_no, line in split.prose:
        match = _ROUTE_RE.match(line)
        if match:
            routes.append(ApiRoute(method=match.group("method"), path=match.group("path"), location=SourceLocation(identifier, line_no)))
    return Document(
        identifier=identifier,
        declarations=tuple(declarations),
        imports=tuple(imports),
        service_methods=tuple(methods),
        api_routes=tuple(routes),
        title=_title(split.prose, identifier) if markdown else Path(identifier).stem,
    )


def read_document_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentReadError(str(path), "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(str(path), str(exc)) from exc


def parse_document(path: str | Path, *, config: VerifierConfig | None = None) -> Document:
    target = Path(path)
    text = read_document_text(target)
    return parse_text(text, target.as_posix(), config=config)
