"""Import resolution across the document set.

Every import must name something declared in the shared vocabulary or in a
contract, unless it comes from a module that is out of scope: a known
external library, a scoped package, or a relative path that does not point at
the shared vocabulary. Names a contract uses in a field type or alias
expression but never imports are reported against the same category.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from ..core.config import VerifierConfig, default_config
from ..extract.model import Declaration, DeclarationKind, Document
from ..extract.scan import IDENT
from .model import Issue, IssueCategory, error

_STRING_RE = re.compile(r"'[^']*'|\"[^\"]*\"|`[^`]*`")
_MEMBER_KEY_RE = re.compile(rf"(?:readonly\s+)?{IDENT}\??\s*:(?!:)")
_TOKEN_RE = re.compile(IDENT)


def _module_stem(segment: str) -> str:
    return segment.split(".", 1)[0].lower()


def is_exempt_module(source_module: str, *, config: VerifierConfig | None = None, vocabulary: str = "") -> bool:
    cfg = config or default_config()
    module = source_module.strip()
    if module in cfg.external_modules:
        return True
    if cfg.scoped_modules_are_external and module.startswith("@"):
        return True
    if module.startswith("."):
        last = module.rstrip("/").rsplit("/", 1)[-1]
        stem = _module_stem(last)
        if vocabulary and stem and stem == _module_stem(vocabulary.replace("\\", "/").rsplit("/", 1)[-1]):
            return False
        return not any(marker.lower() in module.lower() for marker in cfg.shared_markers)
    return False


def referenced_names(expression: str) -> list[str]:
    """Identifiers a type expression refers to, in order of first use.

    String literal members and the keys of inline object members are dropped.
    """
    text = _STRING_RE.sub(" ", expression)
    text = _MEMBER_KEY_RE.sub(" ", text)
    names: list[str] = []
    for token in _TOKEN_RE.findall(text):
        if token not in names:
            names.append(token)
    return names


def _expressions(declaration: Declaration) -> Iterable[str]:
    if declaration.kind is DeclarationKind.RECORD:
        for item in declaration.fields:
            yield item.type_expression
    elif declaration.kind is DeclarationKind.ALIAS:
        yield declaration.type_expression


def _declaring_documents(documents: Sequence[Document]) -> dict[str, str]:
    owners: dict[str, str] = {}
    for document in documents:
        for name in document.declared_names():
            owners.setdefault(name, document.identifier)
    return owners


def check_imports(vocabulary: Document, contracts: Sequence[Document], *, config: VerifierConfig | None = None) -> list[Issue]:
    cfg = config or default_config()
    owners = _declaring_documents([vocabulary, *contracts])
    issues: list[Issue] = []
    for contract in contracts:
        for item in contract.imports:
            if is_exempt_module(item.source_module, config=cfg, vocabulary=vocabulary.identifier):
                continue
            if item.name in owners:
                continue
            issues.append(
                error(
                    IssueCategory.UNRESOLVED_IMPORT,
                    f"Unresolved import: '{item.name}' from '{item.source_module}'",
                    contract.identifier,
                    item.location.line,
                    f"Ensure '{item.name}' is defined in shared primitives or another contract",
                )
            )
    for contract in contracts:
        imported = contract.imported_names()
        reported: set[str] = set()
        for declaration in contract.declarations:
            for expression in _expressions(declaration):
                for name in referenced_names(expression):
                    owner = owners.get(name)
                    if owner is None or owner == contract.identifier or name in reported:
                        continue
                    if name in imported or contract.declares(name):
                        continue
                    reported.add(name)
                    issues.append(
                        error(
                            IssueCategory.UNRESOLVED_IMPORT,
                            f"Unresolved import: '{name}' is used by '{declaration.name}' but never imported (declared in {owner})",
                            contract.identifier,
                            declaration.line,
                            f"Add '{name}' to an import from {owner}",
                        )
                    )
    return issues
