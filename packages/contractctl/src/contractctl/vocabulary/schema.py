"""What a complete shared vocabulary declares.

Per-domain expectations are name templates (``$domain`` is substituted) and
the declaration kind that satisfies them; the first template is the preferred
name used in suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import Template

from ..extract.model import DeclarationKind


@dataclass(frozen=True)
class DomainExpectation:
    label: str
    kind: DeclarationKind
    templates: tuple[str, ...]
    suggestion: str

    def names(self, domain: str) -> tuple[str, ...]:
        return tuple(Template(item).substitute(domain=domain) for item in self.templates)

    def suggest(self, domain: str) -> str:
        return Template(self.suggestion).substitute(domain=domain, name=self.names(domain)[0])


@dataclass(frozen=True)
class CommonExpectation:
    name: str
    kind: DeclarationKind
    suggestion: str


@dataclass(frozen=True)
class VocabularySchema:
    domain_items: tuple[DomainExpectation, ...]
    common_items: tuple[CommonExpectation, ...] = ()


DEFAULT_SCHEMA = VocabularySchema(
    domain_items=(
        DomainExpectation(
            label="ID Type",
            kind=DeclarationKind.ALIAS,
            templates=("${domain}Id",),
            suggestion="type $name = string & { readonly __brand: '$name' };",
        ),
        DomainExpectation(
            label="Ref Interface",
            kind=DeclarationKind.RECORD,
            templates=("${domain}Ref",),
            suggestion="interface $name {\n  id: ${domain}Id;\n  name?: string;\n}",
        ),
        DomainExpectation(
            label="State/Status Enum",
            kind=DeclarationKind.ENUMERATION,
            templates=("${domain}State", "${domain}Status"),
            suggestion="enum $name {\n  DRAFT = 'draft',\n  ACTIVE = 'active',\n  ARCHIVED = 'archived'\n}",
        ),
        DomainExpectation(
            label="Type Enum",
            kind=DeclarationKind.ENUMERATION,
            templates=("${domain}Type",),
            suggestion="enum $name {\n  DEFAULT = 'default',\n  CUSTOM = 'custom'\n}",
        ),
    ),
    common_items=(
        CommonExpectation(
            "ApiResponse",
            DeclarationKind.ALIAS,
            "type ApiResponse<T> = { success: boolean; data?: T; error?: { code: string; message: string; } };",
        ),
        CommonExpectation(
            "PaginatedResponse",
            DeclarationKind.ALIAS,
            "type PaginatedResponse<T> = { items: T[]; total: number; page: number; limit: number; hasMore: boolean; };",
        ),
        CommonExpectation("ISOTimestamp", DeclarationKind.ALIAS, "type ISOTimestamp = string & { readonly __brand: 'ISOTimestamp' };"),
        CommonExpectation("ISODate", DeclarationKind.ALIAS, "type ISODate = string & { readonly __brand: 'ISODate' };"),
        CommonExpectation("Timestamps", DeclarationKind.RECORD, "interface Timestamps {\n  createdAt: ISOTimestamp;\n  updatedAt: ISOTimestamp;\n}"),
        CommonExpectation(
            "PaginationParams",
            DeclarationKind.RECORD,
            "interface PaginationParams {\n  page?: number;\n  limit?: number;\n  sortBy?: string;\n  sortOrder?: 'asc' | 'desc';\n}",
        ),
    ),
)
