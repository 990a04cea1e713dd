from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeclarationKind(str, Enum):
    RECORD = "record"
    ALIAS = "alias"
    ENUMERATION = "enumeration"
    CONSTANT_GROUP = "constant-group"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class SourceLocation:
    document: str
    line: int

    def __str__(self) -> str:
        return f"{self.document}:{self.line}"


@dataclass(frozen=True)
class Field:
    name: str
    type_expression: str = ""
    optional: bool = False


@dataclass(frozen=True)
class Declaration:
    name: str
    kind: DeclarationKind
    location: SourceLocation
    fields: tuple[Field, ...] = ()
    supertypes: tuple[str, ...] = ()
    type_expression: str = ""

    @property
    def document(self) -> str:
        return self.location.document

    @property
    def line(self) -> int:
        return self.location.line

    def get_field(self, name: str) -> Field | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.fields)


@dataclass(frozen=True)
class ImportRef:
    name: str
    source_module: str
    location: SourceLocation


@dataclass(frozen=True)
class Parameter:
    name: str
    type_expression: str
    optional: bool = False


@dataclass(frozen=True)
class ServiceMethod:
    owner: str
    name: str
    parameters: tuple[Parameter, ...]
    return_type: str
    location: SourceLocation


@dataclass(frozen=True)
class ApiRoute:
    method: str
    path: str
    location: SourceLocation


@dataclass(frozen=True)
class Document:
    identifier: str
    declarations: tuple[Declaration, ...] = ()
    imports: tuple[ImportRef, ...] = ()
    service_methods: tuple[ServiceMethod, ...] = ()
    api_routes: tuple[ApiRoute, ...] = ()
    title: str = ""
    _by_name: dict[str, Declaration] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Declaration] = {}
        for decl in self.declarations:
            index.setdefault(decl.name, decl)
        object.__setattr__(self, "_by_name", index)

    def declaration(self, name: str) -> Declaration | None:
        return self._by_name.get(name)

    def declares(self, name: str) -> bool:
        return name in self._by_name

    def declared_names(self) -> list[str]:
        return list(self._by_name)

    def imported_names(self) -> set[str]:
        return {item.name for item in self.imports}
