"""Verifier configuration.

Every heuristic table the checks rely on lives here as plain data so that a
project can extend it from a YAML file without touching the algorithms:

```yaml
external_modules: [zod, express, "@prisma/client"]
type_equivalences:
  - [Date, string]
naming_pairs:
  - {left: "^Create\\w+Input$", right: "^Update\\w+Input$"}
naming_threshold: 0.85
```

Keys omitted from the file keep their defaults; list values replace the
default list rather than extending it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import cached_property
from pathlib import Path
from typing import Any

import yaml

from ..contracts.schema.validate import validate
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_VALIDATION
from .yaml_utils import load_yaml

CONFIG_SCHEMA = "contractctl.config.v1"


@dataclass(frozen=True)
class NamingPairRule:
    left: str
    right: str

    @cached_property
    def _compiled(self) -> tuple[re.Pattern[str], re.Pattern[str]]:
        return re.compile(self.left), re.compile(self.right)

    def matches(self, a: str, b: str) -> bool:
        left, right = self._compiled
        return bool((left.search(a) and right.search(b)) or (right.search(a) and left.search(b)))


DEFAULT_FENCE_LANGUAGES: tuple[str, ...] = ("typescript", "ts", "tsx")
DEFAULT_EXTERNAL_MODULES: tuple[str, ...] = ("zod", "express", "prisma", "@prisma/client", "date-fns", "lodash")
DEFAULT_SHARED_MARKERS: tuple[str, ...] = ("shared",)
DEFAULT_TYPE_EQUIVALENCES: tuple[tuple[str, str], ...] = (("Date", "string"),)
DEFAULT_NAMING_PAIRS: tuple[NamingPairRule, ...] = (
    NamingPairRule(r"^Create\w+Input$", r"^Update\w+Input$"),
    NamingPairRule(r"^Create\w+Request$", r"^Update\w+Request$"),
    NamingPairRule(r"^Create\w+Response$", r"^Update\w+Response$"),
    NamingPairRule(r"^\w+Request$", r"^\w+Response$"),
    NamingPairRule(r"^\w+Input$", r"^\w+Output$"),
    NamingPairRule(r"^\w+Id$", r"^\w+Ref$"),
    NamingPairRule(r"^\w+Id$", r"^\w+Id$"),
    NamingPairRule(r"^\w+Ref$", r"^\w+Ref$"),
    NamingPairRule(r"^\w+Score$", r"^\w+Scores$"),
    NamingPairRule(r"^I\w+Service$", r"^I\w+Repository$"),
)
DEFAULT_STRIPPABLE_SUFFIXES: tuple[str, ...] = (
    "Id",
    "Ids",
    "Ref",
    "Refs",
    "Input",
    "Inputs",
    "Output",
    "Outputs",
    "Request",
    "Requests",
    "Response",
    "Responses",
    "Type",
    "Types",
    "Status",
    "Statuses",
    "Score",
    "Scores",
)
DEFAULT_SERVICE_SUFFIXES: tuple[str, ...] = ("Service", "Repository")


@dataclass(frozen=True)
class VerifierConfig:
    fence_languages: tuple[str, ...] = DEFAULT_FENCE_LANGUAGES
    external_modules: tuple[str, ...] = DEFAULT_EXTERNAL_MODULES
    scoped_modules_are_external: bool = True
    shared_markers: tuple[str, ...] = DEFAULT_SHARED_MARKERS
    type_equivalences: tuple[tuple[str, str], ...] = DEFAULT_TYPE_EQUIVALENCES
    naming_threshold: float = 0.85
    naming_pairs: tuple[NamingPairRule, ...] = DEFAULT_NAMING_PAIRS
    strippable_suffixes: tuple[str, ...] = DEFAULT_STRIPPABLE_SUFFIXES
    reference_suffix: str = "Ref"
    service_suffixes: tuple[str, ...] = DEFAULT_SERVICE_SUFFIXES
    markdown_suffixes: tuple[str, ...] = (".md", ".markdown")

    def as_dict(self) -> dict[str, Any]:
        return {
            "fence_languages": list(self.fence_languages),
            "external_modules": list(self.external_modules),
            "scoped_modules_are_external": self.scoped_modules_are_external,
            "shared_markers": list(self.shared_markers),
            "type_equivalences": [list(pair) for pair in self.type_equivalences],
            "naming_threshold": self.naming_threshold,
            "naming_pairs": [{"left": rule.left, "right": rule.right} for rule in self.naming_pairs],
            "strippable_suffixes": list(self.strippable_suffixes),
            "reference_suffix": self.reference_suffix,
            "service_suffixes": list(self.service_suffixes),
            "markdown_suffixes": list(self.markdown_suffixes),
        }


def default_config() -> VerifierConfig:
    return VerifierConfig()


_TUPLE_KEYS = (
    "fence_languages",
    "external_modules",
    "shared_markers",
    "strippable_suffixes",
    "service_suffixes",
    "markdown_suffixes",
)


def config_from_mapping(raw: dict[str, Any], base: VerifierConfig | None = None) -> VerifierConfig:
    try:
        validate(CONFIG_SCHEMA, raw)
    except ScriptError as exc:
        if exc.code == ERR_VALIDATION:
            raise ScriptError(f"invalid config: {exc.message}", ERR_CONFIG, kind="config_error") from exc
        raise
    updates: dict[str, Any] = {}
    for key in _TUPLE_KEYS:
        if key in raw:
            updates[key] = tuple(str(item) for item in raw[key])
    if "type_equivalences" in raw:
        updates["type_equivalences"] = tuple((str(a), str(b)) for a, b in raw["type_equivalences"])
    if "naming_pairs" in raw:
        rules = tuple(NamingPairRule(str(row["left"]), str(row["right"])) for row in raw["naming_pairs"])
        for rule in rules:
            for pattern in (rule.left, rule.right):
                try:
                    re.compile(pattern)
                except re.error as exc:
                    raise ScriptError(f"invalid config: naming pair pattern `{pattern}`: {exc}", ERR_CONFIG, kind="config_error") from exc
        updates["naming_pairs"] = rules
    for key in ("scoped_modules_are_external", "naming_threshold", "reference_suffix"):
        if key in raw:
            updates[key] = raw[key]
    return replace(base or default_config(), **updates)


def load_config(path: Path) -> VerifierConfig:
    if not path.is_file():
        raise ScriptError(f"config file not found: {path}", ERR_CONFIG, kind="config_error")
    try:
        raw = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid config {path}: {exc}", ERR_CONFIG, kind="config_error") from exc
    if raw is None:
        return default_config()
    if not isinstance(raw, dict):
        raise ScriptError(f"invalid config {path}: root must be mapping", ERR_CONFIG, kind="config_error")
    return config_from_mapping(raw)
