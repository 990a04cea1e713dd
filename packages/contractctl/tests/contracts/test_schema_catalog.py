from __future__ import annotations

import json
from pathlib import Path

import pytest

from contractctl.contracts.schema import load_catalog, schema_path_for, validate, validate_file
from contractctl.contracts.schema.schemas import schemas_root
from contractctl.errors import ScriptError
from contractctl.exit_codes import ERR_VALIDATION


def test_catalog_is_consistent_with_schema_files() -> None:
    catalog = load_catalog()
    assert sorted(entry.file for entry in catalog.values()) == sorted(p.name for p in schemas_root().glob("*.schema.json"))
    assert sorted(catalog) == ["contractctl.config.v1", "contractctl.report.v1", "contractctl.vocabulary.v1"]
    for name in catalog:
        assert schema_path_for(name).is_file()


def test_unknown_schema_is_a_validation_error() -> None:
    with pytest.raises(ScriptError) as err:
        schema_path_for("contractctl.nope.v1")
    assert err.value.code == ERR_VALIDATION


def test_validation_error_names_the_failing_pointer() -> None:
    with pytest.raises(ScriptError) as err:
        validate("contractctl.config.v1", {"naming_pairs": [{"left": "a"}]})
    assert err.value.code == ERR_VALIDATION
    assert "naming_pairs/0" in err.value.message


def test_validate_file(tmp_path: Path) -> None:
    good = tmp_path / "cfg.json"
    good.write_text(json.dumps({"naming_threshold": 0.9}), encoding="utf-8")
    validate_file("contractctl.config.v1", good)
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        validate_file("contractctl.config.v1", broken)
    assert err.value.code == ERR_VALIDATION
