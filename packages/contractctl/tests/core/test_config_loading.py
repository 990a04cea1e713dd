from __future__ import annotations

from pathlib import Path

import pytest

from contractctl.core.config import NamingPairRule, config_from_mapping, default_config, load_config
from contractctl.core.context import RunContext
from contractctl.errors import ScriptError
from contractctl.exit_codes import ERR_CONFIG


def test_yaml_overrides_keep_unlisted_defaults(tmp_path: Path) -> None:
    path = tmp_path / "contractctl.yaml"
    path.write_text(
        "external_modules: [zod, '@tanstack/query']\n"
        "naming_threshold: 0.9\n"
        "type_equivalences:\n"
        "  - [Date, string]\n"
        "  - [bigint, number]\n"
        "naming_pairs:\n"
        "  - {left: '^\\w+Draft$', right: '^\\w+Final$'}\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.external_modules == ("zod", "@tanstack/query")
    assert cfg.naming_threshold == 0.9
    assert cfg.type_equivalences == (("Date", "string"), ("bigint", "number"))
    assert cfg.naming_pairs == (NamingPairRule(r"^\w+Draft$", r"^\w+Final$"),)
    assert cfg.reference_suffix == default_config().reference_suffix
    assert cfg.fence_languages == default_config().fence_languages


def test_empty_file_means_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == default_config()


@pytest.mark.parametrize(
    "body",
    [
        "unknown_key: 1\n",
        "similarity_threshold: 0.7\n",
        "naming_threshold: 1.5\n",
        "external_modules: zod\n",
        "- just\n- a list\n",
        "naming_pairs: [{left: '(', right: 'x'}]\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_config_is_a_config_error(tmp_path: Path, body: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        load_config(path)
    assert err.value.code == ERR_CONFIG


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as err:
        load_config(tmp_path / "nope.yaml")
    assert err.value.code == ERR_CONFIG


def test_config_round_trips_through_mapping() -> None:
    cfg = default_config()
    assert config_from_mapping(cfg.as_dict()) == cfg


def test_run_context_reads_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("reference_suffix: Reference\n", encoding="utf-8")
    monkeypatch.setenv("RUN_ID", "env-run")
    monkeypatch.setenv("PROFILE", "ci")
    monkeypatch.setenv("CONTRACTCTL_CONFIG", str(path))
    ctx = RunContext.from_args(None, None)
    assert ctx.run_id == "env-run"
    assert ctx.profile == "ci"
    assert ctx.config_path == path
    assert ctx.config.reference_suffix == "Reference"


def test_run_context_defaults() -> None:
    ctx = RunContext.from_args(None, None, "json")
    assert ctx.run_id.startswith("contractctl-")
    assert ctx.profile == "local"
    assert ctx.as_json
    assert ctx.config == default_config()
