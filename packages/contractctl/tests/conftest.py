from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from hypothesis import settings
from hypothesis.database import DirectoryBasedExampleDatabase

from contractctl.core.context import RunContext

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

_ROOT = Path(__file__).resolve().parents[3]
_HYPOTHESIS_DB = _ROOT / "artifacts/contractctl/.hypothesis/examples"
_HYPOTHESIS_DB.parent.mkdir(parents=True, exist_ok=True)
settings.register_profile("contractctl", database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB), deadline=None)
settings.load_profile("contractctl")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTRACTCTL_CONFIG", "RUN_ID", "PROFILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def run_ctx() -> RunContext:
    return RunContext(run_id="r1", profile="test")
