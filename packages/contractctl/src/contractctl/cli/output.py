"""CLI payload output helpers."""

from __future__ import annotations

from pathlib import Path

from ..core.serialize import dumps_json


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def build_base_payload(ctx, status: str = "ok") -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "contractctl",
        "status": status,
        "run_id": ctx.run_id,
        "profile": ctx.profile,
        "format": ctx.output_format,
        "config": str(ctx.config_path) if ctx.config_path else None,
    }


def resolve_output_format(*, cli_json: bool, cli_format: str | None) -> str:
    if cli_json:
        return "json"
    return cli_format or "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "contractctl.error.v1",
                "schema_version": 1,
                "tool": "contractctl",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return f"error: {message}"


def write_out_file(path: str | Path, rendered: str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(rendered + "\n", encoding="utf-8")
    return target
