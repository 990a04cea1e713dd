from __future__ import annotations

import argparse
import glob
import sys

from .. import __version__
from ..contracts.schema.validate import validate_file
from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_USAGE, ERR_VERIFY, OK
from ..report import build_report_payload, render_json, render_text
from ..verify import verify_contracts
from ..vocabulary import build_vocabulary_payload, parse_domains, render_vocabulary_text, validate_vocabulary
from .output import build_base_payload, emit, render_error, resolve_output_format, write_out_file

_GLOB_CHARS = set("*?[")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="contractctl", description="cross-document contract consistency checker")
    p.add_argument("--version", action="version", version=f"contractctl {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier recorded in reports and logs")
    p.add_argument("--profile", help="profile id")
    p.add_argument("--config", help="YAML verifier configuration (default: $CONTRACTCTL_CONFIG)")
    p.add_argument("--log-json", action="store_true", help="write structured log lines as JSON")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    verify_p = sub.add_parser("verify", help="cross-check contract documents against the shared vocabulary")
    verify_p.add_argument("--primitives", required=True, help="shared vocabulary document")
    verify_p.add_argument("--contracts", required=True, nargs="+", help="contract documents or glob patterns")
    verify_p.add_argument("--jobs", type=int, default=1, help="parse documents on this many threads")
    verify_p.add_argument("--out-file", help="optional output path for the JSON report")

    validate_p = sub.add_parser("validate", help="check the shared vocabulary covers the given domains")
    validate_p.add_argument("--primitives", required=True, help="shared vocabulary document")
    validate_p.add_argument("--domains", required=True, help="comma separated domain names, e.g. User,Order")
    validate_p.add_argument("--out-file", help="optional output path for the JSON result")

    val_p = sub.add_parser("validate-output", help="validate JSON output against schema")
    val_p.add_argument("--schema", required=True)
    val_p.add_argument("--file", required=True)

    sub.add_parser("version", help="print version")
    return p


def expand_contract_paths(patterns: list[str]) -> list[str]:
    paths: list[str] = []
    for pattern in patterns:
        if not _GLOB_CHARS.intersection(pattern):
            matches = [pattern]
        else:
            matches = sorted(glob.glob(pattern, recursive=True))
            if not matches:
                raise ScriptError(f"no contract documents match `{pattern}`", ERR_USAGE, kind="usage_error")
        for match in matches:
            if match not in paths:
                paths.append(match)
    return paths


def _run_verify(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.jobs < 1:
        raise ScriptError("--jobs must be at least 1", ERR_USAGE, kind="usage_error")
    contracts = expand_contract_paths(ns.contracts)
    report = verify_contracts(ns.primitives, contracts, verbose=ctx.verbose, ctx=ctx, jobs=ns.jobs)
    payload = build_report_payload(report, run_id=ctx.run_id)
    if ns.out_file:
        write_out_file(ns.out_file, dumps_json(payload, pretty=True))
    if ctx.as_json:
        print(render_json(payload))
    else:
        print(render_text(payload, verbose=ctx.verbose))
    return OK if report.passed else ERR_VERIFY


def _run_validate(ctx: RunContext, ns: argparse.Namespace) -> int:
    domains = parse_domains(ns.domains)
    if not domains:
        raise ScriptError("--domains needs at least one domain name", ERR_USAGE, kind="usage_error")
    result = validate_vocabulary(ns.primitives, domains, ctx=ctx)
    payload = build_vocabulary_payload(result, run_id=ctx.run_id)
    if ns.out_file:
        write_out_file(ns.out_file, dumps_json(payload, pretty=True))
    if ctx.as_json:
        print(dumps_json(payload))
    else:
        print(render_vocabulary_text(result, verbose=ctx.verbose))
    return OK if result.passed else ERR_VERIFY


def _run_validate_output(ctx: RunContext, ns: argparse.Namespace) -> int:
    validate_file(ns.schema, ns.file)
    if ctx.as_json:
        emit({**build_base_payload(ctx), "schema": ns.schema, "file": ns.file}, True)
    else:
        print(f"ok: {ns.file} matches {ns.schema}")
    return OK


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(raw_argv)
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format)
    if ns.format and ns.json and ns.format != "json":
        print(render_error(as_json=False, message="conflicting output flags: use either --format json or --json", code=ERR_USAGE), file=sys.stderr)
        return ERR_USAGE
    as_json = fmt == "json"
    try:
        ctx = RunContext.from_args(ns.run_id, ns.profile, fmt, ns.verbose, ns.quiet, ns.log_json, ns.config)
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
        if ns.cmd == "version":
            if as_json:
                emit({**build_base_payload(ctx), "contractctl_version": __version__}, True)
            else:
                print(f"contractctl {__version__}")
            return OK
        if ns.cmd == "verify":
            return _run_verify(ctx, ns)
        if ns.cmd == "validate":
            return _run_validate(ctx, ns)
        if ns.cmd == "validate-output":
            return _run_validate_output(ctx, ns)
        return ERR_USAGE
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
