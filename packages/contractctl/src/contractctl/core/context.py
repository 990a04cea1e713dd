from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .clock import utc_now
from .config import VerifierConfig, default_config, load_config
from .env import getenv

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    profile: str
    output_format: OutputFormat = "text"
    verbose: bool = False
    quiet: bool = False
    log_json: bool = False
    config_path: Path | None = None
    config: VerifierConfig = field(default_factory=default_config)

    @property
    def as_json(self) -> bool:
        return self.output_format == "json"

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        profile: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
        config_path: str | None = None,
    ) -> "RunContext":
        default_run = f"contractctl-{utc_now().strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv("RUN_ID", default_run) or default_run
        resolved_profile = profile or getenv("PROFILE", "local") or "local"
        raw_config = config_path or getenv("CONTRACTCTL_CONFIG")
        resolved_config_path = Path(raw_config) if raw_config else None
        config = load_config(resolved_config_path) if resolved_config_path else default_config()
        return cls(
            run_id=resolved_run_id,
            profile=resolved_profile,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
            config_path=resolved_config_path,
            config=config,
        )
