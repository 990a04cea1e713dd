"""Runtime plumbing shared by the CLI and the verification engine."""

from __future__ import annotations

from .config import VerifierConfig, default_config, load_config
from .context import RunContext
from .logging import log_event

__all__ = ["RunContext", "VerifierConfig", "default_config", "load_config", "log_event"]
