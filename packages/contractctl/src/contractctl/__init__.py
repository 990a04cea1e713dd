__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checks",
    "cli",
    "contracts",
    "core",
    "errors",
    "exit_codes",
    "extract",
    "report",
    "verify",
    "vocabulary",
]
