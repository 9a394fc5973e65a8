"""Run configuration and command-line option parsing."""

from .debug_config import DEFAULT_CLASS_NAME, DebugConfig, DebugTarget, build_parser, parse_config

__all__ = [
    "DEFAULT_CLASS_NAME",
    "DebugConfig",
    "DebugTarget",
    "build_parser",
    "parse_config",
]
