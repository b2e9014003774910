"""Configuration management for the combat compiler."""

from autocombat.config.loader import (
    CompilerConfig,
    Config,
    DebuffAttempt,
    DebuffKind,
    LoggingConfig,
    get_default_config,
    load_config,
)

__all__ = [
    "CompilerConfig",
    "Config",
    "DebuffAttempt",
    "DebuffKind",
    "LoggingConfig",
    "get_default_config",
    "load_config",
]
