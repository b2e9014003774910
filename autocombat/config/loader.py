"""Configuration loader for the combat compiler.

Loads configuration from YAML files and environment variables.
Environment variables override YAML values using the AUTOCOMBAT_ prefix.
Nested keys use double underscores: AUTOCOMBAT_COMPILER__ESCALATION_FACTOR=1.5
"""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class DebuffKind(StrEnum):
    """Whether a debuff attempt casts a skill or uses an item."""

    SKILL = "skill"
    ITEM = "item"


class DebuffAttempt(BaseModel):
    """One best-effort debuff tried before a kill finisher."""

    kind: DebuffKind = Field(..., description="Skill or item")
    name: str = Field(..., min_length=1)


def _default_debuff_prefix() -> list[DebuffAttempt]:
    return [
        DebuffAttempt(kind=DebuffKind.SKILL, name="Pocket Crumbs"),
        DebuffAttempt(kind=DebuffKind.SKILL, name="Micrometeorite"),
        DebuffAttempt(kind=DebuffKind.ITEM, name="Rain-Doh indigo cup"),
        DebuffAttempt(kind=DebuffKind.SKILL, name="Summon Love Mosquito"),
        DebuffAttempt(kind=DebuffKind.ITEM, name="Time-Spinner"),
    ]


class CompilerConfig(BaseModel):
    """Tuning for intent compilation."""

    escalation_factor: float = Field(
        default=1.25, gt=0.0, description="Defense multiplier that triggers KillHard"
    )
    physical_resistance_threshold: float = Field(
        default=70.0, ge=0.0, le=100.0, description="Resistance at which kills switch to spells"
    )
    opener_skills: list[str] = Field(default_factory=lambda: ["Curse of Weaksauce"])
    debuff_prefix: list[DebuffAttempt] = Field(default_factory=_default_debuff_prefix)
    area_skill: str = Field(default="Saucegeyser", min_length=1)
    melee_skill: str = Field(default="Lunging Thrust-Smack", min_length=1)
    flee_buff_skill: str = Field(default="Saucestorm", min_length=1)


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="readable", pattern="^(readable|json)$")


class Config(BaseModel):
    """Root configuration model."""

    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _get_env_value(key: str) -> str | None:
    """Get environment variable with AUTOCOMBAT_ prefix."""
    env_key = f"AUTOCOMBAT_{key.upper()}"
    return os.environ.get(env_key)


def _apply_env_overrides(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Apply environment variable overrides to config data.

    Only keys present in the loaded data can be overridden. Lists of plain
    strings accept a comma-separated value; lists of mappings cannot be
    overridden from the environment.
    """
    result = data.copy()

    for key, value in result.items():
        env_key = f"{prefix}__{key}" if prefix else key

        if isinstance(value, dict):
            result[key] = _apply_env_overrides(value, env_key)
        else:
            env_value = _get_env_value(env_key)
            if env_value is not None:
                # Convert to appropriate type based on original value
                if isinstance(value, bool):
                    result[key] = env_value.lower() in ("true", "1", "yes")
                elif isinstance(value, int):
                    result[key] = int(env_value)
                elif isinstance(value, float):
                    result[key] = float(env_value)
                elif isinstance(value, list):
                    # Structured lists such as debuff_prefix are YAML-only.
                    if all(isinstance(item, str) for item in value):
                        result[key] = [part.strip() for part in env_value.split(",") if part.strip()]
                else:
                    result[key] = env_value

    return result


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. If None, uses default.yaml.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config values are invalid.
    """
    if config_path is None:
        project_root = Path(__file__).parent.parent.parent
        config_path = project_root / "configs" / "default.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)

    return Config.model_validate(data)


def get_default_config() -> Config:
    """Get default configuration without loading from file."""
    return Config()
