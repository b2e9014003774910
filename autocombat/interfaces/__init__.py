"""Abstract interfaces and shared tags for the combat compiler."""

from autocombat.interfaces.combat import (
    CombatContext,
    Intent,
    InvalidConfigurationError,
    StrategyError,
    WeaponCategory,
)

__all__ = [
    "CombatContext",
    "Intent",
    "InvalidConfigurationError",
    "StrategyError",
    "WeaponCategory",
]
