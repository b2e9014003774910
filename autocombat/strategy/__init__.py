"""Strategy package: strategy tables and their compilation into combat programs."""

from autocombat.strategy.builder import BuiltCombatStrategy
from autocombat.strategy.compiler import IntentCompiler
from autocombat.strategy.context import StaticCombatContext
from autocombat.strategy.table import CombatStrategy

__all__ = [
    "BuiltCombatStrategy",
    "CombatStrategy",
    "IntentCompiler",
    "StaticCombatContext",
]
