"""Shared data models for the combat compiler.

All models use Pydantic for validation and are immutable.
"""

from autocombat.models.actions import Step, StepType
from autocombat.models.opponents import Opponent
from autocombat.models.program import Branch, Program
from autocombat.models.resources import BanishSource, RunawaySource, WandererSource

__all__ = [
    "BanishSource",
    "Branch",
    "Opponent",
    "Program",
    "RunawaySource",
    "Step",
    "StepType",
    "WandererSource",
]
