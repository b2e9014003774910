"""Live-context resources that change how a strategy is compiled."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from autocombat.models.actions import Step, StepType
from autocombat.models.opponents import Opponent
from autocombat.models.program import Program


class WandererSource(BaseModel):
    """A special encounter that must always be killed when it shows up."""

    name: str = Field(..., min_length=1, description="Source of the encounter")
    monster: Opponent = Field(..., description="Opponent the encounter brings")

    model_config = {"frozen": True}


class BanishSource(BaseModel):
    """A skill or item that removes an opponent from the encounter pool."""

    name: str = Field(..., min_length=1, description="Source of the banish")
    do: Step = Field(..., description="Skill or item step that banishes")

    model_config = {"frozen": True}

    @field_validator("do")
    @classmethod
    def _skill_or_item(cls, value: Step) -> Step:
        if value.type not in (StepType.SKILL, StepType.ITEM):
            raise ValueError("banish must be a skill or item step")
        return value

    def as_program(self) -> Program:
        return Program().step(self.do)


class RunawaySource(BaseModel):
    """A program that escapes combat better than a plain runaway."""

    name: str = Field(..., min_length=1, description="Source of the runaway")
    do: Program = Field(..., description="Program used to flee")

    model_config = {"frozen": True}
