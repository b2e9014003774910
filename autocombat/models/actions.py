"""Single combat steps, the leaves of an action program."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class StepType(StrEnum):
    """Kinds of step a combat program can contain."""

    SKILL = "skill"
    TRY_SKILL = "try_skill"
    ITEM = "item"
    TRY_ITEM = "try_item"
    ATTACK = "attack"
    RUNAWAY = "runaway"
    REPEAT = "repeat"
    ABORT = "abort"


_NAMED_TYPES = frozenset({StepType.SKILL, StepType.TRY_SKILL, StepType.ITEM, StepType.TRY_ITEM})


class Step(BaseModel):
    """One action in a combat program.

    Skill and item steps carry the name of what they use; the other kinds
    must not.
    """

    type: StepType = Field(..., description="The kind of step")
    name: str | None = Field(default=None, description="Skill or item name")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_name(self) -> Step:
        if self.type in _NAMED_TYPES and not self.name:
            raise ValueError(f"{self.type.value} step requires a name")
        if self.type not in _NAMED_TYPES and self.name is not None:
            raise ValueError(f"{self.type.value} step does not take a name")
        return self

    @classmethod
    def skill(cls, name: str) -> Step:
        """Cast a skill."""
        return cls(type=StepType.SKILL, name=name)

    @classmethod
    def try_skill(cls, name: str) -> Step:
        """Cast a skill only if it is currently usable."""
        return cls(type=StepType.TRY_SKILL, name=name)

    @classmethod
    def item(cls, name: str) -> Step:
        """Use a combat item."""
        return cls(type=StepType.ITEM, name=name)

    @classmethod
    def try_item(cls, name: str) -> Step:
        """Use a combat item only if one is on hand."""
        return cls(type=StepType.TRY_ITEM, name=name)

    @classmethod
    def attack(cls) -> Step:
        return cls(type=StepType.ATTACK)

    @classmethod
    def runaway(cls) -> Step:
        return cls(type=StepType.RUNAWAY)

    @classmethod
    def repeat(cls) -> Step:
        """Loop back to the top of the program for the next round."""
        return cls(type=StepType.REPEAT)

    @classmethod
    def abort(cls) -> Step:
        """Stop the encounter and hand control back."""
        return cls(type=StepType.ABORT)

    @property
    def is_best_effort(self) -> bool:
        """Whether the step is silently skipped when unusable."""
        return self.type in (StepType.TRY_SKILL, StepType.TRY_ITEM)

    @property
    def is_terminal(self) -> bool:
        """Whether control never proceeds past this step."""
        return self.type in (StepType.REPEAT, StepType.ABORT)

    def to_macro(self) -> str:
        """Render this step as combat macro text."""
        if self.type == StepType.SKILL:
            return f"skill {self.name}"
        if self.type == StepType.TRY_SKILL:
            return f"if hasskill {self.name};skill {self.name};endif"
        if self.type == StepType.ITEM:
            return f"use {self.name}"
        if self.type == StepType.TRY_ITEM:
            return f"if hascombatitem {self.name};use {self.name};endif"
        return self.type.value
