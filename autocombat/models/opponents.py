"""Opponent model consulted by the combat compiler."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

# Characters that would end a quoted macro predicate or statement early.
_MACRO_UNSAFE = frozenset('";')


class Opponent(BaseModel):
    """An opponent that can be faced in one round of an encounter.

    Opponents are owned by an external catalog. They compare and hash by
    value so they can be used directly as mapping keys.
    """

    name: str = Field(..., min_length=1, description="Catalog name")
    monster_id: Annotated[int, Field(ge=0)] | None = Field(
        default=None, description="Numeric catalog id, if known"
    )
    defense: Annotated[float, Field(ge=0)] = Field(default=0.0, description="Defense value")
    physical_resistance: Annotated[float, Field(ge=0, le=100)] = Field(
        default=0.0, description="Physical damage resistance, in percent"
    )

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def _macro_safe_name(cls, value: str) -> str:
        if any(char in value for char in _MACRO_UNSAFE):
            raise ValueError("opponent name cannot contain quotes or semicolons")
        return value

    def to_macro_condition(self) -> str:
        """Render the predicate used to branch on this opponent."""
        if self.monster_id is not None:
            return f"monsterid {self.monster_id}"
        return f'monstername "{self.name}"'

    def __str__(self) -> str:
        return self.name
