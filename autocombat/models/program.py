"""Action programs: ordered, branching sequences of combat steps.

A program is replayed by the turn engine once per round. It is a tuple of
nodes, each either a ``Step`` or a ``Branch`` that reads "if the current
opponent is ``target`` then ``body`` else the rest of the program".

Programs are immutable values. Every builder method returns a new program,
so a compiled fragment can be shared between branches safely.

Example:
    >>> boss = Opponent(name="boss", defense=300)
    >>> program = Program().try_skill("Micrometeorite").attack().repeat()
    >>> program = program.prepend(boss, Program().abort())
    >>> program.select(boss)
    (Step(type=<StepType.ABORT: 'abort'>, name=None),)
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from autocombat.models.actions import Step
from autocombat.models.opponents import Opponent


class Branch(BaseModel):
    """Conditional sub-program selected by opponent identity."""

    target: Opponent = Field(..., description="Opponent this branch applies to")
    body: Program = Field(..., description="Program run against the target")

    model_config = {"frozen": True}

    def matches(self, opponent: Opponent) -> bool:
        return opponent == self.target

    def to_macro(self) -> str:
        condition = self.target.to_macro_condition()
        if self.body.is_empty:
            return f"if {condition};endif"
        return f"if {condition};{self.body.to_macro()};endif"


class Program(BaseModel):
    """An ordered combat program built from steps and opponent branches."""

    nodes: tuple[Step | Branch, ...] = Field(default=(), description="Steps and branches in order")

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def branches(self) -> list[Branch]:
        """Top-level branches, in the order they are checked."""
        return [node for node in self.nodes if isinstance(node, Branch)]

    def step(self, *parts: Step | Program) -> Program:
        """Append steps or whole programs in sequence."""
        nodes = list(self.nodes)
        for part in parts:
            if isinstance(part, Program):
                nodes.extend(part.nodes)
            else:
                nodes.append(part)
        return Program(nodes=tuple(nodes))

    def skill(self, name: str) -> Program:
        return self.step(Step.skill(name))

    def try_skill(self, name: str) -> Program:
        return self.step(Step.try_skill(name))

    def item(self, name: str) -> Program:
        return self.step(Step.item(name))

    def try_item(self, name: str) -> Program:
        return self.step(Step.try_item(name))

    def attack(self) -> Program:
        return self.step(Step.attack())

    def runaway(self) -> Program:
        return self.step(Step.runaway())

    def repeat(self) -> Program:
        return self.step(Step.repeat())

    def abort(self) -> Program:
        return self.step(Step.abort())

    def if_(self, opponent: Opponent, body: Program) -> Program:
        """Append a branch taken when the current opponent is ``opponent``."""
        return Program(nodes=(*self.nodes, Branch(target=opponent, body=body)))

    def prepend(self, opponent: Opponent, body: Program) -> Program:
        """Insert a branch ahead of everything else in the program."""
        return Program(nodes=(Branch(target=opponent, body=body), *self.nodes))

    def select(self, opponent: Opponent | None) -> tuple[Step, ...]:
        """Resolve the steps that would run against ``opponent``.

        Steps before a matching branch run first; the first matching branch
        then replaces the remainder of the program. Anything after a repeat
        or abort is unreachable and is not returned.
        """
        selected: list[Step] = []
        for node in self.nodes:
            if isinstance(node, Branch):
                if opponent is not None and node.matches(opponent):
                    return (*selected, *node.body.select(opponent))
                continue
            selected.append(node)
            if node.is_terminal:
                break
        return tuple(selected)

    def to_macro(self) -> str:
        """Render the program as combat macro text."""
        return ";".join(node.to_macro() for node in self.nodes)


Branch.model_rebuild()
Program.model_rebuild()
