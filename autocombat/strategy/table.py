"""Declarative per-opponent combat strategy table.

A ``CombatStrategy`` records what to do against each kind of opponent and is
compiled into a single program by ``BuiltCombatStrategy``. Every mutator
returns the table so calls can be chained:

    >>> strategy = CombatStrategy().kill(goblin).banish(bat, rat).flee()
"""

from __future__ import annotations

from autocombat.interfaces.combat import Intent, InvalidConfigurationError
from autocombat.models.opponents import Opponent
from autocombat.models.program import Program


class CombatStrategy:
    """Per-opponent intents and custom programs, plus the defaults.

    - apply / kill / kill_hard / flee / abort / banish: record intents
    - set_program / item_shortcut: record custom programs
    - can / where: query recorded intents

    A custom program for an opponent wins over an intent for the same
    opponent when the table is compiled; setting one does not clear the other.
    """

    def __init__(self, boss: bool = False) -> None:
        """Initialize an empty table.

        Args:
            boss: Marks the encounter as a boss fight. Only exposed to callers.
        """
        self.default_intent: Intent = Intent.RUN_AWAY
        self.default_program: Program | None = None
        self.intents: dict[Opponent, Intent] = {}
        self.programs: dict[Opponent, Program] = {}
        self.boss = boss

    def apply(self, intent: Intent, *opponents: Opponent) -> CombatStrategy:
        """Set the intent for the given opponents, or the default if none are given."""
        if not opponents:
            self.default_intent = intent
        for opponent in opponents:
            self.intents[opponent] = intent
        return self

    def kill(self, *opponents: Opponent) -> CombatStrategy:
        return self.apply(Intent.KILL, *opponents)

    def kill_hard(self, *opponents: Opponent) -> CombatStrategy:
        return self.apply(Intent.KILL_HARD, *opponents)

    def flee(self, *opponents: Opponent) -> CombatStrategy:
        return self.apply(Intent.RUN_AWAY, *opponents)

    def abort(self, *opponents: Opponent) -> CombatStrategy:
        return self.apply(Intent.ABORT, *opponents)

    def banish(self, *opponents: Opponent) -> CombatStrategy:
        """Banish the given opponents.

        Raises:
            InvalidConfigurationError: If no opponents are given.
        """
        if not opponents:
            raise InvalidConfigurationError("Must specify list of opponents to banish")
        return self.apply(Intent.BANISH, *opponents)

    def set_program(self, program: Program, *opponents: Opponent) -> CombatStrategy:
        """Use a custom program for the given opponents, or as the default if none are given."""
        if not opponents:
            self.default_program = program
        for opponent in opponents:
            self.programs[opponent] = program
        return self

    def item_shortcut(self, item: str, *opponents: Opponent) -> CombatStrategy:
        """Use a single combat item against the given opponents."""
        return self.set_program(Program().item(item), *opponents)

    def can(self, intent: Intent) -> bool:
        """Check whether the intent is the default or is set for any opponent."""
        if intent == self.default_intent:
            return True
        return intent in self.intents.values()

    def where(self, intent: Intent) -> list[Opponent]:
        """Get all opponents explicitly set to the intent."""
        return [opponent for opponent, value in self.intents.items() if value == intent]
