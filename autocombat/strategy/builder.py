"""Assembles a strategy table into a single ordered combat program."""

from __future__ import annotations

import logging

from autocombat.interfaces.combat import CombatContext, Intent
from autocombat.models.actions import Step
from autocombat.models.opponents import Opponent
from autocombat.models.program import Program
from autocombat.strategy.compiler import IntentCompiler
from autocombat.strategy.table import CombatStrategy

logger = logging.getLogger(__name__)


class BuiltCombatStrategy:
    """A compiled combat strategy, ready to be replayed every round.

    Branches are checked in this order:
    1) special encounters from the context (always KILL_HARD)
    2) custom per-opponent programs
    3) per-opponent intents without a custom program
    4) the default program, followed by the compiled default intent

    ``handle_monster`` puts a new branch in front of all of these. The
    instance is owned by a single encounter loop and is not thread-safe.

    Attributes:
        program: The assembled program.
        use_banish: Program using the context's banish, if one was available
            at build time. Reused by ``handle_monster``.
        use_runaway: The context's flee override, if one was available at
            build time. Reused by ``handle_monster``.
    """

    def __init__(
        self,
        strategy: CombatStrategy,
        context: CombatContext,
        compiler: IntentCompiler | None = None,
    ) -> None:
        """Compile the strategy table against the live context.

        Args:
            strategy: Table of per-opponent intents and programs.
            context: Live combat state.
            compiler: Intent compiler to use. Defaults to one with default config.
        """
        self._compiler = compiler or IntentCompiler()
        self._context = context
        self.use_banish: Program | None = self._compiler.banish_program(context)
        self.use_runaway: Program | None = self._compiler.runaway_program(context)

        program = Program()
        # Forced kills ignore the wanderer's own stats.
        forced_kill = self._compile(Intent.KILL_HARD, None)
        for wanderer in context.wanderers:
            program = program.if_(wanderer.monster, forced_kill)

        for opponent, custom in strategy.programs.items():
            program = program.if_(opponent, custom)
        for opponent, intent in strategy.intents.items():
            if opponent in strategy.programs:
                continue
            program = program.if_(opponent, self._compile(intent, opponent))

        if strategy.default_program is not None:
            program = program.step(strategy.default_program)
        self.program: Program = program.step(self._compile(strategy.default_intent, None))

        logger.debug(
            "Built combat program: %d wanderer, %d program, %d intent branches (boss=%s)",
            len(context.wanderers),
            len(strategy.programs),
            len([o for o in strategy.intents if o not in strategy.programs]),
            strategy.boss,
        )

    def _compile(self, strategy: Intent | Program, opponent: Opponent | None) -> Program:
        return self._compiler.compile_resolved(
            strategy,
            opponent,
            self._context,
            banish=self.use_banish,
            runaway=self.use_runaway,
        )

    def handle_monster(self, opponent: Opponent, strategy: Intent | Program) -> None:
        """Give the opponent a new branch ahead of every existing one.

        Later calls take precedence over earlier ones.
        """
        self.program = self.program.prepend(opponent, self._compile(strategy, opponent))
        logger.debug("Prepended %s branch for %s", _describe(strategy), opponent.name)

    def select(self, opponent: Opponent | None) -> tuple[Step, ...]:
        """Steps the turn engine would run against the opponent."""
        return self.program.select(opponent)

    def to_macro(self) -> str:
        return self.program.to_macro()


def _describe(strategy: Intent | Program) -> str:
    if isinstance(strategy, Intent):
        return strategy.value
    return "custom program"
