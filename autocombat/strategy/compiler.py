"""Intent compiler: turns one intent into a concrete combat program.

Compilation is a pure function of the intent, the opponent it targets and
the live combat context:

- RUN_AWAY: the context's flee override, else runaway / area buff / attack / repeat
- KILL: escalates to KILL_HARD when the opponent out-defends the attacker,
  otherwise debuffs then repeats an attack (or the area skill against
  physically resistant opponents)
- KILL_HARD: debuffs then repeats the melee skill, or the area skill when the
  opponent resists physical damage or the weapon is not muscle-based
- BANISH: the context's banish, else abort
- ABORT: abort
"""

from __future__ import annotations

import logging

from autocombat.config.loader import CompilerConfig, DebuffKind
from autocombat.interfaces.combat import CombatContext, Intent, WeaponCategory
from autocombat.models.opponents import Opponent
from autocombat.models.program import Program

logger = logging.getLogger(__name__)


class IntentCompiler:
    """Compiles intents into combat programs using configured skills and thresholds."""

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self._config = config or CompilerConfig()

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def compile(
        self,
        strategy: Intent | Program,
        opponent: Opponent | None,
        context: CombatContext,
    ) -> Program:
        """Compile an intent against an opponent.

        Args:
            strategy: Intent to compile. A ready-made program is returned as is.
            opponent: Opponent the program targets, or None for the default.
            context: Live combat state.

        Returns:
            Program implementing the intent.

        Raises:
            TypeError: If strategy is neither an Intent nor a Program.
        """
        return self.compile_resolved(
            strategy,
            opponent,
            context,
            banish=self.banish_program(context),
            runaway=self.runaway_program(context),
        )

    def compile_resolved(
        self,
        strategy: Intent | Program,
        opponent: Opponent | None,
        context: CombatContext,
        *,
        banish: Program | None,
        runaway: Program | None,
    ) -> Program:
        """Compile an intent with banish and flee overrides that were resolved earlier.

        The context is still read for offense and weapon category, but not
        for its banish or runaway resources.

        Args:
            strategy: Intent to compile. A ready-made program is returned as is.
            opponent: Opponent the program targets, or None for the default.
            context: Live combat state.
            banish: Program used for BANISH, or None if no banish is available.
            runaway: Program used for RUN_AWAY, or None for the built-in flee.
        """
        if isinstance(strategy, Program):
            return strategy
        if not isinstance(strategy, Intent):
            raise TypeError(f"Cannot compile {type(strategy).__name__} into a combat program")

        intent = strategy
        if intent == Intent.KILL and opponent is not None and self._should_escalate(opponent, context):
            intent = Intent.KILL_HARD

        if intent == Intent.RUN_AWAY:
            return self._run_away(runaway)
        if intent == Intent.KILL:
            return self._kill(opponent)
        if intent == Intent.KILL_HARD:
            return self._kill_hard(opponent, context)
        if intent == Intent.BANISH:
            return self._banish(opponent, banish)
        if intent == Intent.ABORT:
            return Program().abort()
        raise TypeError(f"Unhandled intent: {intent}")

    def debuff_prefix(self) -> Program:
        """Opening debuffs shared by every kill program."""
        program = Program()
        for name in self._config.opener_skills:
            program = program.skill(name)
        for attempt in self._config.debuff_prefix:
            if attempt.kind == DebuffKind.SKILL:
                program = program.try_skill(attempt.name)
            else:
                program = program.try_item(attempt.name)
        return program

    def banish_program(self, context: CombatContext) -> Program | None:
        """Program that uses the context's banish, or None if there is none."""
        if context.banish is None:
            return None
        return context.banish.as_program()

    def runaway_program(self, context: CombatContext) -> Program | None:
        """The context's flee override, or None if there is none."""
        if context.runaway is None:
            return None
        return context.runaway.do

    def _should_escalate(self, opponent: Opponent, context: CombatContext) -> bool:
        offense = context.effective_offense()
        scaled_defense = opponent.defense * self._config.escalation_factor
        if scaled_defense > offense:
            logger.debug(
                "Escalating kill of %s to kill_hard (defense %.1f x %.2f > offense %.1f)",
                opponent.name,
                opponent.defense,
                self._config.escalation_factor,
                offense,
            )
            return True
        return False

    def _resists_physical(self, opponent: Opponent | None) -> bool:
        return (
            opponent is not None
            and opponent.physical_resistance >= self._config.physical_resistance_threshold
        )

    def _run_away(self, override: Program | None) -> Program:
        if override is not None:
            return override
        return Program().runaway().skill(self._config.flee_buff_skill).attack().repeat()

    def _kill(self, opponent: Opponent | None) -> Program:
        if self._resists_physical(opponent):
            return self.debuff_prefix().skill(self._config.area_skill).repeat()
        return self.debuff_prefix().attack().repeat()

    def _kill_hard(self, opponent: Opponent | None, context: CombatContext) -> Program:
        if self._resists_physical(opponent) or context.weapon_category() != WeaponCategory.MUSCLE:
            return self.debuff_prefix().skill(self._config.area_skill).repeat()
        return self.debuff_prefix().skill(self._config.melee_skill).repeat()

    def _banish(self, opponent: Opponent | None, banish: Program | None) -> Program:
        if banish is not None:
            return banish
        # The opponent should already be banished, or every banish is spent.
        logger.warning(
            "No banish available for %s; banish degraded to abort",
            opponent.name if opponent is not None else "default opponent",
        )
        return Program().abort()
