"""Tests for IntentCompiler."""

from __future__ import annotations

import logging

import pytest

from autocombat.config.loader import CompilerConfig, DebuffAttempt, DebuffKind
from autocombat.interfaces.combat import Intent, WeaponCategory
from autocombat.models.actions import Step, StepType
from autocombat.models.opponents import Opponent
from autocombat.models.program import Program
from autocombat.models.resources import BanishSource, RunawaySource
from autocombat.strategy.compiler import IntentCompiler
from autocombat.strategy.context import StaticCombatContext


def make_context(
    offense: float = 100.0,
    weapon: WeaponCategory = WeaponCategory.MUSCLE,
    banish: BanishSource | None = None,
    runaway: RunawaySource | None = None,
) -> StaticCombatContext:
    """Helper to create a fixed combat context."""
    return StaticCombatContext(
        offense=offense,
        weapon=weapon,
        banish_source=banish,
        runaway_source=runaway,
    )


def expected_prefix() -> Program:
    """Debuffs that open every kill with the default config."""
    return (
        Program()
        .skill("Curse of Weaksauce")
        .try_skill("Pocket Crumbs")
        .try_skill("Micrometeorite")
        .try_item("Rain-Doh indigo cup")
        .try_skill("Summon Love Mosquito")
        .try_item("Time-Spinner")
    )


WEAK = Opponent(name="goblin", defense=10)
TOUGH = Opponent(name="ogre", defense=100)
RESISTANT = Opponent(name="ghost", defense=10, physical_resistance=70)


class TestDebuffPrefix:
    """Tests for the shared kill prefix."""

    def test_default_prefix(self) -> None:
        assert IntentCompiler().debuff_prefix() == expected_prefix()

    def test_five_best_effort_attempts_in_order(self) -> None:
        """Without an opener, the prefix is exactly the best-effort attempts."""
        compiler = IntentCompiler(CompilerConfig(opener_skills=[]))
        nodes = compiler.debuff_prefix().nodes
        assert len(nodes) == 5
        assert all(isinstance(n, Step) and n.is_best_effort for n in nodes)
        assert [n.name for n in nodes] == [
            "Pocket Crumbs",
            "Micrometeorite",
            "Rain-Doh indigo cup",
            "Summon Love Mosquito",
            "Time-Spinner",
        ]


class TestKill:
    """Tests for KILL compilation."""

    def test_weak_opponent_attacks(self) -> None:
        program = IntentCompiler().compile(Intent.KILL, WEAK, make_context())
        assert program == expected_prefix().attack().repeat()

    def test_resistant_opponent_uses_area_skill(self) -> None:
        program = IntentCompiler().compile(Intent.KILL, RESISTANT, make_context())
        assert program == expected_prefix().skill("Saucegeyser").repeat()

    def test_resistance_just_below_threshold_attacks(self) -> None:
        opponent = Opponent(name="imp", defense=10, physical_resistance=69)
        program = IntentCompiler().compile(Intent.KILL, opponent, make_context())
        assert program == expected_prefix().attack().repeat()

    def test_without_opponent_attacks(self) -> None:
        program = IntentCompiler().compile(Intent.KILL, None, make_context(offense=0))
        assert program == expected_prefix().attack().repeat()

    def test_escalates_when_outdefended(self) -> None:
        """100 * 1.25 > 100, so the kill becomes a hard kill."""
        compiler = IntentCompiler()
        context = make_context(offense=100)
        program = compiler.compile(Intent.KILL, TOUGH, context)
        assert program == compiler.compile(Intent.KILL_HARD, TOUGH, context)
        assert program == expected_prefix().skill("Lunging Thrust-Smack").repeat()

    def test_no_escalation_at_boundary(self) -> None:
        """80 * 1.25 == 100 is not strictly greater than the offense."""
        opponent = Opponent(name="orc", defense=80)
        program = IntentCompiler().compile(Intent.KILL, opponent, make_context(offense=100))
        assert program == expected_prefix().attack().repeat()

    def test_escalation_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="autocombat.strategy.compiler"):
            IntentCompiler().compile(Intent.KILL, TOUGH, make_context(offense=100))
        assert any("Escalating kill of ogre" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("defense", [90.0, 200.0, 1000.0])
    @pytest.mark.parametrize("weapon", list(WeaponCategory))
    def test_escalated_kill_equals_kill_hard(self, defense: float, weapon: WeaponCategory) -> None:
        compiler = IntentCompiler()
        context = make_context(offense=100, weapon=weapon)
        opponent = Opponent(name="brute", defense=defense)
        assert compiler.compile(Intent.KILL, opponent, context) == compiler.compile(
            Intent.KILL_HARD, opponent, context
        )


class TestKillHard:
    """Tests for KILL_HARD compilation."""

    def test_muscle_weapon_uses_melee_skill(self) -> None:
        program = IntentCompiler().compile(Intent.KILL_HARD, WEAK, make_context())
        assert program == expected_prefix().skill("Lunging Thrust-Smack").repeat()

    @pytest.mark.parametrize("weapon", [WeaponCategory.MYSTICALITY, WeaponCategory.MOXIE])
    def test_non_muscle_weapon_uses_area_skill(self, weapon: WeaponCategory) -> None:
        program = IntentCompiler().compile(Intent.KILL_HARD, WEAK, make_context(weapon=weapon))
        assert program == expected_prefix().skill("Saucegeyser").repeat()

    def test_resistant_opponent_uses_area_skill(self) -> None:
        program = IntentCompiler().compile(Intent.KILL_HARD, RESISTANT, make_context())
        assert program == expected_prefix().skill("Saucegeyser").repeat()

    def test_never_plain_attack(self) -> None:
        compiler = IntentCompiler()
        for weapon in WeaponCategory:
            for opponent in (WEAK, TOUGH, RESISTANT, None):
                program = compiler.compile(Intent.KILL_HARD, opponent, make_context(weapon=weapon))
                assert Step.attack() not in program.nodes


class TestPhysicalResistance:
    """Resistant opponents are always finished with the area skill."""

    @pytest.mark.parametrize("resistance", [70.0, 85.0, 100.0])
    @pytest.mark.parametrize("defense", [0.0, 500.0])
    @pytest.mark.parametrize("intent", [Intent.KILL, Intent.KILL_HARD])
    def test_area_finisher(self, resistance: float, defense: float, intent: Intent) -> None:
        opponent = Opponent(name="wraith", defense=defense, physical_resistance=resistance)
        program = IntentCompiler().compile(intent, opponent, make_context(offense=100))
        assert program.nodes[-2:] == (Step.skill("Saucegeyser"), Step.repeat())
        assert Step.attack() not in program.nodes


class TestRunAway:
    """Tests for RUN_AWAY compilation."""

    def test_fallback_flee(self) -> None:
        program = IntentCompiler().compile(Intent.RUN_AWAY, WEAK, make_context())
        assert program == Program().runaway().skill("Saucestorm").attack().repeat()

    def test_override_used_verbatim(self) -> None:
        override = Program().item("green smoke bomb").runaway()
        context = make_context(runaway=RunawaySource(name="smoke", do=override))
        assert IntentCompiler().compile(Intent.RUN_AWAY, WEAK, context) == override
        assert IntentCompiler().runaway_program(context) == override


class TestBanish:
    """Tests for BANISH compilation."""

    def test_uses_banish_resource(self) -> None:
        context = make_context(banish=BanishSource(name="snokebomb", do=Step.skill("Snokebomb")))
        program = IntentCompiler().compile(Intent.BANISH, WEAK, context)
        assert program == Program().skill("Snokebomb")

    @pytest.mark.parametrize("opponent", [WEAK, TOUGH, RESISTANT, None])
    def test_degrades_to_abort_without_resource(self, opponent: Opponent | None) -> None:
        program = IntentCompiler().compile(Intent.BANISH, opponent, make_context())
        assert program == Program().abort()

    def test_degradation_is_warned(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="autocombat.strategy.compiler"):
            IntentCompiler().compile(Intent.BANISH, WEAK, make_context())
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "goblin" in warnings[0].getMessage()

    def test_banish_program_none_without_resource(self) -> None:
        assert IntentCompiler().banish_program(make_context()) is None


class TestCompileResolved:
    """Tests for compiling with overrides resolved ahead of time."""

    def test_given_banish_wins_over_context(self) -> None:
        banish = Program().item("Louder Than Bomb")
        program = IntentCompiler().compile_resolved(
            Intent.BANISH, WEAK, make_context(), banish=banish, runaway=None
        )
        assert program == banish

    def test_missing_banish_ignores_context_resource(self) -> None:
        context = make_context(banish=BanishSource(name="snokebomb", do=Step.skill("Snokebomb")))
        program = IntentCompiler().compile_resolved(
            Intent.BANISH, WEAK, context, banish=None, runaway=None
        )
        assert program == Program().abort()

    def test_missing_runaway_ignores_context_override(self) -> None:
        context = make_context(runaway=RunawaySource(name="smoke", do=Program().item("green smoke bomb")))
        program = IntentCompiler().compile_resolved(
            Intent.RUN_AWAY, WEAK, context, banish=None, runaway=None
        )
        assert program == Program().runaway().skill("Saucestorm").attack().repeat()

    def test_kill_still_reads_context(self) -> None:
        program = IntentCompiler().compile_resolved(
            Intent.KILL, TOUGH, make_context(offense=100), banish=None, runaway=None
        )
        assert program.nodes[-2] == Step.skill("Lunging Thrust-Smack")


class TestOtherInputs:
    """Tests for abort, custom programs and bad input."""

    def test_abort(self) -> None:
        assert IntentCompiler().compile(Intent.ABORT, WEAK, make_context()) == Program().abort()

    def test_program_passthrough(self) -> None:
        custom = Program().item("seal tooth").repeat()
        assert IntentCompiler().compile(custom, WEAK, make_context()) is custom

    def test_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            IntentCompiler().compile("kill", WEAK, make_context())  # type: ignore[arg-type]

    @pytest.mark.parametrize("intent", list(Intent))
    def test_deterministic(self, intent: Intent) -> None:
        compiler = IntentCompiler()
        context = make_context()
        assert compiler.compile(intent, TOUGH, context) == compiler.compile(intent, TOUGH, context)


class TestCustomConfig:
    """Tests for config-driven thresholds and skills."""

    def test_custom_escalation_factor(self) -> None:
        """With factor 2.0, defense 60 out-defends offense 100."""
        compiler = IntentCompiler(CompilerConfig(escalation_factor=2.0))
        opponent = Opponent(name="orc", defense=60)
        program = compiler.compile(Intent.KILL, opponent, make_context(offense=100))
        assert program.nodes[-2] == Step.skill("Lunging Thrust-Smack")

    def test_custom_skills(self) -> None:
        config = CompilerConfig(
            opener_skills=[],
            debuff_prefix=[DebuffAttempt(kind=DebuffKind.ITEM, name="seal tooth")],
            area_skill="Weapon of the Pastalord",
            physical_resistance_threshold=50,
        )
        opponent = Opponent(name="slime", physical_resistance=50)
        program = IntentCompiler(config).compile(Intent.KILL, opponent, make_context())
        assert program == Program().try_item("seal tooth").skill("Weapon of the Pastalord").repeat()
        assert program.nodes[0].type == StepType.TRY_ITEM
