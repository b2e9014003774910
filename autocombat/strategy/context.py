"""Fixed-value combat context."""

from __future__ import annotations

from dataclasses import dataclass, field

from autocombat.interfaces.combat import CombatContext, WeaponCategory
from autocombat.models.resources import BanishSource, RunawaySource, WandererSource


@dataclass
class StaticCombatContext(CombatContext):
    """Combat context built from a snapshot of the live state.

    Attributes:
        offense: Buffed value of the stat the weapon scales with.
        weapon: Category of the equipped weapon.
        wanderer_sources: Special encounters that may appear.
        banish_source: Banish available right now, if any.
        runaway_source: Flee override available right now, if any.
    """

    offense: float = 0.0
    weapon: WeaponCategory = WeaponCategory.MUSCLE
    wanderer_sources: list[WandererSource] = field(default_factory=list)
    banish_source: BanishSource | None = None
    runaway_source: RunawaySource | None = None

    def effective_offense(self) -> float:
        return self.offense

    def weapon_category(self) -> WeaponCategory:
        return self.weapon

    @property
    def wanderers(self) -> list[WandererSource]:
        return self.wanderer_sources

    @property
    def banish(self) -> BanishSource | None:
        return self.banish_source

    @property
    def runaway(self) -> RunawaySource | None:
        return self.runaway_source
