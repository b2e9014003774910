"""Combat policy interface: intents, live context and errors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autocombat.models.resources import BanishSource, RunawaySource, WandererSource


class Intent(Enum):
    """What to do against an opponent, before it is bound to concrete actions."""

    RUN_AWAY = "run_away"
    KILL = "kill"
    KILL_HARD = "kill_hard"
    BANISH = "banish"
    ABORT = "abort"


class WeaponCategory(Enum):
    """Stat that the equipped weapon scales with."""

    MUSCLE = "muscle"
    MYSTICALITY = "mysticality"
    MOXIE = "moxie"


class CombatContext(ABC):
    """Live state consulted when compiling a combat strategy.

    Implementations snapshot or query whatever owns the encounter. The
    compiler only reads from a context; it never mutates one.
    """

    @abstractmethod
    def effective_offense(self) -> float:
        """Current buffed value of the stat the equipped weapon scales with."""
        ...

    @abstractmethod
    def weapon_category(self) -> WeaponCategory:
        """Damage category of the currently equipped weapon."""
        ...

    @property
    @abstractmethod
    def wanderers(self) -> list[WandererSource]:
        """Special encounters that may show up this fight."""
        ...

    @property
    @abstractmethod
    def banish(self) -> BanishSource | None:
        """Banish resource available right now, if any."""
        ...

    @property
    @abstractmethod
    def runaway(self) -> RunawaySource | None:
        """Flee override available right now, if any."""
        ...


class StrategyError(Exception):
    """Error raised when combat strategy operations fail."""

    pass


class InvalidConfigurationError(StrategyError):
    """Raised when a combat strategy table is built with invalid arguments."""

    pass
