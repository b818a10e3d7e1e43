"""Game state — single source of truth for the current game.

Every value here is frozen: the reducer builds a new state for each
transition and nothing else ever mutates one in place.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import BoostKind
from pokeclick.data.catalog import Catalog
from pokeclick.data.units import Evolution, UnitDef


@dataclass(frozen=True)
class UnitState:
    """An owned (or ownable) production unit."""

    # ── Catalog fields (refreshed from the catalog on load) ──
    id: str
    name: str
    base_cost: float
    base_production: float
    tier: int
    pokemon_id: int = 0
    evolutions: tuple[Evolution, ...] = ()

    # ── Progress ─────────────────────────────────────────
    count: int = 0
    unlocked: bool = False
    level: int = 0                 # mirrors count, capped at BALANCE.units.max_level
    experience_value: int = 0      # EV budget, +1 per unit bought
    unlocked_skills: frozenset[str] = frozenset()
    is_shiny: bool = False

    @classmethod
    def from_def(cls, udef: UnitDef) -> UnitState:
        return cls(
            id=udef.id,
            name=udef.name,
            base_cost=udef.base_cost,
            base_production=udef.base_production,
            tier=udef.tier,
            pokemon_id=udef.pokemon_id,
            evolutions=udef.evolutions,
            unlocked=udef.starts_unlocked,
        )

    @property
    def headroom(self) -> int:
        """How many more can be bought before hitting the level ceiling."""
        return max(0, BALANCE.units.max_level - self.level)


@dataclass(frozen=True)
class ActiveBoost:
    boost_id: str
    kind: BoostKind
    value: float
    started_at: float
    expires_at: float


@dataclass(frozen=True)
class BoostCooldown:
    boost_id: str
    available_at: float


@dataclass(frozen=True)
class GameState:
    """Complete state for one game."""

    # ── Ledger ───────────────────────────────────────────
    energy: float = 0.0
    total_energy: float = 0.0      # lifetime earned, never decreases
    click_count: int = 0

    # ── Derived / caches (recomputed by the reducer) ─────
    energy_per_click: float = 1.0
    energy_per_second: float = 0.0

    last_save_time: float = field(default_factory=time.time)

    # ── Roster, shop, boosts ─────────────────────────────
    units: tuple[UnitState, ...] = ()
    purchased_upgrades: frozenset[str] = frozenset()
    active_boosts: tuple[ActiveBoost, ...] = ()
    cooldowns: tuple[BoostCooldown, ...] = ()

    def unit(self, unit_id: str) -> UnitState | None:
        for u in self.units:
            if u.id == unit_id:
                return u
        return None

    def unit_index(self, unit_id: str) -> int:
        for i, u in enumerate(self.units):
            if u.id == unit_id:
                return i
        return -1

    def is_purchased(self, upgrade_id: str) -> bool:
        return upgrade_id in self.purchased_upgrades

    def active_boost(self, kind: BoostKind) -> ActiveBoost | None:
        for b in self.active_boosts:
            if b.kind == kind:
                return b
        return None

    def cooldown(self, boost_id: str) -> BoostCooldown | None:
        for c in self.cooldowns:
            if c.boost_id == boost_id:
                return c
        return None


def new_game(catalog: Catalog, now: float | None = None) -> GameState:
    """Fresh state built from the catalog."""
    return GameState(
        energy_per_click=BALANCE.economy.base_energy_per_click,
        last_save_time=time.time() if now is None else now,
        units=tuple(UnitState.from_def(u) for u in catalog.units.values()),
    )
