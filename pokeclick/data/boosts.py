"""Boost definitions — repeatable, cooldown-gated temporary effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class BoostKind(Enum):
    """What a boost does while active."""

    CLICK_MULTIPLIER = auto()        # Multiply energy per click for `duration`
    PRODUCTION_MULTIPLIER = auto()   # Multiply energy per second for `duration`
    INSTANT_ENERGY = auto()          # Grant value × lifetime energy, once
    AUTO_CLICKER = auto()            # `value` automatic clicks per second for `duration`


@dataclass(frozen=True)
class BoostDef:
    """Definition of a single boost."""

    id: str
    name: str
    description: str
    kind: BoostKind
    value: float
    base_cost: float
    # How strongly the price follows current energy/s (log-scaled)
    cost_scale_factor: float
    duration_s: float
    cooldown_s: float

    @property
    def is_instant(self) -> bool:
        return self.duration_s <= 0


# ── Click power ──────────────────────────────────────────────────

CLICK_BOOST_2X = BoostDef(
    id="click_boost_2x", name="Power Click x2",
    description="Doubles the energy of every click.",
    kind=BoostKind.CLICK_MULTIPLIER, value=2,
    base_cost=5_000, cost_scale_factor=0.3, duration_s=30, cooldown_s=300,
)
CLICK_BOOST_5X = BoostDef(
    id="click_boost_5x", name="Power Click x5",
    description="Quintuples the energy of every click.",
    kind=BoostKind.CLICK_MULTIPLIER, value=5,
    base_cost=25_000, cost_scale_factor=0.4, duration_s=60, cooldown_s=600,
)
CLICK_BOOST_10X = BoostDef(
    id="click_boost_10x", name="Power Click x10",
    description="Ten times the energy of every click.",
    kind=BoostKind.CLICK_MULTIPLIER, value=10,
    base_cost=100_000, cost_scale_factor=0.5, duration_s=120, cooldown_s=1_800,
)

# ── Production ───────────────────────────────────────────────────

PRODUCTION_BOOST_2X = BoostDef(
    id="production_boost_2x", name="Production Boost x2",
    description="Doubles the production of every Pokémon.",
    kind=BoostKind.PRODUCTION_MULTIPLIER, value=2,
    base_cost=10_000, cost_scale_factor=0.35, duration_s=30, cooldown_s=300,
)
PRODUCTION_BOOST_5X = BoostDef(
    id="production_boost_5x", name="Production Boost x5",
    description="Quintuples the production of every Pokémon.",
    kind=BoostKind.PRODUCTION_MULTIPLIER, value=5,
    base_cost=50_000, cost_scale_factor=0.45, duration_s=60, cooldown_s=600,
)
PRODUCTION_BOOST_10X = BoostDef(
    id="production_boost_10x", name="Production Boost x10",
    description="Ten times the production of every Pokémon.",
    kind=BoostKind.PRODUCTION_MULTIPLIER, value=10,
    base_cost=200_000, cost_scale_factor=0.55, duration_s=120, cooldown_s=1_800,
)

# ── Instant energy (value = fraction of lifetime energy) ─────────

INSTANT_ENERGY_SMALL = BoostDef(
    id="instant_energy_small", name="Instant Energy",
    description="Gain 10% of your lifetime energy now.",
    kind=BoostKind.INSTANT_ENERGY, value=0.1,
    base_cost=15_000, cost_scale_factor=0.25, duration_s=0, cooldown_s=300,
)
INSTANT_ENERGY_MEDIUM = BoostDef(
    id="instant_energy_medium", name="Instant Energy+",
    description="Gain 25% of your lifetime energy now.",
    kind=BoostKind.INSTANT_ENERGY, value=0.25,
    base_cost=50_000, cost_scale_factor=0.3, duration_s=0, cooldown_s=600,
)
INSTANT_ENERGY_LARGE = BoostDef(
    id="instant_energy_large", name="Instant Energy++",
    description="Gain 50% of your lifetime energy now.",
    kind=BoostKind.INSTANT_ENERGY, value=0.5,
    base_cost=150_000, cost_scale_factor=0.35, duration_s=0, cooldown_s=1_800,
)

# ── Auto-clicker ─────────────────────────────────────────────────

AUTO_CLICKER = BoostDef(
    id="auto_clicker", name="Auto-Clicker",
    description="Clicks 5 times per second for you.",
    kind=BoostKind.AUTO_CLICKER, value=5,
    base_cost=30_000, cost_scale_factor=0.4, duration_s=60, cooldown_s=900,
)

# ── All boosts registry ──────────────────────────────────────────

ALL_BOOSTS: dict[str, BoostDef] = {
    b.id: b
    for b in [
        CLICK_BOOST_2X,
        CLICK_BOOST_5X,
        CLICK_BOOST_10X,
        PRODUCTION_BOOST_2X,
        PRODUCTION_BOOST_5X,
        PRODUCTION_BOOST_10X,
        INSTANT_ENERGY_SMALL,
        INSTANT_ENERGY_MEDIUM,
        INSTANT_ENERGY_LARGE,
        AUTO_CLICKER,
    ]
}
