"""Upgrade definitions — one-time purchases and their effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class UpgradeKind(Enum):
    """What an upgrade modifies."""

    CLICK_BONUS = auto()         # Flat energy added to each click
    CLICK_MULTIPLIER = auto()    # Multiply energy per click
    GLOBAL_PERCENT = auto()      # +value% to all production (additive between upgrades)
    GLOBAL_MULTIPLIER = auto()   # Multiply all production
    UNIT_BONUS = auto()          # Flat base production added to one unit
    UNIT_MULTIPLIER = auto()     # Multiply one unit's production


class ConditionKind(Enum):
    """When an upgrade shows up in the shop."""

    TOTAL_ENERGY = auto()   # lifetime energy >= amount
    UNIT_COUNT = auto()     # target unit count >= amount
    EVOLUTION = auto()      # target unit evolved (count crossed an evolution level)


@dataclass(frozen=True)
class UpgradeCondition:
    kind: ConditionKind
    amount: float
    target_unit_id: str | None = None
    evolution_name: str | None = None


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single one-time upgrade."""

    id: str
    name: str
    description: str
    kind: UpgradeKind
    value: float
    cost: float
    target_unit_id: str | None = None
    condition: UpgradeCondition | None = None
    # Shop tab: click / global / unit / evolution
    category: str = "global"


def _energy(amount: float) -> UpgradeCondition:
    return UpgradeCondition(ConditionKind.TOTAL_ENERGY, amount)


def _owned(unit_id: str, amount: int) -> UpgradeCondition:
    return UpgradeCondition(ConditionKind.UNIT_COUNT, amount, unit_id)


def _evolved(unit_id: str, level: int, name: str) -> UpgradeCondition:
    return UpgradeCondition(ConditionKind.EVOLUTION, level, unit_id, name)


def _training(unit_id: str, label: str, cost: float, item: str, item_cost: float) -> list[UpgradeDef]:
    """The x2 (10 owned) / x5 (25 owned) pair every unit gets."""
    return [
        UpgradeDef(
            id=f"{unit_id}_t1", name=f"{label} Training", description=f"{label} x2",
            kind=UpgradeKind.UNIT_MULTIPLIER, value=2, cost=cost, target_unit_id=unit_id,
            condition=_owned(unit_id, 10), category="unit",
        ),
        UpgradeDef(
            id=f"{unit_id}_t2", name=item, description=f"{label} x5",
            kind=UpgradeKind.UNIT_MULTIPLIER, value=5, cost=item_cost, target_unit_id=unit_id,
            condition=_owned(unit_id, 25), category="unit",
        ),
    ]


# ── Click upgrades ───────────────────────────────────────────────

CLICK_UPGRADES: list[UpgradeDef] = [
    UpgradeDef("poke_ball", "Poké Ball", "+1 energy per click",
               UpgradeKind.CLICK_BONUS, 1, 50, condition=_energy(25), category="click"),
    UpgradeDef("great_ball", "Great Ball", "+5 energy per click",
               UpgradeKind.CLICK_BONUS, 5, 2_500, condition=_energy(1_000), category="click"),
    UpgradeDef("better_mouse", "Better Mouse", "Click x2",
               UpgradeKind.CLICK_MULTIPLIER, 2, 100, condition=_energy(50), category="click"),
    UpgradeDef("gaming_mouse", "Gaming Mouse", "Click x3",
               UpgradeKind.CLICK_MULTIPLIER, 3, 1_000, condition=_energy(500), category="click"),
    UpgradeDef("super_mouse", "Super Mouse", "Click x5",
               UpgradeKind.CLICK_MULTIPLIER, 5, 10_000, condition=_energy(5_000), category="click"),
    UpgradeDef("mega_mouse", "Mega Mouse", "Click x10",
               UpgradeKind.CLICK_MULTIPLIER, 10, 100_000, condition=_energy(50_000), category="click"),
    UpgradeDef("ultra_mouse", "Ultra Mouse", "Click x25",
               UpgradeKind.CLICK_MULTIPLIER, 25, 1_000_000, condition=_energy(500_000), category="click"),
    UpgradeDef("master_mouse", "Master Mouse", "Click x100",
               UpgradeKind.CLICK_MULTIPLIER, 100, 50_000_000, condition=_energy(25_000_000), category="click"),
]

# ── Global upgrades ──────────────────────────────────────────────

GLOBAL_UPGRADES: list[UpgradeDef] = [
    UpgradeDef("oran_berry", "Oran Berry", "All +5%",
               UpgradeKind.GLOBAL_PERCENT, 5, 300, condition=_energy(150)),
    UpgradeDef("sitrus_berry", "Sitrus Berry", "All +15%",
               UpgradeKind.GLOBAL_PERCENT, 15, 30_000, condition=_energy(15_000)),
    UpgradeDef("energy_drink", "Energy Drink", "All +10%",
               UpgradeKind.GLOBAL_MULTIPLIER, 1.1, 500, condition=_energy(250)),
    UpgradeDef("coffee_break", "Coffee Break", "All +25%",
               UpgradeKind.GLOBAL_MULTIPLIER, 1.25, 5_000, condition=_energy(2_500)),
    UpgradeDef("pokemon_center", "Pokémon Center", "All +50%",
               UpgradeKind.GLOBAL_MULTIPLIER, 1.5, 50_000, condition=_energy(25_000)),
    UpgradeDef("power_plant", "Power Plant", "All x2",
               UpgradeKind.GLOBAL_MULTIPLIER, 2, 500_000, condition=_energy(250_000)),
    UpgradeDef("pokemon_league", "Pokémon League", "All x3",
               UpgradeKind.GLOBAL_MULTIPLIER, 3, 5_000_000, condition=_energy(2_500_000)),
    UpgradeDef("elite_four", "Elite Four", "All x5",
               UpgradeKind.GLOBAL_MULTIPLIER, 5, 100_000_000, condition=_energy(50_000_000)),
    UpgradeDef("champion", "Champion", "All x10",
               UpgradeKind.GLOBAL_MULTIPLIER, 10, 10_000_000_000, condition=_energy(5_000_000_000)),
]

# ── Unit upgrades ────────────────────────────────────────────────

UNIT_UPGRADES: list[UpgradeDef] = [
    UpgradeDef("light_ball", "Light Ball", "Pikachu +1 base production",
               UpgradeKind.UNIT_BONUS, 1, 750, target_unit_id="pikachu",
               condition=_owned("pikachu", 5), category="unit"),
    UpgradeDef("charcoal", "Charcoal", "Charmander +5 base production",
               UpgradeKind.UNIT_BONUS, 5, 4_000, target_unit_id="charmander",
               condition=_owned("charmander", 5), category="unit"),
    *_training("pikachu", "Pikachu", 1_000, "Thunder Stone", 10_000),
    *_training("charmander", "Charmander", 5_000, "Fire Stone", 50_000),
    *_training("squirtle", "Squirtle", 25_000, "Water Stone", 250_000),
    *_training("bulbasaur", "Bulbasaur", 150_000, "Leaf Stone", 1_500_000),
    *_training("eevee", "Eevee", 1_000_000, "Evolution Stone", 10_000_000),
    *_training("gengar", "Gengar", 10_000_000, "Spell Tag", 100_000_000),
    *_training("dragonite", "Dragonite", 100_000_000, "Dragon Scale", 1_000_000_000),
    *_training("snorlax", "Snorlax", 2_000_000_000, "Leftovers", 20_000_000_000),
    *_training("mewtwo", "Mewtwo", 5e12, "Mega Stone X", 5e13),
    *_training("arceus", "Arceus", 1e16, "Divine Plate", 1e17),
]

# ── Evolution upgrades — appear once a unit evolves ──────────────

EVOLUTION_UPGRADES: list[UpgradeDef] = [
    UpgradeDef("raichu_power", "Raichu Power", "All Electric x3",
               UpgradeKind.GLOBAL_MULTIPLIER, 3, 50_000,
               condition=_evolved("pikachu", 25, "Raichu"), category="evolution"),
    UpgradeDef("charmeleon_fury", "Charmeleon Fury", "Charmander x3",
               UpgradeKind.UNIT_MULTIPLIER, 3, 25_000, target_unit_id="charmander",
               condition=_evolved("charmander", 15, "Charmeleon"), category="evolution"),
    UpgradeDef("charizard_blaze", "Charizard Blaze", "All Fire x5",
               UpgradeKind.GLOBAL_MULTIPLIER, 5, 500_000,
               condition=_evolved("charmander", 35, "Charizard"), category="evolution"),
    UpgradeDef("wartortle_shell", "Wartortle Shell", "Squirtle x3",
               UpgradeKind.UNIT_MULTIPLIER, 3, 75_000, target_unit_id="squirtle",
               condition=_evolved("squirtle", 15, "Wartortle"), category="evolution"),
    UpgradeDef("blastoise_hydro", "Blastoise Hydro Pump", "All Water x5",
               UpgradeKind.GLOBAL_MULTIPLIER, 5, 2_500_000,
               condition=_evolved("squirtle", 35, "Blastoise"), category="evolution"),
    UpgradeDef("ivysaur_growth", "Ivysaur Growth", "Bulbasaur x3",
               UpgradeKind.UNIT_MULTIPLIER, 3, 500_000, target_unit_id="bulbasaur",
               condition=_evolved("bulbasaur", 15, "Ivysaur"), category="evolution"),
    UpgradeDef("venusaur_solar", "Venusaur Solar Beam", "All Grass x5",
               UpgradeKind.GLOBAL_MULTIPLIER, 5, 15_000_000,
               condition=_evolved("bulbasaur", 35, "Venusaur"), category="evolution"),
    UpgradeDef("vaporeon_aqua", "Vaporeon Aqua Ring", "Eevee x2",
               UpgradeKind.UNIT_MULTIPLIER, 2, 5_000_000, target_unit_id="eevee",
               condition=_evolved("eevee", 10, "Vaporeon"), category="evolution"),
    UpgradeDef("jolteon_thunder", "Jolteon Thunder", "Click x10",
               UpgradeKind.CLICK_MULTIPLIER, 10, 25_000_000,
               condition=_evolved("eevee", 25, "Jolteon"), category="evolution"),
    UpgradeDef("flareon_flare", "Flareon Flare Blitz", "All x2",
               UpgradeKind.GLOBAL_MULTIPLIER, 2, 100_000_000,
               condition=_evolved("eevee", 50, "Flareon"), category="evolution"),
    UpgradeDef("haunter_curse", "Haunter Curse", "Gengar x3",
               UpgradeKind.UNIT_MULTIPLIER, 3, 50_000_000, target_unit_id="gengar",
               condition=_evolved("gengar", 15, "Haunter"), category="evolution"),
    UpgradeDef("dragonair_grace", "Dragonair Grace", "Dragonite x3",
               UpgradeKind.UNIT_MULTIPLIER, 3, 500_000_000, target_unit_id="dragonite",
               condition=_evolved("dragonite", 15, "Dragonair"), category="evolution"),
    UpgradeDef("snorlax_rest", "Snorlax Rest", "Snorlax x5",
               UpgradeKind.UNIT_MULTIPLIER, 5, 10_000_000_000, target_unit_id="snorlax",
               condition=_evolved("snorlax", 25, "Snorlax"), category="evolution"),
]

# ── All upgrades registry ────────────────────────────────────────

ALL_UPGRADES: dict[str, UpgradeDef] = {
    u.id: u for u in CLICK_UPGRADES + GLOBAL_UPGRADES + UNIT_UPGRADES + EVOLUTION_UPGRADES
}
