"""Production unit definitions — the Pokémon roster and their evolution lines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Evolution:
    """One evolution stage: reached once `count >= level`."""

    level: int
    pokemon_id: int
    name: str


@dataclass(frozen=True)
class UnitDef:
    """Definition of a single production unit."""

    id: str
    name: str
    base_cost: float
    base_production: float
    # Tier drives how much the price reacts to current energy/s (see balance.py)
    tier: int
    pokemon_id: int
    evolutions: tuple[Evolution, ...] = ()
    # Only the first unit is available from the start
    starts_unlocked: bool = False


def _evo(*stages: tuple[int, int, str]) -> tuple[Evolution, ...]:
    return tuple(Evolution(level, pid, name) for level, pid, name in stages)


# ── Tier 1 — Starters ────────────────────────────────────────────

PIKACHU = UnitDef(
    id="pikachu", name="Pikachu", base_cost=15, base_production=0.1, tier=1,
    pokemon_id=25, evolutions=_evo((25, 26, "Raichu")), starts_unlocked=True,
)
CHARMANDER = UnitDef(
    id="charmander", name="Charmander", base_cost=100, base_production=1, tier=1,
    pokemon_id=4, evolutions=_evo((15, 5, "Charmeleon"), (35, 6, "Charizard")),
)
SQUIRTLE = UnitDef(
    id="squirtle", name="Squirtle", base_cost=1_100, base_production=8, tier=1,
    pokemon_id=7, evolutions=_evo((15, 8, "Wartortle"), (35, 9, "Blastoise")),
)
BULBASAUR = UnitDef(
    id="bulbasaur", name="Bulbasaur", base_cost=12_000, base_production=47, tier=1,
    pokemon_id=1, evolutions=_evo((15, 2, "Ivysaur"), (35, 3, "Venusaur")),
)

# ── Tier 2 ───────────────────────────────────────────────────────

MEOWTH = UnitDef(
    id="meowth", name="Meowth", base_cost=25_000, base_production=85, tier=2,
    pokemon_id=52, evolutions=_evo((28, 53, "Persian")),
)
MACHOP = UnitDef(
    id="machop", name="Machop", base_cost=50_000, base_production=150, tier=2,
    pokemon_id=66, evolutions=_evo((28, 67, "Machoke"), (40, 68, "Machamp")),
)
ABRA = UnitDef(
    id="abra", name="Abra", base_cost=90_000, base_production=220, tier=2,
    pokemon_id=63, evolutions=_evo((16, 64, "Kadabra"), (35, 65, "Alakazam")),
)

# ── Tier 3 — Popular ─────────────────────────────────────────────

EEVEE = UnitDef(
    id="eevee", name="Eevee", base_cost=130_000, base_production=260, tier=3,
    pokemon_id=133,
    evolutions=_evo(
        (10, 134, "Vaporeon"),
        (25, 135, "Jolteon"),
        (50, 136, "Flareon"),
        (75, 196, "Espeon"),
        (100, 197, "Umbreon"),
    ),
)
GENGAR = UnitDef(
    id="gengar", name="Gastly", base_cost=1_400_000, base_production=1_400, tier=3,
    pokemon_id=92, evolutions=_evo((15, 93, "Haunter"), (35, 94, "Gengar")),
)
DRAGONITE = UnitDef(
    id="dragonite", name="Dratini", base_cost=20_000_000, base_production=7_800, tier=3,
    pokemon_id=147, evolutions=_evo((15, 148, "Dragonair"), (35, 149, "Dragonite")),
)

# ── Tier 4 — Powerhouses ─────────────────────────────────────────

SNORLAX = UnitDef(
    id="snorlax", name="Munchlax", base_cost=330_000_000, base_production=144_000, tier=4,
    pokemon_id=446, evolutions=_evo((25, 143, "Snorlax")),
)
TYRANITAR = UnitDef(
    id="tyranitar", name="Larvitar", base_cost=5_100_000_000, base_production=260_000, tier=4,
    pokemon_id=246, evolutions=_evo((15, 247, "Pupitar"), (35, 248, "Tyranitar")),
)
SALAMENCE = UnitDef(
    id="salamence", name="Bagon", base_cost=75_000_000_000, base_production=1_600_000, tier=4,
    pokemon_id=371, evolutions=_evo((15, 372, "Shelgon"), (35, 373, "Salamence")),
)

# ── Tier 5 — Legendaries and mythicals (no evolutions) ───────────

MEWTWO = UnitDef(
    id="mewtwo", name="Mewtwo", base_cost=1e12, base_production=10_000_000, tier=5,
    pokemon_id=150,
)
RAYQUAZA = UnitDef(
    id="rayquaza", name="Rayquaza", base_cost=1.4e13, base_production=65_000_000, tier=5,
    pokemon_id=384,
)
DIALGA = UnitDef(
    id="dialga", name="Dialga", base_cost=1.7e14, base_production=430_000_000, tier=5,
    pokemon_id=483,
)
ARCEUS = UnitDef(
    id="arceus", name="Arceus", base_cost=2.1e15, base_production=2_900_000_000, tier=5,
    pokemon_id=493,
)
GIRATINA = UnitDef(
    id="giratina", name="Giratina", base_cost=2.6e16, base_production=21_000_000_000, tier=5,
    pokemon_id=487,
)

# ── All units registry (display order) ───────────────────────────

ALL_UNITS: dict[str, UnitDef] = {
    u.id: u
    for u in [
        PIKACHU,
        CHARMANDER,
        SQUIRTLE,
        BULBASAUR,
        MEOWTH,
        MACHOP,
        ABRA,
        EEVEE,
        GENGAR,
        DRAGONITE,
        SNORLAX,
        TYRANITAR,
        SALAMENCE,
        MEWTWO,
        RAYQUAZA,
        DIALGA,
        ARCEUS,
        GIRATINA,
    ]
}
