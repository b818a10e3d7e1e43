"""Content catalog — the immutable bundle the engine is built from."""

from __future__ import annotations

from dataclasses import dataclass, field

from pokeclick.data.boosts import ALL_BOOSTS, BoostDef
from pokeclick.data.skill_trees import SkillNode, build_tree
from pokeclick.data.units import ALL_UNITS, UnitDef
from pokeclick.data.upgrades import ALL_UPGRADES, UpgradeDef


@dataclass(frozen=True)
class Catalog:
    """Units, upgrades, boosts and one skill tree per unit.

    Skill trees are derived from the unit ids, so a catalog built from a
    different roster gets matching trees for free.
    """

    units: dict[str, UnitDef]
    upgrades: dict[str, UpgradeDef]
    boosts: dict[str, BoostDef]
    skill_trees: dict[str, tuple[SkillNode, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.skill_trees:
            trees = {uid: build_tree(uid) for uid in self.units}
            object.__setattr__(self, "skill_trees", trees)

    def tree(self, unit_id: str) -> tuple[SkillNode, ...]:
        return self.skill_trees.get(unit_id, ())

    def skill(self, unit_id: str, skill_id: str) -> SkillNode | None:
        for node in self.tree(unit_id):
            if node.id == skill_id:
                return node
        return None


def build_catalog(
    units: list[UnitDef],
    upgrades: list[UpgradeDef] | None = None,
    boosts: list[BoostDef] | None = None,
) -> Catalog:
    """Convenience constructor from plain lists (used by tests and tools)."""
    return Catalog(
        units={u.id: u for u in units},
        upgrades={u.id: u for u in upgrades or []},
        boosts={b.id: b for b in boosts or []},
    )


DEFAULT_CATALOG = Catalog(units=ALL_UNITS, upgrades=ALL_UPGRADES, boosts=ALL_BOOSTS)
