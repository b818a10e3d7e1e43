"""Skill tree template — every unit gets the same tree, keyed by its id.

Layout (x → column, y → row):

    base_1 ── base_2 ── base_3
      │         │         │
    bonus_1   mult_1    special_1
      │         │         │
    bonus_2   mult_2    special_2
      │         │         │
    bonus_3   mult_3 ─────┘
                │
            ultimate_1 → ultimate_2 → ultimate_3

EV costs add up to 252, one full level ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SkillKind(Enum):
    PRODUCTION_BONUS = auto()        # Flat base production for this unit
    PRODUCTION_MULTIPLIER = auto()   # Multiply this unit's production


@dataclass(frozen=True)
class SkillNode:
    """A single node of a unit's skill tree."""

    id: str
    name: str
    description: str
    cost: int
    kind: SkillKind
    value: float
    prerequisites: tuple[str, ...] = ()
    position: tuple[int, int] = (0, 0)


# (slot, name, description, EV cost, kind, value, prerequisite slots, position)
_TEMPLATE: tuple[tuple[str, str, str, int, SkillKind, float, tuple[str, ...], tuple[int, int]], ...] = (
    ("base_1", "Basic Training", "+25% production", 2,
     SkillKind.PRODUCTION_MULTIPLIER, 1.25, (), (0, 0)),
    ("base_2", "Advanced Training", "+50% production", 4,
     SkillKind.PRODUCTION_MULTIPLIER, 1.5, ("base_1",), (1, 0)),
    ("base_3", "Expert Training", "+75% production", 6,
     SkillKind.PRODUCTION_MULTIPLIER, 1.75, ("base_2",), (2, 0)),
    ("bonus_1", "Production Bonus I", "+100 base production", 7,
     SkillKind.PRODUCTION_BONUS, 100, ("base_1",), (0, 1)),
    ("bonus_2", "Production Bonus II", "+250 base production", 11,
     SkillKind.PRODUCTION_BONUS, 250, ("bonus_1",), (0, 2)),
    ("bonus_3", "Production Bonus III", "+500 base production", 16,
     SkillKind.PRODUCTION_BONUS, 500, ("bonus_2",), (0, 3)),
    ("mult_1", "Multiplier I", "x2.0 production", 9,
     SkillKind.PRODUCTION_MULTIPLIER, 2.0, ("base_2",), (1, 1)),
    ("mult_2", "Multiplier II", "x2.5 production", 14,
     SkillKind.PRODUCTION_MULTIPLIER, 2.5, ("mult_1",), (1, 2)),
    ("mult_3", "Multiplier III", "x3.0 production", 20,
     SkillKind.PRODUCTION_MULTIPLIER, 3.0, ("mult_2",), (1, 3)),
    ("special_1", "Power I", "x3.5 production", 22,
     SkillKind.PRODUCTION_MULTIPLIER, 3.5, ("base_3",), (2, 1)),
    ("special_2", "Power II", "x4.0 production", 29,
     SkillKind.PRODUCTION_MULTIPLIER, 4.0, ("special_1",), (2, 2)),
    ("ultimate_1", "Mastery", "x5.0 production", 32,
     SkillKind.PRODUCTION_MULTIPLIER, 5.0, ("mult_3", "special_2"), (1, 4)),
    ("ultimate_2", "Perfection", "x6.0 production", 38,
     SkillKind.PRODUCTION_MULTIPLIER, 6.0, ("ultimate_1",), (1, 5)),
    ("ultimate_3", "Legend", "x7.5 production", 42,
     SkillKind.PRODUCTION_MULTIPLIER, 7.5, ("ultimate_2",), (1, 6)),
)


def build_tree(unit_id: str) -> tuple[SkillNode, ...]:
    """Instantiate the shared template for one unit (ids are `<unit_id>_<slot>`)."""
    return tuple(
        SkillNode(
            id=f"{unit_id}_{slot}",
            name=name,
            description=description,
            cost=cost,
            kind=kind,
            value=value,
            prerequisites=tuple(f"{unit_id}_{p}" for p in prereqs),
            position=position,
        )
        for slot, name, description, cost, kind, value, prereqs, position in _TEMPLATE
    )
