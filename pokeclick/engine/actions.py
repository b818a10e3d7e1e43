"""Actions — every way the game state can change.

Time-dependent actions carry `now` so the reducer stays a pure function.
"""

from __future__ import annotations

from dataclasses import dataclass

from pokeclick.engine.game_state import GameState


@dataclass(frozen=True)
class PurchaseUnit:
    unit_id: str
    quantity: int = 1


@dataclass(frozen=True)
class PurchaseUpgrade:
    upgrade_id: str


@dataclass(frozen=True)
class RegisterAction:
    """One click on the big button."""


@dataclass(frozen=True)
class AdvanceTime:
    delta: float   # elapsed seconds


@dataclass(frozen=True)
class GrantResource:
    amount: float


@dataclass(frozen=True)
class ActivateBoost:
    boost_id: str
    now: float


@dataclass(frozen=True)
class ExpireBoosts:
    now: float


@dataclass(frozen=True)
class UnlockSkill:
    unit_id: str
    skill_id: str


@dataclass(frozen=True)
class MakeShiny:
    unit_id: str


@dataclass(frozen=True)
class LoadGame:
    """Replace the game with an already reconciled state (see save.load_state)."""

    state: GameState


@dataclass(frozen=True)
class Reset:
    now: float


Action = (
    PurchaseUnit
    | PurchaseUpgrade
    | RegisterAction
    | AdvanceTime
    | GrantResource
    | ActivateBoost
    | ExpireBoosts
    | UnlockSkill
    | MakeShiny
    | LoadGame
    | Reset
)
