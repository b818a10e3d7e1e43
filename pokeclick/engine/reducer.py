"""Transition function — the only place a GameState turns into the next one.

`reduce(state, action)` never raises for game-flow reasons: anything the
player can't do right now (can't afford, on cooldown, capped, missing
prerequisite) returns the input state object unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from pokeclick.data.balance import BALANCE
from pokeclick.data.catalog import DEFAULT_CATALOG, Catalog
from pokeclick.engine.actions import (
    Action,
    ActivateBoost,
    AdvanceTime,
    ExpireBoosts,
    GrantResource,
    LoadGame,
    MakeShiny,
    PurchaseUnit,
    PurchaseUpgrade,
    RegisterAction,
    Reset,
    UnlockSkill,
)
from pokeclick.engine.game_state import ActiveBoost, BoostCooldown, GameState, UnitState, new_game
from pokeclick.engine.production import derive_click_rate, derive_production_rate
from pokeclick.engine.scaling import boost_cost, bulk_unit_cost, shiny_cost
from pokeclick.engine.skills import unlock

logger = logging.getLogger(__name__)


# ── Shared steps ─────────────────────────────────────────────────


def with_rates(state: GameState, catalog: Catalog) -> GameState:
    """Recompute both cached rates from the structural state."""
    return replace(
        state,
        energy_per_click=derive_click_rate(state.purchased_upgrades, state.active_boosts, catalog),
        energy_per_second=derive_production_rate(
            state.units, state.purchased_upgrades, state.active_boosts, catalog
        ),
    )


def auto_unlock(units: tuple[UnitState, ...], total_energy: float) -> tuple[UnitState, ...]:
    """Reveal every locked unit whose half base cost is covered by lifetime energy.

    Returns `units` itself when nothing flipped.
    """
    fraction = BALANCE.units.unlock_fraction
    if all(u.unlocked or u.base_cost * fraction > total_energy for u in units):
        return units
    return tuple(
        u if u.unlocked or u.base_cost * fraction > total_energy else replace(u, unlocked=True)
        for u in units
    )


def _credit(state: GameState, amount: float) -> GameState:
    total = state.total_energy + amount
    return replace(
        state,
        energy=state.energy + amount,
        total_energy=total,
        units=auto_unlock(state.units, total),
    )


def _replace_unit(state: GameState, index: int, unit: UnitState) -> GameState:
    units = state.units[:index] + (unit,) + state.units[index + 1:]
    return replace(state, units=units)


# ── Handlers ─────────────────────────────────────────────────────


def _purchase_unit(state: GameState, action: PurchaseUnit, catalog: Catalog) -> GameState:
    index = state.unit_index(action.unit_id)
    if index == -1:
        return state
    unit = state.units[index]

    quantity = min(max(0, action.quantity), unit.headroom)
    if quantity == 0:
        return state

    cost = bulk_unit_cost(unit, state.energy_per_second, quantity)
    if state.energy < cost:
        return state

    bought = replace(
        unit,
        count=unit.count + quantity,
        level=unit.level + quantity,
        experience_value=unit.experience_value + quantity,
    )
    state = _replace_unit(replace(state, energy=state.energy - cost), index, bought)
    state = replace(state, units=auto_unlock(state.units, state.total_energy))
    return with_rates(state, catalog)


def _purchase_upgrade(state: GameState, action: PurchaseUpgrade, catalog: Catalog) -> GameState:
    upgrade = catalog.upgrades.get(action.upgrade_id)
    if upgrade is None or state.is_purchased(upgrade.id):
        return state
    if state.energy < upgrade.cost:
        return state

    state = replace(
        state,
        energy=state.energy - upgrade.cost,
        purchased_upgrades=state.purchased_upgrades | {upgrade.id},
    )
    return with_rates(state, catalog)


def _register_action(state: GameState, action: RegisterAction, catalog: Catalog) -> GameState:
    state = _credit(state, state.energy_per_click)
    return replace(state, click_count=state.click_count + 1)


def _advance_time(state: GameState, action: AdvanceTime, catalog: Catalog) -> GameState:
    if action.delta <= 0:
        return state
    return _credit(state, state.energy_per_second * action.delta)


def _grant_resource(state: GameState, action: GrantResource, catalog: Catalog) -> GameState:
    if action.amount <= 0:
        return state
    return _credit(state, action.amount)


def _activate_boost(state: GameState, action: ActivateBoost, catalog: Catalog) -> GameState:
    boost = catalog.boosts.get(action.boost_id)
    if boost is None:
        return state

    now = action.now
    cooldown = state.cooldown(boost.id)
    if cooldown is not None and now < cooldown.available_at:
        return state

    if not boost.is_instant:
        running = state.active_boost(boost.kind)
        if running is not None and running.expires_at > now:
            return state

    cost = boost_cost(boost, state.energy_per_second)
    if state.energy < cost:
        return state

    cooldowns = tuple(c for c in state.cooldowns if c.boost_id != boost.id)
    state = replace(
        state,
        energy=state.energy - cost,
        cooldowns=cooldowns + (BoostCooldown(boost.id, now + boost.cooldown_s),),
    )

    if boost.is_instant:
        state = _credit(state, state.total_energy * boost.value)
    else:
        # One instance per kind: a fresh activation replaces any stale one
        others = tuple(b for b in state.active_boosts if b.kind != boost.kind)
        fresh = ActiveBoost(
            boost_id=boost.id,
            kind=boost.kind,
            value=boost.value,
            started_at=now,
            expires_at=now + boost.duration_s,
        )
        state = replace(state, active_boosts=others + (fresh,))

    return with_rates(state, catalog)


def _expire_boosts(state: GameState, action: ExpireBoosts, catalog: Catalog) -> GameState:
    remaining = tuple(b for b in state.active_boosts if b.expires_at > action.now)
    if len(remaining) == len(state.active_boosts):
        return state
    return with_rates(replace(state, active_boosts=remaining), catalog)


def _unlock_skill(state: GameState, action: UnlockSkill, catalog: Catalog) -> GameState:
    index = state.unit_index(action.unit_id)
    skill = catalog.skill(action.unit_id, action.skill_id)
    if index == -1 or skill is None:
        return state

    unit = state.units[index]
    unlocked = unlock(skill, unit, catalog.tree(unit.id))
    if unlocked is unit:
        return state
    return with_rates(_replace_unit(state, index, unlocked), catalog)


def _make_shiny(state: GameState, action: MakeShiny, catalog: Catalog) -> GameState:
    index = state.unit_index(action.unit_id)
    if index == -1:
        return state
    unit = state.units[index]
    if unit.is_shiny or unit.count == 0:
        return state

    cost = shiny_cost(unit)
    if state.energy < cost:
        return state

    state = _replace_unit(replace(state, energy=state.energy - cost), index, replace(unit, is_shiny=True))
    return with_rates(state, catalog)


def _load_game(state: GameState, action: LoadGame, catalog: Catalog) -> GameState:
    loaded = action.state
    loaded = replace(loaded, units=auto_unlock(loaded.units, loaded.total_energy))
    return with_rates(loaded, catalog)


def _reset(state: GameState, action: Reset, catalog: Catalog) -> GameState:
    return with_rates(new_game(catalog, action.now), catalog)


_HANDLERS: dict[type, Callable[[GameState, object, Catalog], GameState]] = {
    PurchaseUnit: _purchase_unit,
    PurchaseUpgrade: _purchase_upgrade,
    RegisterAction: _register_action,
    AdvanceTime: _advance_time,
    GrantResource: _grant_resource,
    ActivateBoost: _activate_boost,
    ExpireBoosts: _expire_boosts,
    UnlockSkill: _unlock_skill,
    MakeShiny: _make_shiny,
    LoadGame: _load_game,
    Reset: _reset,
}


def reduce(state: GameState, action: Action, catalog: Catalog = DEFAULT_CATALOG) -> GameState:
    """Apply one action. Returns the same object when the action was rejected."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("ignoring unknown action %r", action)
        return state
    result = handler(state, action, catalog)
    if result is state and not isinstance(action, ExpireBoosts):
        logger.debug("no-op: %r", action)
    return result
