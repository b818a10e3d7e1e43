"""Production engine — energy per click and energy per second.

Production is strictly linear in `count`; all non-linearity lives in the
cost curves (see scaling.py).
"""

from __future__ import annotations

from collections.abc import Iterable

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import BoostKind
from pokeclick.data.catalog import Catalog
from pokeclick.data.skill_trees import SkillKind
from pokeclick.data.units import Evolution
from pokeclick.data.upgrades import ConditionKind, UpgradeDef, UpgradeKind
from pokeclick.engine.game_state import ActiveBoost, GameState, UnitState


def _purchased(purchased: Iterable[str], catalog: Catalog) -> list[UpgradeDef]:
    return [catalog.upgrades[uid] for uid in purchased if uid in catalog.upgrades]


def _boost_value(active_boosts: Iterable[ActiveBoost], kind: BoostKind) -> float:
    for b in active_boosts:
        if b.kind == kind:
            return b.value
    return 1.0


def derive_click_rate(
    purchased: Iterable[str],
    active_boosts: Iterable[ActiveBoost],
    catalog: Catalog,
) -> float:
    """Energy earned by a single click: (1 + flat bonuses) x multipliers x boost."""
    upgrades = _purchased(purchased, catalog)
    epc = BALANCE.economy.base_energy_per_click

    for u in upgrades:
        if u.kind == UpgradeKind.CLICK_BONUS:
            epc += u.value
    for u in upgrades:
        if u.kind == UpgradeKind.CLICK_MULTIPLIER:
            epc *= u.value

    return epc * _boost_value(active_boosts, BoostKind.CLICK_MULTIPLIER)


def effective_base(unit: UnitState, upgrades: list[UpgradeDef]) -> float:
    """Base production plus every flat per-unit upgrade bonus."""
    base = unit.base_production
    for u in upgrades:
        if u.kind == UpgradeKind.UNIT_BONUS and u.target_unit_id == unit.id:
            base += u.value
    return base


def skill_effects(unit: UnitState, catalog: Catalog) -> tuple[float, float]:
    """(flat bonus, multiplier) from the unit's unlocked skills."""
    flat = 0.0
    mult = 1.0
    for node in catalog.tree(unit.id):
        if node.id not in unit.unlocked_skills:
            continue
        if node.kind == SkillKind.PRODUCTION_BONUS:
            flat += node.value
        elif node.kind == SkillKind.PRODUCTION_MULTIPLIER:
            mult *= node.value
    return flat, mult


def unit_production(unit: UnitState, upgrades: list[UpgradeDef], catalog: Catalog) -> float:
    """Energy/s from one unit stack, before global upgrades and boosts."""
    if unit.count <= 0:
        return 0.0

    unit_mult = 1.0
    for u in upgrades:
        if u.kind == UpgradeKind.UNIT_MULTIPLIER and u.target_unit_id == unit.id:
            unit_mult *= u.value

    shiny_mult = BALANCE.units.shiny_multiplier if unit.is_shiny else 1.0
    skill_flat, skill_mult = skill_effects(unit, catalog)

    return (effective_base(unit, upgrades) + skill_flat) * unit.count * unit_mult * shiny_mult * skill_mult


def derive_production_rate(
    units: Iterable[UnitState],
    purchased: Iterable[str],
    active_boosts: Iterable[ActiveBoost],
    catalog: Catalog,
) -> float:
    """Energy earned per second by the whole roster."""
    upgrades = _purchased(purchased, catalog)
    total = sum(unit_production(unit, upgrades, catalog) for unit in units)

    # Global percent bonuses add up; global multipliers stack
    percent = sum(u.value for u in upgrades if u.kind == UpgradeKind.GLOBAL_PERCENT)
    total *= 1.0 + percent / 100.0
    for u in upgrades:
        if u.kind == UpgradeKind.GLOBAL_MULTIPLIER:
            total *= u.value

    return total * _boost_value(active_boosts, BoostKind.PRODUCTION_MULTIPLIER)


def auto_click_rate(active_boosts: Iterable[ActiveBoost], now: float | None = None) -> float:
    """Automatic clicks per second from an active auto-clicker (0 if none).

    With `now`, an auto-clicker past its expiry no longer counts even if it
    has not been swept yet.
    """
    for b in active_boosts:
        if b.kind == BoostKind.AUTO_CLICKER and (now is None or b.expires_at > now):
            return b.value
    return 0.0


# ── Evolutions (cosmetic) ────────────────────────────────────────


def current_evolution(unit: UnitState) -> tuple[int, str]:
    """(pokedex id, display name) of the highest stage the unit qualifies for."""
    pokemon_id, name = unit.pokemon_id, unit.name
    for evo in unit.evolutions:
        if unit.count >= evo.level:
            pokemon_id, name = evo.pokemon_id, evo.name
    return pokemon_id, name


def next_evolution(unit: UnitState) -> Evolution | None:
    for evo in unit.evolutions:
        if unit.count < evo.level:
            return evo
    return None


# ── Shop visibility ──────────────────────────────────────────────


def upgrade_available(upgrade: UpgradeDef, state: GameState) -> bool:
    """True when the upgrade is unpurchased and its shop condition is met."""
    if state.is_purchased(upgrade.id):
        return False
    cond = upgrade.condition
    if cond is None:
        return True
    if cond.kind == ConditionKind.TOTAL_ENERGY:
        return state.total_energy >= cond.amount
    if cond.target_unit_id is None:
        return False
    unit = state.unit(cond.target_unit_id)
    count = unit.count if unit is not None else 0
    # UNIT_COUNT and EVOLUTION both compare the target's count to a threshold
    return count >= cond.amount
