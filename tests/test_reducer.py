"""Tests for the transition function."""

from dataclasses import replace

import pytest

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import BoostDef, BoostKind
from pokeclick.data.catalog import build_catalog
from pokeclick.data.units import UnitDef
from pokeclick.data.upgrades import UpgradeDef, UpgradeKind
from pokeclick.engine.actions import (
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
from pokeclick.engine.game_state import new_game
from pokeclick.engine.reducer import reduce, with_rates
from pokeclick.engine.scaling import boost_cost, bulk_unit_cost, shiny_cost, unit_cost


CATALOG = build_catalog(
    units=[
        UnitDef("ant", "Ant", base_cost=10, base_production=0.5, tier=1, pokemon_id=1, starts_unlocked=True),
        UnitDef("bee", "Bee", base_cost=100, base_production=1, tier=1, pokemon_id=2),
        UnitDef("cat", "Cat", base_cost=100, base_production=1, tier=1, pokemon_id=3),
    ],
    upgrades=[
        UpgradeDef("grip", "Grip", "+1 per click", UpgradeKind.CLICK_BONUS, 1, 5),
        UpgradeDef("fuel", "Fuel", "All x2", UpgradeKind.GLOBAL_MULTIPLIER, 2, 50),
    ],
    boosts=[
        BoostDef("prod_2x", "Prod x2", "", BoostKind.PRODUCTION_MULTIPLIER, 2,
                 base_cost=10, cost_scale_factor=0.3, duration_s=30, cooldown_s=60),
        BoostDef("prod_3x", "Prod x3", "", BoostKind.PRODUCTION_MULTIPLIER, 3,
                 base_cost=10, cost_scale_factor=0.3, duration_s=30, cooldown_s=60),
        BoostDef("click_2x", "Click x2", "", BoostKind.CLICK_MULTIPLIER, 2,
                 base_cost=10, cost_scale_factor=0.3, duration_s=30, cooldown_s=60),
        BoostDef("windfall", "Windfall", "", BoostKind.INSTANT_ENERGY, 0.1,
                 base_cost=10, cost_scale_factor=0.3, duration_s=0, cooldown_s=60),
    ],
)

T = 1_000.0


def _state(energy=0.0, **counts):
    """A state with the given unit counts, all units revealed, rates derived."""
    state = new_game(CATALOG, now=0.0)
    units = tuple(
        replace(u, count=counts.get(u.id, 0), level=counts.get(u.id, 0),
                experience_value=counts.get(u.id, 0), unlocked=True)
        for u in state.units
    )
    return with_rates(replace(state, energy=energy, total_energy=energy, units=units), CATALOG)


def _reduce(state, action):
    return reduce(state, action, CATALOG)


# ── Clicks, time, grants ─────────────────────────────────────────


def test_click_earns_energy_per_click():
    state = _reduce(_state(), RegisterAction())
    assert state.energy == 1
    assert state.total_energy == 1
    assert state.click_count == 1


def test_advance_time_credits_production():
    state = _state(ant=4)
    assert state.energy_per_second == 2
    after = _reduce(state, AdvanceTime(1.5))
    assert after.energy == 3
    assert after.total_energy == 3


def test_advance_time_ignores_non_positive_delta():
    state = _state(ant=4)
    assert _reduce(state, AdvanceTime(0)) is state
    assert _reduce(state, AdvanceTime(-5)) is state


def test_grant_resource():
    state = _reduce(_state(), GrantResource(42))
    assert state.energy == 42
    assert state.total_energy == 42


def test_grant_ignores_non_positive_amount():
    state = _state()
    assert _reduce(state, GrantResource(0)) is state
    assert _reduce(state, GrantResource(-1)) is state


def test_locked_unit_revealed_at_half_cost():
    state = new_game(CATALOG, now=0.0)
    assert not state.unit("bee").unlocked
    state = _reduce(state, GrantResource(49))
    assert not state.unit("bee").unlocked
    state = _reduce(state, GrantResource(1))
    assert state.unit("bee").unlocked
    assert state.unit("cat").unlocked


# ── Purchases ────────────────────────────────────────────────────


def test_purchase_unit_scenario():
    state = _state(energy=10)
    eps_before = state.energy_per_second
    after = _reduce(state, PurchaseUnit("ant", 1))
    assert after.energy == 0
    assert after.unit("ant").count == 1
    assert after.energy_per_second == pytest.approx(eps_before + 0.5)


def test_purchase_unit_tracks_level_and_ev():
    after = _reduce(_state(energy=1_000), PurchaseUnit("ant", 3))
    unit = after.unit("ant")
    assert unit.count == 3
    assert unit.level == 3
    assert unit.experience_value == 3


def test_bulk_purchase_charges_bulk_cost():
    state = _state(energy=1_000, ant=2)
    expected = bulk_unit_cost(state.unit("ant"), state.energy_per_second, 4)
    after = _reduce(state, PurchaseUnit("ant", 4))
    assert after.energy == pytest.approx(1_000 - expected)


def test_unaffordable_purchase_is_a_no_op():
    state = _state(energy=9)
    assert _reduce(state, PurchaseUnit("ant", 1)) is state


def test_purchase_unknown_unit_is_a_no_op():
    state = _state(energy=1_000)
    assert _reduce(state, PurchaseUnit("zebra", 1)) is state
    assert _reduce(state, PurchaseUnit("ant", 0)) is state


def test_purchase_truncated_at_level_ceiling():
    cap = BALANCE.units.max_level
    state = _state(energy=1e300, ant=cap - 2)
    after = _reduce(state, PurchaseUnit("ant", 5))
    assert after.unit("ant").count == cap
    assert after.unit("ant").level == cap
    assert _reduce(after, PurchaseUnit("ant", 1)) is after


def test_bought_unit_costs_more_than_fresh_sibling():
    state = _state(energy=1e6)
    state = _reduce(state, PurchaseUnit("bee", 5))
    eps = state.energy_per_second
    assert unit_cost(state.unit("bee"), eps) > unit_cost(state.unit("cat"), eps)


def test_purchase_upgrade():
    state = _state(energy=20)
    after = _reduce(state, PurchaseUpgrade("grip"))
    assert after.energy == 15
    assert after.is_purchased("grip")
    assert after.energy_per_click == 2
    assert _reduce(after, PurchaseUpgrade("grip")) is after


def test_purchase_upgrade_insufficient_funds():
    state = _state(energy=4)
    assert _reduce(state, PurchaseUpgrade("grip")) is state


def test_purchase_upgrade_recomputes_production():
    state = _state(energy=100, ant=2)
    after = _reduce(state, PurchaseUpgrade("fuel"))
    assert after.energy_per_second == 2 * state.energy_per_second


# ── Boosts ───────────────────────────────────────────────────────


def test_production_boost_expires_scenario():
    state = _state(energy=100, ant=2)
    before = state.energy_per_second
    boosted = _reduce(state, ActivateBoost("prod_2x", T))
    assert boosted.energy_per_second == 2 * before
    assert boosted.energy < state.energy

    expired = _reduce(boosted, ExpireBoosts(T + 31))
    assert expired.active_boosts == ()
    assert expired.energy_per_second == before


def test_expire_boosts_is_idempotent():
    state = _reduce(_state(energy=100, ant=2), ActivateBoost("prod_2x", T))
    assert _reduce(state, ExpireBoosts(T + 10)) is state
    once = _reduce(state, ExpireBoosts(T + 31))
    assert _reduce(once, ExpireBoosts(T + 31)) is once


def test_boost_cooldown_blocks_reactivation():
    state = _reduce(_state(energy=1_000, ant=2), ActivateBoost("prod_2x", T))
    state = _reduce(state, ExpireBoosts(T + 31))
    assert _reduce(state, ActivateBoost("prod_2x", T + 40)) is state
    again = _reduce(state, ActivateBoost("prod_2x", T + 60))
    assert again is not state
    assert again.cooldown("prod_2x").available_at == T + 120


def test_one_boost_per_kind():
    state = _reduce(_state(energy=1_000, ant=2), ActivateBoost("prod_2x", T))
    assert _reduce(state, ActivateBoost("prod_3x", T + 1)) is state
    # A different kind can run alongside
    both = _reduce(state, ActivateBoost("click_2x", T + 1))
    assert len(both.active_boosts) == 2
    assert both.energy_per_click == 2


def test_stale_boost_of_same_kind_is_replaced():
    state = _reduce(_state(energy=1_000, ant=2), ActivateBoost("prod_2x", T))
    # prod_2x expired but not yet swept
    after = _reduce(state, ActivateBoost("prod_3x", T + 35))
    assert [b.boost_id for b in after.active_boosts] == ["prod_3x"]
    assert after.energy_per_second == 3 * 1.0


def test_unaffordable_boost_is_a_no_op():
    state = _state(energy=5)
    assert _reduce(state, ActivateBoost("prod_2x", T)) is state
    assert _reduce(state, ActivateBoost("nope", T)) is state


def test_instant_boost_grants_share_of_lifetime_energy():
    state = _state(energy=1_000)
    cost = boost_cost(CATALOG.boosts["windfall"], state.energy_per_second)
    after = _reduce(state, ActivateBoost("windfall", T))
    assert after.active_boosts == ()
    assert after.total_energy == pytest.approx(1_000 + 100)
    assert after.energy == pytest.approx(1_000 - cost + 100)
    assert after.cooldown("windfall").available_at == T + 60
    assert _reduce(after, ActivateBoost("windfall", T + 1)) is after


# ── Skills and shinies ───────────────────────────────────────────


def test_unlock_skill_boosts_production():
    state = _state(ant=2)
    after = _reduce(state, UnlockSkill("ant", "ant_base_1"))
    assert "ant_base_1" in after.unit("ant").unlocked_skills
    assert after.energy_per_second == pytest.approx(state.energy_per_second * 1.25)


def test_unlock_skill_rejections():
    state = _state(ant=1)
    assert _reduce(state, UnlockSkill("ant", "ant_base_1")) is state
    assert _reduce(state, UnlockSkill("ant", "bee_base_1")) is state
    assert _reduce(state, UnlockSkill("zebra", "zebra_base_1")) is state


def test_make_shiny():
    state = _state(ant=1)
    cost = shiny_cost(state.unit("ant"))
    state = replace(state, energy=cost)
    after = _reduce(state, MakeShiny("ant"))
    assert after.energy == 0
    assert after.unit("ant").is_shiny
    assert after.energy_per_second == 10 * state.energy_per_second
    again = replace(after, energy=cost)
    assert _reduce(again, MakeShiny("ant")) is again


def test_make_shiny_rejections():
    rich = 1e20
    unowned = _state(energy=rich)
    assert _reduce(unowned, MakeShiny("ant")) is unowned
    poor = _state(energy=1, ant=1)
    assert _reduce(poor, MakeShiny("ant")) is poor
    shiny = _reduce(_state(energy=rich, ant=1), MakeShiny("ant"))
    assert _reduce(shiny, MakeShiny("ant")) is shiny


# ── Load / reset ─────────────────────────────────────────────────


def test_load_game_recomputes_cached_rates():
    loaded = replace(_state(ant=4), energy_per_second=999.0, energy_per_click=999.0)
    after = _reduce(_state(), LoadGame(loaded))
    assert after.energy_per_second == 2
    assert after.energy_per_click == 1


def test_reset_starts_over():
    state = _reduce(_state(energy=1_000, ant=3), PurchaseUpgrade("grip"))
    after = _reduce(state, Reset(T))
    assert after.energy == 0
    assert after.total_energy == 0
    assert after.purchased_upgrades == frozenset()
    assert after.last_save_time == T
    assert all(u.count == 0 for u in after.units)
    assert after.unit("ant").unlocked
    assert not after.unit("bee").unlocked


def test_unknown_action_is_a_no_op():
    state = _state()
    assert reduce(state, object(), CATALOG) is state


# ── Properties ───────────────────────────────────────────────────


def test_ledger_invariants_over_a_session():
    state = _state()
    actions = (
        [RegisterAction()] * 20
        + [PurchaseUnit("ant", 1), AdvanceTime(3), PurchaseUnit("ant", 2), PurchaseUpgrade("grip")]
        + [ActivateBoost("prod_2x", T), AdvanceTime(10), PurchaseUnit("bee", 1)]
        + [ExpireBoosts(T + 40), ActivateBoost("windfall", T + 41), PurchaseUnit("ant", 100)]
        + [RegisterAction()] * 5
    )
    for action in actions:
        after = _reduce(state, action)
        assert after.total_energy >= state.total_energy
        assert after.energy >= 0
        for before_unit, after_unit in zip(state.units, after.units):
            assert after_unit.count >= before_unit.count
            assert after_unit.level <= BALANCE.units.max_level
        state = after
