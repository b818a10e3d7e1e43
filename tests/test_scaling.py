"""Tests for the price curves."""

import math

import pytest

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import ALL_BOOSTS
from pokeclick.engine.game_state import UnitState
from pokeclick.engine.scaling import (
    boost_cost,
    bulk_unit_cost,
    max_affordable,
    production_scaling,
    shiny_cost,
    unit_cost,
)


def _unit(base_cost=100, tier=1, count=0, **kwargs) -> UnitState:
    return UnitState(
        id=kwargs.pop("id", "test"), name="Test", base_cost=base_cost,
        base_production=1, tier=tier, count=count, level=count, **kwargs,
    )


def test_production_scaling_is_one_without_throughput():
    assert production_scaling(0, 0.5) == 1.0


def test_production_scaling_log_shape():
    ref = BALANCE.scaling.reference_throughput
    assert production_scaling(ref, 1.0) == pytest.approx(1 + math.log(2))


def test_production_scaling_ignores_negative_throughput():
    assert production_scaling(-100, 0.5) == 1.0


def test_tier_coefficients():
    assert BALANCE.tier_coefficient(1) == 0.15
    assert BALANCE.tier_coefficient(5) == 0.5
    assert BALANCE.tier_coefficient(99) == BALANCE.scaling.default_tier_coefficient


def test_first_unit_costs_base_cost():
    assert unit_cost(_unit(base_cost=15), 0) == 15


def test_unit_cost_never_below_base_cost():
    for count in range(5):
        for eps in (0, 1, 1_000, 1e9):
            assert unit_cost(_unit(base_cost=10, count=count), eps) >= 10


def test_unit_cost_grows_with_count():
    assert unit_cost(_unit(count=1), 0) > unit_cost(_unit(count=0), 0)
    assert unit_cost(_unit(count=1), 0) == math.floor(100 * 1.18)


def test_unit_cost_grows_with_throughput():
    assert unit_cost(_unit(), 10_000) > unit_cost(_unit(), 0)


def test_higher_tier_reacts_more_to_throughput():
    assert unit_cost(_unit(tier=5), 10_000) > unit_cost(_unit(tier=1), 10_000)


def test_bought_sibling_costs_more_than_fresh_one():
    bought = _unit(id="a", count=5)
    fresh = _unit(id="b", count=0)
    assert unit_cost(bought, 42.0) > unit_cost(fresh, 42.0)


def test_bulk_cost_is_sum_of_singles():
    unit = _unit(count=3)
    singles = sum(unit_cost(_unit(count=3 + i), 7.0) for i in range(4))
    assert bulk_unit_cost(unit, 7.0, 4) == singles
    assert bulk_unit_cost(unit, 7.0, 0) == 0


def test_max_affordable():
    unit = _unit(base_cost=15)
    # 15 + floor(15 * 1.18) = 32
    assert max_affordable(unit, 0, 14) == 0
    assert max_affordable(unit, 0, 15) == 1
    assert max_affordable(unit, 0, 31) == 1
    assert max_affordable(unit, 0, 32) == 2


def test_max_affordable_respects_level_ceiling():
    unit = _unit(base_cost=1, count=BALANCE.units.max_level - 1)
    assert max_affordable(unit, 0, 1e300) == 1
    capped = _unit(base_cost=1, count=BALANCE.units.max_level)
    assert max_affordable(capped, 0, 1e300) == 0


def test_boost_cost_floor_and_growth():
    boost = ALL_BOOSTS["production_boost_2x"]
    assert boost_cost(boost, 0) == boost.base_cost
    assert boost_cost(boost, 1e6) > boost.base_cost


def test_shiny_cost_is_flat_toll():
    unit = _unit(base_cost=15)
    expected = math.floor(15 * 2 * 1.3 ** 30)
    assert shiny_cost(unit) == expected
    assert shiny_cost(_unit(base_cost=15, count=40)) == expected
