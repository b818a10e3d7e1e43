"""Scaling library — price curves for units, boosts and shinies.

Pure functions of scalar inputs. Pure per-purchase exponential growth runs
away once throughput is high, so every price also carries a log term keyed to
current energy/s.
"""

from __future__ import annotations

import math

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import BoostDef
from pokeclick.engine.game_state import UnitState


def production_scaling(throughput: float, coefficient: float) -> float:
    """1 + log(1 + throughput / reference) × coefficient."""
    reference = BALANCE.scaling.reference_throughput
    ratio = max(0.0, throughput / reference) if reference > 0 else 0.0
    return 1.0 + math.log1p(ratio) * coefficient


def _cost_at(base_cost: float, tier: int, count: int, throughput: float) -> float:
    growth = BALANCE.scaling.count_growth ** count
    scaling = production_scaling(throughput, BALANCE.tier_coefficient(tier))
    return max(base_cost, math.floor(base_cost * growth * scaling))


def unit_cost(unit: UnitState, throughput: float) -> float:
    """Price of the next single unit at the current energy/s."""
    return _cost_at(unit.base_cost, unit.tier, unit.count, throughput)


def bulk_unit_cost(unit: UnitState, throughput: float, quantity: int) -> float:
    """Price of `quantity` units bought one after another in a single action."""
    return sum(
        _cost_at(unit.base_cost, unit.tier, unit.count + i, throughput)
        for i in range(max(0, quantity))
    )


def max_affordable(unit: UnitState, throughput: float, available_energy: float) -> int:
    """Largest quantity purchasable with `available_energy`, capped by level headroom."""
    total = 0.0
    quantity = 0
    while quantity < unit.headroom:
        step = _cost_at(unit.base_cost, unit.tier, unit.count + quantity, throughput)
        if total + step > available_energy:
            break
        total += step
        quantity += 1
    return quantity


def boost_cost(boost: BoostDef, throughput: float) -> float:
    """Boosts never stack, so there is no purchase-count term."""
    scaled = math.floor(boost.base_cost * production_scaling(throughput, boost.cost_scale_factor))
    return max(boost.base_cost, scaled)


def shiny_cost(unit: UnitState) -> float:
    """Flat one-time toll: base_cost × factor × base^exponent, independent of count."""
    bal = BALANCE.units
    return math.floor(unit.base_cost * bal.shiny_cost_factor * bal.shiny_cost_base ** bal.shiny_cost_exponent)
