"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing. Unit costs follow:
base_cost * (count_growth ^ count) * (1 + log1p(eps / reference_throughput) * tier_coefficient)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScalingBalance:
    """Tuning for unit and boost price curves."""

    # Exponential growth per unit already owned
    count_growth: float = 1.18

    # Energy/s at which the log term reaches log(2)
    reference_throughput: float = 50.0

    # Tier → how hard the price reacts to current energy/s.
    # Early units scale less, rare late-game units more.
    tier_coefficients: tuple[tuple[int, float], ...] = (
        (1, 0.15),   # starters
        (2, 0.25),
        (3, 0.35),
        (4, 0.45),   # legendaries
        (5, 0.5),    # mythicals
    )
    default_tier_coefficient: float = 0.2


@dataclass(frozen=True)
class UnitBalance:
    """Tuning for production units."""

    # Level (and purchasable count) ceiling
    max_level: int = 252

    # A locked unit is revealed at this fraction of its base cost (lifetime energy)
    unlock_fraction: float = 0.5

    # Shiny: flat production multiplier and its one-time toll
    shiny_multiplier: float = 10.0
    shiny_cost_factor: float = 2.0
    shiny_cost_base: float = 1.3
    shiny_cost_exponent: int = 30


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for the ledger."""

    base_energy_per_click: float = 1.0

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
        (1e21, "Sx"),
    )


@dataclass(frozen=True)
class SessionBalance:
    """Timing for the live session (tick driver, sweeps, autosave)."""

    # Minimum gap between two AdvanceTime dispatches (10/s)
    tick_interval_s: float = 0.1
    # Display refresh rate of the terminal front-end
    frame_rate_hz: float = 30.0
    expire_sweep_interval_s: float = 1.0
    autosave_interval_s: float = 5.0


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    scaling: ScalingBalance = field(default_factory=ScalingBalance)
    units: UnitBalance = field(default_factory=UnitBalance)
    economy: EconomyBalance = field(default_factory=EconomyBalance)
    session: SessionBalance = field(default_factory=SessionBalance)

    def tier_coefficient(self, tier: int) -> float:
        for t, coefficient in self.scaling.tier_coefficients:
            if t == tier:
                return coefficient
        return self.scaling.default_tier_coefficient


# Singleton — import this everywhere
BALANCE = GameBalance()
