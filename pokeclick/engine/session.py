"""Game session — the one object that owns the live state.

Front-ends construct one per running game and talk to it: they read
`session.state`, poll the query helpers, and change anything only through
`dispatch` (or the intent shortcuts that wrap it).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pokeclick.data.balance import BALANCE
from pokeclick.data.catalog import DEFAULT_CATALOG, Catalog
from pokeclick.data.upgrades import UpgradeDef
from pokeclick.engine import scaling, skills
from pokeclick.engine.actions import (
    Action,
    ActivateBoost,
    ExpireBoosts,
    LoadGame,
    MakeShiny,
    PurchaseUnit,
    PurchaseUpgrade,
    RegisterAction,
    Reset,
    UnlockSkill,
)
from pokeclick.engine.game_state import GameState, UnitState, new_game
from pokeclick.engine.production import auto_click_rate, upgrade_available
from pokeclick.engine.reducer import reduce, with_rates
from pokeclick.engine.save import (
    SaveError,
    delete_run,
    encode_export,
    import_state,
    load_run,
    save_run,
)
from pokeclick.engine.ticker import AutoClicker, TickDriver

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one GameState plus the periodic work around it."""

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        clock: Callable[[], float] = time.time,
        persist: bool = True,
    ) -> None:
        self.catalog = catalog
        self.clock = clock
        self.persist = persist
        now = clock()
        self._state: GameState = with_rates(new_game(catalog, now), catalog)
        self._ticker = TickDriver(self.dispatch, now)
        self._auto_clicker = AutoClicker(self.dispatch)
        self._last_frame = now
        self._last_sweep = now
        self._last_autosave = now
        self._closed = False

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, action: Action) -> GameState:
        """The single mutation entry point."""
        self._state = reduce(self._state, action, self.catalog)
        return self._state

    # ── Game loop ────────────────────────────────────────

    def frame(self, now: float | None = None) -> None:
        """Called on every display frame (or request). Drives all periodic work."""
        if self._closed:
            return
        now = self.clock() if now is None else now
        delta = now - self._last_frame
        self._last_frame = now

        self._auto_clicker.step(auto_click_rate(self._state.active_boosts, now), delta)
        self._ticker.frame(now)

        if now - self._last_sweep >= BALANCE.session.expire_sweep_interval_s:
            self.dispatch(ExpireBoosts(now))
            self._last_sweep = now

        if self.persist and now - self._last_autosave >= BALANCE.session.autosave_interval_s:
            self.save(now)
            self._last_autosave = now

    def close(self) -> None:
        """Stop periodic work and write a final save."""
        if self._closed:
            return
        self._closed = True
        if self.persist:
            self.save()

    # ── Intents ──────────────────────────────────────────

    def click(self) -> GameState:
        return self.dispatch(RegisterAction())

    def buy_unit(self, unit_id: str, quantity: int = 1) -> GameState:
        return self.dispatch(PurchaseUnit(unit_id, quantity))

    def buy_upgrade(self, upgrade_id: str) -> GameState:
        return self.dispatch(PurchaseUpgrade(upgrade_id))

    def activate_boost(self, boost_id: str) -> GameState:
        return self.dispatch(ActivateBoost(boost_id, self.clock()))

    def unlock_skill(self, unit_id: str, skill_id: str) -> GameState:
        return self.dispatch(UnlockSkill(unit_id, skill_id))

    def make_shiny(self, unit_id: str) -> GameState:
        return self.dispatch(MakeShiny(unit_id))

    def reset(self) -> GameState:
        now = self.clock()
        if self.persist:
            delete_run()
        self._ticker.reset(now)
        logger.info("game reset")
        return self.dispatch(Reset(now))

    # ── Queries ──────────────────────────────────────────

    def _unit(self, unit_id: str) -> UnitState:
        unit = self._state.unit(unit_id)
        if unit is None:
            raise KeyError(unit_id)
        return unit

    def unit_cost(self, unit_id: str) -> float:
        return scaling.unit_cost(self._unit(unit_id), self._state.energy_per_second)

    def bulk_unit_cost(self, unit_id: str, quantity: int) -> float:
        return scaling.bulk_unit_cost(self._unit(unit_id), self._state.energy_per_second, quantity)

    def max_affordable(self, unit_id: str) -> int:
        return scaling.max_affordable(self._unit(unit_id), self._state.energy_per_second, self._state.energy)

    def shiny_cost(self, unit_id: str) -> float:
        return scaling.shiny_cost(self._unit(unit_id))

    def boost_cost(self, boost_id: str) -> float:
        return scaling.boost_cost(self.catalog.boosts[boost_id], self._state.energy_per_second)

    def cooldown_remaining(self, boost_id: str, now: float | None = None) -> float:
        now = self.clock() if now is None else now
        cooldown = self._state.cooldown(boost_id)
        if cooldown is None:
            return 0.0
        return max(0.0, cooldown.available_at - now)

    def boost_remaining(self, boost_id: str, now: float | None = None) -> float:
        """Seconds left on an active boost (0 if it isn't running)."""
        now = self.clock() if now is None else now
        for b in self._state.active_boosts:
            if b.boost_id == boost_id:
                return max(0.0, b.expires_at - now)
        return 0.0

    def remaining_ev(self, unit_id: str) -> int:
        return skills.remaining_ev(self._unit(unit_id), self.catalog.tree(unit_id))

    def can_unlock(self, unit_id: str, skill_id: str) -> bool:
        skill = self.catalog.skill(unit_id, skill_id)
        if skill is None:
            return False
        return skills.can_unlock(skill, self._unit(unit_id), self.catalog.tree(unit_id))

    def available_upgrades(self) -> list[UpgradeDef]:
        return [u for u in self.catalog.upgrades.values() if upgrade_available(u, self._state)]

    # ── Persistence ──────────────────────────────────────

    def save(self, now: float | None = None) -> bool:
        return save_run(self._state, self.clock() if now is None else now)

    def load(self) -> float | None:
        """Restore the saved game, if any. Returns the offline grant, or None.

        A corrupt save is logged and ignored; the current game is kept.
        """
        now = self.clock()
        try:
            loaded = load_run(self.catalog, now)
        except SaveError as exc:
            logger.warning("ignoring unreadable save: %s", exc)
            return None
        if loaded is None:
            return None
        state, granted = loaded
        self._install(state, now)
        logger.info("save loaded (%d units owned)", sum(u.count for u in state.units))
        return granted

    def export_text(self) -> str:
        return encode_export(self._state, self.clock())

    def import_text(self, text: str) -> float:
        """Replace the game with an exported one. Raises SaveError; state kept on failure."""
        now = self.clock()
        state, granted = import_state(text, self.catalog, now)
        self._install(state, now)
        logger.info("save imported")
        return granted

    def _install(self, state: GameState, now: float) -> None:
        self.dispatch(LoadGame(state))
        self._ticker.reset(now)
        self._last_frame = now
