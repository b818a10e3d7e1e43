"""PokéClick — Main Textual Application.

Wires a GameSession into a playable TUI. The session owns the state; the app
only turns keys into intents and pushes the resulting state to the widgets.
"""

from __future__ import annotations

import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Header, Footer
from textual.timer import Timer

from pokeclick.data.balance import BALANCE
from pokeclick.engine.formatting import format_number
from pokeclick.engine.save import SaveError, save_dir
from pokeclick.engine.session import GameSession

from pokeclick.ui.boost_panel import BoostPanel
from pokeclick.ui.hud import HUD
from pokeclick.ui.skill_screen import SkillScreen
from pokeclick.ui.unit_panel import UnitPanel
from pokeclick.ui.upgrade_panel import UpgradePanel


EXPORT_FILE = "export.txt"
IMPORT_FILE = "import.txt"

# Seconds within which a second reset keypress confirms
_RESET_CONFIRM_WINDOW = 3.0


class PokeClickApp(App):
    """The PokéClick TUI game application."""

    TITLE = "PokéClick"
    SUB_TITLE = "Click. Catch. Evolve."

    CSS = """
    #game-container {
        height: 1fr;
    }

    #hud-panel {
        width: 1fr;
    }

    #unit-panel {
        width: 2fr;
    }

    #shop-panel {
        width: 1fr;
        overflow-y: auto;
    }
    """

    BINDINGS = [
        Binding("space", "click", "Click", show=True, priority=True),
        Binding("up", "select_unit(-1)", "Prev", show=False),
        Binding("down", "select_unit(1)", "Next", show=False),
        Binding("enter", "buy_unit", "Buy", show=True),
        Binding("m", "buy_max", "Buy max", show=True),
        Binding("s", "make_shiny", "Shiny", show=True),
        Binding("k", "show_skills", "Skills", show=True),
        Binding("left_square_bracket", "select_boost(-1)", "Prev boost", show=False),
        Binding("right_square_bracket", "select_boost(1)", "Next boost", show=False),
        Binding("b", "activate_boost", "Boost", show=True),
        *[Binding(str(i + 1), f"buy_upgrade({i})", f"Upgrade #{i + 1}", show=False) for i in range(9)],
        Binding("e", "export", "Export", show=True),
        Binding("i", "import", "Import", show=False),
        Binding("ctrl+r", "reset", "Reset", show=False),
        Binding("q", "quit_game", "Quit", show=True),
    ]

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = session if session is not None else GameSession()
        self._frame_timer: Timer | None = None
        self._reset_requested_at: float = 0.0

    def compose(self) -> ComposeResult:
        yield Header()

        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield UnitPanel(id="unit-panel")
            with Vertical(id="shop-panel"):
                yield UpgradePanel(id="upgrade-panel")
                yield BoostPanel(id="boost-panel")

        yield Footer()

    def on_mount(self) -> None:
        """Restore the saved game and start the frame timer."""
        granted = self._session.load()
        if granted:
            self.notify(
                f"Welcome back! Your Pokémon made {format_number(granted)} energy while you were away.",
                severity="information", timeout=5,
            )

        interval = 1.0 / BALANCE.session.frame_rate_hz
        self._frame_timer = self.set_interval(interval, self._frame)
        self._sync_ui()

    def on_unmount(self) -> None:
        if self._frame_timer is not None:
            self._frame_timer.stop()
        self._session.close()

    def _frame(self) -> None:
        self._session.frame()
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push session state to all UI widgets."""
        now = time.time()
        state = self._session.state

        self.query_one("#hud-panel", HUD).update_from_session(self._session, now)
        self.query_one("#unit-panel", UnitPanel).update_from_state(state, self._session.catalog)
        self.query_one("#upgrade-panel", UpgradePanel).update_from_state(
            state, self._session.available_upgrades()
        )
        self.query_one("#boost-panel", BoostPanel).update_from_session(self._session, now)

    # ── Actions ──────────────────────────────────────

    def action_click(self) -> None:
        self._session.click()

    def action_select_unit(self, step: int) -> None:
        self.query_one("#unit-panel", UnitPanel).move(step)

    def action_select_boost(self, step: int) -> None:
        self.query_one("#boost-panel", BoostPanel).move(step)

    def action_buy_unit(self) -> None:
        unit = self.query_one("#unit-panel", UnitPanel).selected_unit()
        if unit is None:
            return
        before = self._session.state
        if self._session.buy_unit(unit.id) is before:
            self.notify("Can't afford that Pokémon.", severity="error", timeout=1)

    def action_buy_max(self) -> None:
        unit = self.query_one("#unit-panel", UnitPanel).selected_unit()
        if unit is None:
            return
        quantity = self._session.max_affordable(unit.id)
        if quantity <= 0:
            self.notify("Can't afford any.", severity="error", timeout=1)
            return
        self._session.buy_unit(unit.id, quantity)
        self.notify(f"Bought {quantity}× {unit.name}!", severity="information", timeout=1)

    def action_make_shiny(self) -> None:
        unit = self.query_one("#unit-panel", UnitPanel).selected_unit()
        if unit is None:
            return
        before = self._session.state
        if self._session.make_shiny(unit.id) is before:
            self.notify(
                f"Shiny costs {format_number(self._session.shiny_cost(unit.id))} (and one owned).",
                severity="error", timeout=2,
            )
        else:
            self.notify(f"✦ {unit.name} is now shiny! ✦", severity="warning", timeout=3)

    def action_show_skills(self) -> None:
        unit = self.query_one("#unit-panel", UnitPanel).selected_unit()
        if unit is None:
            return
        self.push_screen(SkillScreen(self._session, unit.id))

    def action_buy_upgrade(self, index: int) -> None:
        offerings = self.query_one("#upgrade-panel", UpgradePanel).offerings
        if index >= len(offerings):
            return
        udef = offerings[index]
        before = self._session.state
        if self._session.buy_upgrade(udef.id) is before:
            self.notify("Can't afford that upgrade.", severity="error", timeout=1)
        else:
            self.notify(f"Bought {udef.name}!", severity="information", timeout=1)

    def action_activate_boost(self) -> None:
        bdef = self.query_one("#boost-panel", BoostPanel).selected_boost()
        if bdef is None:
            return
        before = self._session.state
        if self._session.activate_boost(bdef.id) is before:
            self.notify("Boost not available right now.", severity="error", timeout=1)
        else:
            self.notify(f"{bdef.name} activated!", severity="warning", timeout=2)

    def action_export(self) -> None:
        path = save_dir() / EXPORT_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self._session.export_text())
        except OSError as exc:
            self.notify(f"Export failed: {exc}", severity="error", timeout=3)
            return
        self.notify(f"Exported to {path}", severity="information", timeout=3)

    def action_import(self) -> None:
        path = save_dir() / IMPORT_FILE
        try:
            text = path.read_text()
        except OSError:
            self.notify(f"Put an export string in {path} first.", severity="error", timeout=3)
            return
        try:
            granted = self._session.import_text(text)
        except SaveError as exc:
            self.notify(f"Import failed: {exc}", severity="error", timeout=3)
            return
        self.notify(f"Imported! +{format_number(granted)} offline energy", severity="information", timeout=3)

    def action_reset(self) -> None:
        now = time.time()
        if now - self._reset_requested_at > _RESET_CONFIRM_WINDOW:
            self._reset_requested_at = now
            self.notify("Press Ctrl+R again to erase all progress.", severity="warning", timeout=3)
            return
        self._reset_requested_at = 0.0
        self._session.reset()
        self.notify("Progress reset.", severity="information", timeout=2)

    def action_quit_game(self) -> None:
        """Save and quit."""
        self._session.close()
        self.notify("Game saved!", severity="information", timeout=1)
        self.exit()
