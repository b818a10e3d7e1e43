"""Boost panel — timed boosts, their costs and cooldowns."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from pokeclick.data.boosts import BoostDef
from pokeclick.engine.formatting import format_duration, format_number
from pokeclick.engine.session import GameSession


class BoostPanel(Widget):
    """Lists every boost; `[` and `]` move the cursor, `b` activates."""

    DEFAULT_CSS = """
    BoostPanel {
        width: 100%;
        height: auto;
        padding: 1;
    }
    """

    signature: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._rows: list[tuple[BoostDef, float, float, float]] = []
        self._energy = 0.0
        self.selected = 0

    def selected_boost(self) -> BoostDef | None:
        if not self._rows:
            return None
        self.selected = min(self.selected, len(self._rows) - 1)
        return self._rows[self.selected][0]

    def move(self, step: int) -> None:
        if self._rows:
            self.selected = (self.selected + step) % len(self._rows)
            self.refresh()

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Boosts ═══\n\n", style="bold yellow")

        for i, (bdef, cost, running, cooldown) in enumerate(self._rows):
            cursor = "▶ " if i == self.selected else "  "
            text.append(cursor, style="bold yellow")
            if running > 0:
                text.append(f"{bdef.name} ", style="bold magenta")
                text.append(f"active {format_duration(running)}\n", style="magenta")
            elif cooldown > 0:
                text.append(f"{bdef.name} ", style="dim")
                text.append(f"ready in {format_duration(cooldown)}\n", style="dim")
            else:
                affordable = self._energy >= cost
                text.append(f"{bdef.name} ", style="bold green" if affordable else "bold red")
                text.append(f"{format_number(cost)}\n", style="green" if affordable else "red")
            if i == self.selected:
                text.append(f"      {bdef.description}\n", style="dim italic")

        return text

    def update_from_session(self, session: GameSession, now: float) -> None:
        self._energy = session.state.energy
        self._rows = [
            (
                bdef,
                session.boost_cost(bid),
                session.boost_remaining(bid, now),
                session.cooldown_remaining(bid, now),
            )
            for bid, bdef in session.catalog.boosts.items()
        ]
        self.signature = "|".join(
            f"{b.id}:{c:.0f}:{r:.0f}:{cd:.0f}" for b, c, r, cd in self._rows
        ) + f"|e:{self._energy:.0f}|s:{self.selected}"
