"""HUD widget — energy counter, rates and running boosts."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from pokeclick.engine.formatting import format_duration, format_number
from pokeclick.engine.session import GameSession


class HUD(Widget):
    """Heads-up display showing the ledger."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    energy: reactive[str] = reactive("0")
    per_click: reactive[str] = reactive("1")
    per_second: reactive[str] = reactive("0/s")
    total: reactive[str] = reactive("0")
    clicks: reactive[int] = reactive(0)
    boosts: reactive[str] = reactive("")

    def render(self) -> Text:
        text = Text()
        text.append("  === PokéClick ===\n\n", style="bold yellow")

        text.append("  Energy: ", style="dim")
        text.append(f"{self.energy}\n", style="bold green")

        text.append("  Per Click: ", style="dim")
        text.append(f"{self.per_click}\n", style="green")

        text.append("  Per Second: ", style="dim")
        text.append(f"{self.per_second}\n", style="green")

        text.append("\n")
        text.append("  Lifetime: ", style="dim")
        text.append(f"{self.total}\n", style="cyan")
        text.append("  Clicks: ", style="dim")
        text.append(f"{self.clicks}\n", style="cyan")

        text.append("\n")
        if self.boosts:
            text.append("  Active boosts\n", style="bold magenta")
            for line in self.boosts.split("|"):
                text.append(f"  {line}\n", style="magenta")
            text.append("\n")

        text.append("  [Space] Click  [Enter] Buy  [M] Max\n", style="dim italic")
        text.append("  [S] Shiny  [K] Skills  [1-9] Upgrade\n", style="dim italic")
        text.append("  [ and ] Pick boost  [B] Boost\n", style="dim italic")
        text.append("  [E] Export  [I] Import  [Q] Quit\n", style="dim italic")

        return text

    def update_from_session(self, session: GameSession, now: float) -> None:
        """Sync HUD with the session."""
        state = session.state
        self.energy = format_number(state.energy)
        self.per_click = format_number(state.energy_per_click)
        self.per_second = f"{format_number(state.energy_per_second)}/s"
        self.total = format_number(state.total_energy)
        self.clicks = state.click_count
        self.boosts = "|".join(
            f"{session.catalog.boosts[b.boost_id].name}  {format_duration(b.expires_at - now)}"
            for b in state.active_boosts
            if b.expires_at > now and b.boost_id in session.catalog.boosts
        )
