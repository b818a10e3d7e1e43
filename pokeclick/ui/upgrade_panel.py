"""Upgrade panel — shows upgrades whose conditions are met and lets the player buy them."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from pokeclick.data.upgrades import UpgradeDef, UpgradeKind
from pokeclick.engine.formatting import format_number
from pokeclick.engine.game_state import GameState

MAX_SHOWN = 9


def _effect_summary(udef: UpgradeDef) -> str:
    """Short effect label, e.g. '+5 per click' or 'x2 all'."""
    k = udef.kind
    if k == UpgradeKind.CLICK_BONUS:
        return f"+{format_number(udef.value)} per click"
    if k == UpgradeKind.CLICK_MULTIPLIER:
        return f"x{udef.value:g} per click"
    if k == UpgradeKind.GLOBAL_PERCENT:
        return f"+{udef.value:g}% all production"
    if k == UpgradeKind.GLOBAL_MULTIPLIER:
        return f"x{udef.value:g} all production"
    if k == UpgradeKind.UNIT_BONUS:
        return f"+{format_number(udef.value)}/s {udef.target_unit_id}"
    if k == UpgradeKind.UNIT_MULTIPLIER:
        return f"x{udef.value:g} {udef.target_unit_id}"
    return ""


def shop_offerings(available: list[UpgradeDef], state: GameState) -> list[UpgradeDef]:
    """Unpurchased, available upgrades, cheapest first, capped to the number keys."""
    pending = [u for u in available if not state.is_purchased(u.id)]
    pending.sort(key=lambda u: (u.cost, u.id))
    return pending[:MAX_SHOWN]


class UpgradePanel(Widget):
    """Displays upgrade offerings with cost and affordability."""

    DEFAULT_CSS = """
    UpgradePanel {
        width: 100%;
        height: auto;
        padding: 1;
    }
    """

    offerings_text: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: GameState | None = None
        self._offerings: list[UpgradeDef] = []

    @property
    def offerings(self) -> list[UpgradeDef]:
        return self._offerings

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Upgrades ═══\n\n", style="bold magenta")

        if self._state is None or not self._offerings:
            text.append("  Nothing on offer yet...\n", style="dim italic")
            return text

        for i, udef in enumerate(self._offerings):
            affordable = self._state.energy >= udef.cost
            text.append(f"  [{i + 1}] ", style="bold")
            name_style = "bold green" if affordable else "bold red"
            text.append(f"{udef.name}\n", style=name_style)
            text.append(f"      {_effect_summary(udef)}\n", style="cyan")
            cost_style = "green" if affordable else "red"
            text.append(f"      Cost: {format_number(udef.cost)}\n", style=cost_style)

        return text

    def update_from_state(self, state: GameState, available: list[UpgradeDef]) -> None:
        """Sync panel with game state."""
        self._state = state
        self._offerings = shop_offerings(available, state)
        self.offerings_text = "|".join(u.id for u in self._offerings) + f"|e:{state.energy:.0f}"
