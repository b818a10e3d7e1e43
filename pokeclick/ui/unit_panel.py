"""Unit panel — the roster, with costs, levels and evolutions."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from pokeclick.data.balance import BALANCE
from pokeclick.data.catalog import Catalog
from pokeclick.engine.formatting import format_number
from pokeclick.engine.game_state import GameState, UnitState
from pokeclick.engine.production import current_evolution, next_evolution, unit_production
from pokeclick.engine.scaling import shiny_cost, unit_cost
from pokeclick.engine.skills import remaining_ev


def visible_units(state: GameState) -> list[UnitState]:
    return [u for u in state.units if u.unlocked]


class UnitPanel(Widget):
    """Lists unlocked units; the selected one is the target of buy/shiny/skills."""

    DEFAULT_CSS = """
    UnitPanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    signature: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: GameState | None = None
        self._catalog: Catalog | None = None
        self.selected = 0

    def selected_unit(self) -> UnitState | None:
        if self._state is None:
            return None
        units = visible_units(self._state)
        if not units:
            return None
        self.selected = min(self.selected, len(units) - 1)
        return units[self.selected]

    def move(self, step: int) -> None:
        if self._state is None:
            return
        count = len(visible_units(self._state))
        if count:
            self.selected = (self.selected + step) % count
            self.refresh()

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Pokémon ═══\n\n", style="bold cyan")
        if self._state is None or self._catalog is None:
            return text

        state = self._state
        purchased = [self._catalog.upgrades[u] for u in state.purchased_upgrades if u in self._catalog.upgrades]
        for i, unit in enumerate(visible_units(state)):
            cursor = "▶ " if i == self.selected else "  "
            _, display_name = current_evolution(unit)
            cost = unit_cost(unit, state.energy_per_second)
            affordable = state.energy >= cost
            capped = unit.headroom == 0

            text.append(f"{cursor}", style="bold yellow")
            name_style = "bold green" if affordable and not capped else "bold"
            text.append(f"{display_name}", style=name_style)
            if unit.is_shiny:
                text.append(" ✦", style="bold bright_yellow")
            text.append(f"  x{unit.count}  Lv.{unit.level}/{BALANCE.units.max_level}\n", style="dim")

            production = unit_production(unit, purchased, self._catalog)
            text.append(f"      {format_number(production)}/s", style="cyan")
            ev = remaining_ev(unit, self._catalog.tree(unit.id))
            text.append(f"   EV {ev}", style="magenta")
            if capped:
                text.append("   MAX\n", style="bold green")
            else:
                cost_style = "green" if affordable else "red"
                text.append(f"   Cost: {format_number(cost)}\n", style=cost_style)

            if i == self.selected:
                evo = next_evolution(unit)
                if evo is not None:
                    text.append(f"      Evolves into {evo.name} at {evo.level}\n", style="dim italic")
                if not unit.is_shiny and unit.count > 0:
                    text.append(f"      Shiny: {format_number(shiny_cost(unit))}\n", style="dim italic")

        return text

    def update_from_state(self, state: GameState, catalog: Catalog) -> None:
        self._state = state
        self._catalog = catalog
        self.signature = "|".join(f"{u.id}:{u.count}:{u.is_shiny}" for u in visible_units(state)) + (
            f"|e:{state.energy:.0f}|s:{self.selected}"
        )
