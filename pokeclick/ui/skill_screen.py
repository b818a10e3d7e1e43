"""Skill tree screen — spend a unit's experience value on its skill tree.

Each owned unit earns one EV per level. Nodes are bought with that budget and
stay bought; a node is only available once every prerequisite is unlocked.
"""

from __future__ import annotations

from rich.text import Text
from textual.screen import Screen
from textual.widgets import Static, Footer
from textual.containers import Vertical
from textual.binding import Binding

from pokeclick.data.skill_trees import SkillKind, SkillNode
from pokeclick.engine.formatting import format_number
from pokeclick.engine.production import current_evolution
from pokeclick.engine.session import GameSession
from pokeclick.engine.skills import unlock_blocker


_KEYS = "1234567890abcd"   # one key per node; the tree has 14


def _effect_label(node: SkillNode) -> str:
    if node.kind == SkillKind.PRODUCTION_MULTIPLIER:
        return f"x{node.value:g} production"
    return f"+{format_number(node.value)}/s"


class SkillScreen(Screen[None]):
    """Full-screen view of one unit's skill tree."""

    BINDINGS = [
        Binding("escape", "close", "Back"),
        *[Binding(k, f"unlock({i})", f"Unlock {k}", show=False) for i, k in enumerate(_KEYS)],
    ]

    DEFAULT_CSS = """
    SkillScreen {
        background: $surface;
        align: center top;
        padding: 2 4;
    }

    #skill-header {
        width: 100%;
        text-align: center;
        padding-bottom: 1;
    }

    #skill-nodes {
        width: 100%;
        height: auto;
        padding: 0 2;
    }
    """

    def __init__(self, session: GameSession, unit_id: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._session = session
        self._unit_id = unit_id

    def compose(self):
        yield Static(id="skill-header")
        with Vertical(id="skill-nodes"):
            yield Static(id="skill-list")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_display()

    # ── Actions ──────────────────────────────────────────────────

    def action_close(self) -> None:
        self.dismiss(None)

    def action_unlock(self, index: int) -> None:
        tree = self._session.catalog.tree(self._unit_id)
        if index >= len(tree):
            return
        node = tree[index]
        before = self._session.state
        after = self._session.unlock_skill(self._unit_id, node.id)
        if after is before:
            self.app.notify(f"Can't unlock {node.name} yet.", severity="error", timeout=1)
        else:
            self.app.notify(f"Unlocked {node.name}!", severity="information", timeout=1)
        self._refresh_display()

    # ── Rendering ────────────────────────────────────────────────

    def _refresh_display(self) -> None:
        unit = self._session.state.unit(self._unit_id)
        if unit is None:
            return
        tree = self._session.catalog.tree(self._unit_id)
        _, display_name = current_evolution(unit)

        header = self.query_one("#skill-header", Static)
        h = Text()
        h.append(f"✦ {display_name} Skill Tree ✦\n\n", style="bold bright_yellow")
        h.append("  EV available: ", style="dim")
        h.append(f"{self._session.remaining_ev(self._unit_id)}", style="bold magenta")
        h.append(f" / {unit.experience_value}\n", style="dim")
        header.update(h)

        names = {n.id: n.name for n in tree}
        body = Text()
        for i, node in enumerate(tree):
            key = _KEYS[i] if i < len(_KEYS) else "?"
            blocker = unlock_blocker(node, unit, tree)

            if blocker == "already_unlocked":
                body.append(f"  [{key}] ", style="dim")
                body.append(f"{node.name} ", style="bold green")
                body.append("✔ ", style="bold green")
            else:
                ready = blocker is None
                body.append(f"  [{key}] ", style="bold cyan" if ready else "dim")
                body.append(f"{node.name} ", style="bold white" if ready else "dim")
                cost_style = "magenta" if ready else "dim red"
                body.append(f"{node.cost} EV ", style=cost_style)
                if blocker == "missing_prerequisites":
                    missing = [names[p] for p in node.prerequisites if p not in unit.unlocked_skills]
                    body.append(f"(needs {', '.join(missing)}) ", style="dim")

            body.append(f"{_effect_label(node)}\n", style="dim italic")

        self.query_one("#skill-list", Static).update(body)
