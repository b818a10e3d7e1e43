"""PokéClick Web — Flask server exposing the game session as a JSON API.

The game loop is driven lazily: each request runs one session frame, which
catches up on elapsed time, before acting and returning the current state.
"""

from __future__ import annotations

import logging
import threading

from flask import Flask, jsonify, request

from pokeclick.data.balance import BALANCE
from pokeclick.engine.formatting import format_number
from pokeclick.engine.game_state import GameState, UnitState
from pokeclick.engine.production import current_evolution, next_evolution
from pokeclick.engine.save import SaveError
from pokeclick.engine.session import GameSession

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)
app.json.sort_keys = False

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_session: GameSession | None = None


def _ensure_game() -> GameSession:
    """Create and load the session on first use."""
    global _session
    if _session is None:
        _session = GameSession()
        granted = _session.load()
        if granted:
            logger.info("offline catch-up granted %s energy", format_number(granted))
    return _session


def _unit_json(session: GameSession, unit: UnitState) -> dict:
    pokemon_id, display_name = current_evolution(unit)
    evo = next_evolution(unit)
    capped = unit.headroom == 0
    cost = 0.0 if capped else session.unit_cost(unit.id)
    return {
        "id": unit.id,
        "name": unit.name,
        "display_name": display_name,
        "pokemon_id": pokemon_id,
        "tier": unit.tier,
        "count": unit.count,
        "level": unit.level,
        "max_level": BALANCE.units.max_level,
        "unlocked": unit.unlocked,
        "is_shiny": unit.is_shiny,
        "cost": format_number(cost),
        "cost_raw": cost,
        "can_afford": not capped and session.state.energy >= cost,
        "max_affordable": session.max_affordable(unit.id),
        "shiny_cost_raw": session.shiny_cost(unit.id),
        "experience_value": unit.experience_value,
        "remaining_ev": session.remaining_ev(unit.id),
        "unlocked_skills": sorted(unit.unlocked_skills),
        "next_evolution": None if evo is None else {"name": evo.name, "level": evo.level},
    }


def _state_json(session: GameSession) -> dict:
    """Build the JSON blob sent to clients."""
    s: GameState = session.state
    now = session.clock()

    upgrades = [
        {
            "id": u.id,
            "name": u.name,
            "description": u.description,
            "category": u.category,
            "cost": format_number(u.cost),
            "cost_raw": u.cost,
            "purchased": s.is_purchased(u.id),
            "can_afford": s.energy >= u.cost,
        }
        for u in session.available_upgrades()
    ]

    boosts = [
        {
            "id": bid,
            "name": b.name,
            "description": b.description,
            "cost_raw": session.boost_cost(bid),
            "remaining_s": session.boost_remaining(bid, now),
            "cooldown_s": session.cooldown_remaining(bid, now),
        }
        for bid, b in session.catalog.boosts.items()
    ]

    return {
        "energy": format_number(s.energy),
        "energy_raw": s.energy,
        "total_energy_raw": s.total_energy,
        "click_count": s.click_count,
        "per_click": format_number(s.energy_per_click),
        "per_click_raw": s.energy_per_click,
        "per_second": f"{format_number(s.energy_per_second)}/s",
        "per_second_raw": s.energy_per_second,
        "units": [_unit_json(session, u) for u in s.units],
        "upgrades": upgrades,
        "boosts": boosts,
        "server_time": now,
    }


def _respond(session: GameSession, before: GameState):
    data = _state_json(session)
    data["accepted"] = session.state is not before
    return jsonify(data)


def _not_found(kind: str, ident: str):
    return jsonify({"error": f"unknown {kind}: {ident}"}), 404


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/state")
def api_state():
    with _lock:
        session = _ensure_game()
        session.frame()
        return jsonify(_state_json(session))


@app.route("/api/click", methods=["POST"])
def api_click():
    with _lock:
        session = _ensure_game()
        session.frame()
        before = session.state
        session.click()
        return _respond(session, before)


@app.route("/api/units/<unit_id>/buy", methods=["POST"])
def api_buy_unit(unit_id: str):
    with _lock:
        session = _ensure_game()
        if session.state.unit(unit_id) is None:
            return _not_found("unit", unit_id)
        session.frame()
        body = request.get_json(silent=True) or {}
        try:
            quantity = int(body.get("quantity", 1))
        except (TypeError, ValueError):
            return jsonify({"error": "quantity must be an integer"}), 400
        before = session.state
        session.buy_unit(unit_id, quantity)
        return _respond(session, before)


@app.route("/api/units/<unit_id>/shiny", methods=["POST"])
def api_make_shiny(unit_id: str):
    with _lock:
        session = _ensure_game()
        if session.state.unit(unit_id) is None:
            return _not_found("unit", unit_id)
        session.frame()
        before = session.state
        session.make_shiny(unit_id)
        return _respond(session, before)


@app.route("/api/units/<unit_id>/skills/<skill_id>", methods=["POST"])
def api_unlock_skill(unit_id: str, skill_id: str):
    with _lock:
        session = _ensure_game()
        if session.catalog.skill(unit_id, skill_id) is None:
            return _not_found("skill", skill_id)
        session.frame()
        before = session.state
        session.unlock_skill(unit_id, skill_id)
        return _respond(session, before)


@app.route("/api/upgrades/<upgrade_id>/buy", methods=["POST"])
def api_buy_upgrade(upgrade_id: str):
    with _lock:
        session = _ensure_game()
        if upgrade_id not in session.catalog.upgrades:
            return _not_found("upgrade", upgrade_id)
        session.frame()
        before = session.state
        session.buy_upgrade(upgrade_id)
        return _respond(session, before)


@app.route("/api/boosts/<boost_id>/activate", methods=["POST"])
def api_activate_boost(boost_id: str):
    with _lock:
        session = _ensure_game()
        if boost_id not in session.catalog.boosts:
            return _not_found("boost", boost_id)
        session.frame()
        before = session.state
        session.activate_boost(boost_id)
        return _respond(session, before)


@app.route("/api/export")
def api_export():
    with _lock:
        session = _ensure_game()
        session.frame()
        return jsonify({"data": session.export_text()})


@app.route("/api/import", methods=["POST"])
def api_import():
    with _lock:
        session = _ensure_game()
        body = request.get_json(silent=True) or {}
        text = body.get("data")
        if not isinstance(text, str):
            return jsonify({"error": "expected a JSON body with a 'data' string"}), 400
        try:
            granted = session.import_text(text)
        except SaveError as exc:
            logger.warning("rejected import: %s", exc)
            return jsonify({"error": str(exc)}), 400
        data = _state_json(session)
        data["offline_granted_raw"] = granted
        return jsonify(data)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    with _lock:
        session = _ensure_game()
        session.reset()
        return jsonify(_state_json(session))


@app.route("/api/save", methods=["POST"])
def api_save():
    with _lock:
        session = _ensure_game()
        return jsonify({"saved": session.save()})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    try:
        app.run(host=host, port=port, debug=debug, use_reloader=False)
    finally:
        with _lock:
            if _session is not None:
                _session.close()
