"""Save/load — serialisation, catalog reconciliation and offline catch-up.

Loading is a three-step pipeline:

1. ``deserialize`` checks the text is a JSON object of the right shape.
2. ``reconcile`` merges it by id against the *current* catalog, so new
   content shows up and removed content disappears without corrupting
   progress. Cached rates are always recomputed, never trusted.
3. ``offline_catch_up`` credits the energy produced while the game was closed.

Exports are the same JSON, base64-encoded for copy-paste.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import os
import time
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from pokeclick.data.balance import BALANCE
from pokeclick.data.boosts import BoostKind
from pokeclick.data.catalog import Catalog
from pokeclick.engine.actions import ExpireBoosts
from pokeclick.engine.game_state import ActiveBoost, BoostCooldown, GameState, UnitState
from pokeclick.engine.reducer import auto_unlock, reduce, with_rates

logger = logging.getLogger(__name__)

SAVE_VERSION = 2


class SaveError(Exception):
    """A save could not be restored. The current game is left untouched."""


class SaveDecodeError(SaveError):
    """The export text is not valid base64/UTF-8 (bad copy-paste)."""


class SaveFormatError(SaveError):
    """The save decoded fine but is not a game save."""


# ── Serialisation helpers ────────────────────────────────────────


def _unit_to_dict(u: UnitState) -> dict:
    return {
        "id": u.id,
        "count": u.count,
        "unlocked": u.unlocked,
        "level": u.level,
        "experience_value": u.experience_value,
        "unlocked_skills": sorted(u.unlocked_skills),
        "is_shiny": u.is_shiny,
    }


def _state_to_dict(state: GameState, saved_at: float) -> dict:
    s = state
    return {
        "version": SAVE_VERSION,
        "energy": s.energy,
        "total_energy": s.total_energy,
        "click_count": s.click_count,
        "energy_per_click": s.energy_per_click,
        "energy_per_second": s.energy_per_second,
        "last_save_time": saved_at,
        "units": [_unit_to_dict(u) for u in s.units],
        "upgrades": sorted(s.purchased_upgrades),
        "active_boosts": [
            {
                "boost_id": b.boost_id,
                "value": b.value,
                "started_at": b.started_at,
                "expires_at": b.expires_at,
            }
            for b in s.active_boosts
        ],
        "cooldowns": [
            {"boost_id": c.boost_id, "available_at": c.available_at}
            for c in s.cooldowns
        ],
    }


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _all_ids(values: Iterable[object]) -> bool:
    return all(isinstance(v, str) for v in values)


def _num(d: dict, key: str, default: float) -> float:
    value = d.get(key, default)
    return float(value) if _is_number(value) else default


def _int(d: dict, key: str, default: int) -> int:
    value = d.get(key, default)
    return int(value) if _is_number(value) else default


def _clamp_level(value: int) -> int:
    return min(max(0, value), BALANCE.units.max_level)


# ── Public API ───────────────────────────────────────────────────


def serialize(state: GameState, now: float | None = None) -> str:
    """Dump the mutable parts of `state`, stamped with the save time."""
    saved_at = time.time() if now is None else now
    return json.dumps(_state_to_dict(state, saved_at))


def deserialize(text: str) -> dict:
    """Parse and structurally validate a save. Raises SaveFormatError."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise SaveFormatError(f"save is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SaveFormatError("save must be a JSON object")
    for key in ("energy", "total_energy"):
        if not _is_number(data.get(key)):
            raise SaveFormatError(f"save field {key!r} is missing or not a number")
    units = data.get("units")
    if not isinstance(units, list) or not all(
        isinstance(u, dict) and isinstance(u.get("id"), str) for u in units
    ):
        raise SaveFormatError("save field 'units' must be a list of objects with an id")
    for u in units:
        if not isinstance(u.get("unlocked_skills", []), list) or not _all_ids(u.get("unlocked_skills", [])):
            raise SaveFormatError(f"unit {u['id']!r} has malformed unlocked_skills")
        for key in ("count", "level", "experience_value", "ev"):
            if key in u and not _is_number(u[key]):
                raise SaveFormatError(f"unit {u['id']!r} field {key!r} is not a finite number")

    upgrades = data.get("upgrades", [])
    if not isinstance(upgrades, list) or not _all_ids(
        e["id"] if isinstance(e, dict) and "id" in e else e for e in upgrades
    ):
        raise SaveFormatError("save field 'upgrades' must be a list of ids")
    for key in ("active_boosts", "cooldowns"):
        entries = data.get(key, [])
        if not isinstance(entries, list) or not all(
            isinstance(e, dict) and isinstance(e.get("boost_id"), str) for e in entries
        ):
            raise SaveFormatError(f"save field {key!r} must be a list of objects with a boost_id")
    return data


def _reconcile_unit(base: UnitState, saved: dict, catalog: Catalog) -> UnitState:
    count = _clamp_level(_int(saved, "count", 0))
    # Older saves have no level/EV: derive both from count
    level = _clamp_level(_int(saved, "level", count))
    ev = _int(saved, "experience_value", _int(saved, "ev", level))
    tree_ids = {node.id for node in catalog.tree(base.id)}
    skills = saved.get("unlocked_skills", [])
    if not isinstance(skills, list):
        skills = []
    return replace(
        base,
        count=count,
        unlocked=bool(saved.get("unlocked", base.unlocked)),
        level=level,
        experience_value=max(0, ev),
        unlocked_skills=frozenset(s for s in skills if isinstance(s, str) and s in tree_ids),
        is_shiny=bool(saved.get("is_shiny", False)),
    )


def _purchased_ids(entries: list, catalog: Catalog) -> frozenset[str]:
    purchased = set()
    for entry in entries:
        # Accept both ["id", ...] and [{"id": ..., "purchased": true}, ...]
        if isinstance(entry, str):
            uid = entry
        elif isinstance(entry, dict) and entry.get("purchased"):
            uid = entry.get("id")
        else:
            continue
        if isinstance(uid, str) and uid in catalog.upgrades:
            purchased.add(uid)
    return frozenset(purchased)


def reconcile(candidate: dict, catalog: Catalog) -> GameState:
    """Merge a deserialized save into a fresh catalog-shaped state."""
    saved_units = {u["id"]: u for u in candidate.get("units", [])}
    units = []
    for udef in catalog.units.values():
        base = UnitState.from_def(udef)
        saved = saved_units.get(udef.id)
        units.append(_reconcile_unit(base, saved, catalog) if saved is not None else base)

    active = []
    for b in candidate.get("active_boosts", []):
        bid = b.get("boost_id") if isinstance(b, dict) else None
        bdef = catalog.boosts.get(bid) if isinstance(bid, str) else None
        if bdef is None or bdef.is_instant:
            continue
        active.append(ActiveBoost(
            boost_id=bdef.id,
            kind=bdef.kind,
            value=bdef.value,
            started_at=_num(b, "started_at", 0.0),
            expires_at=_num(b, "expires_at", 0.0),
        ))

    cooldowns = []
    for c in candidate.get("cooldowns", []):
        if isinstance(c, dict) and isinstance(c.get("boost_id"), str) and c["boost_id"] in catalog.boosts:
            cooldowns.append(BoostCooldown(c["boost_id"], _num(c, "available_at", 0.0)))

    total = _num(candidate, "total_energy", 0.0)
    state = GameState(
        energy=_num(candidate, "energy", 0.0),
        total_energy=total,
        click_count=_int(candidate, "click_count", 0),
        last_save_time=_num(candidate, "last_save_time", time.time()),
        units=auto_unlock(tuple(units), total),
        purchased_upgrades=_purchased_ids(candidate.get("upgrades", []), catalog),
        active_boosts=tuple(active),
        cooldowns=tuple(cooldowns),
    )
    return with_rates(state, catalog)


def offline_catch_up(state: GameState, now: float) -> tuple[GameState, float]:
    """Credit the energy produced since the save, once. Returns (state, granted).

    A production boost that was running at save time only counts until it
    expires; the rest of the window earns the unboosted rate.
    """
    elapsed = now - state.last_save_time
    if elapsed <= 0 or state.energy_per_second <= 0:
        return state, 0.0

    granted = state.energy_per_second * elapsed
    boost = next((b for b in state.active_boosts if b.kind == BoostKind.PRODUCTION_MULTIPLIER), None)
    if boost is not None and boost.value > 0:
        base_rate = state.energy_per_second / boost.value
        boosted = min(max(0.0, boost.expires_at - state.last_save_time), elapsed)
        granted = base_rate * elapsed + (state.energy_per_second - base_rate) * boosted

    total = state.total_energy + granted
    state = replace(
        state,
        energy=state.energy + granted,
        total_energy=total,
        last_save_time=now,
        units=auto_unlock(state.units, total),
    )
    return state, granted


def load_state(text: str, catalog: Catalog, now: float | None = None) -> tuple[GameState, float]:
    """deserialize → reconcile → offline catch-up. Raises SaveError."""
    now = time.time() if now is None else now
    candidate = deserialize(text)
    try:
        state = reconcile(candidate, catalog)
    except (TypeError, ValueError, OverflowError) as exc:
        raise SaveFormatError(f"save has malformed fields: {exc}") from exc
    saved_at = state.last_save_time
    state, granted = offline_catch_up(state, now)
    # Boosts that ran out while the game was closed
    state = reduce(state, ExpireBoosts(now), catalog)
    if granted > 0:
        logger.info("offline progress: +%.1f energy (%.1fs)", granted, now - saved_at)
    return state, granted


# ── Export / import (copy-paste) ─────────────────────────────────


def encode_export(state: GameState, now: float | None = None) -> str:
    return base64.b64encode(serialize(state, now).encode("utf-8")).decode("ascii")


def decode_import(text: str) -> str:
    """Undo the base64 layer. Raises SaveDecodeError."""
    try:
        raw = base64.b64decode("".join(text.split()), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise SaveDecodeError(f"import text is not a valid export: {exc}") from exc


def import_state(text: str, catalog: Catalog, now: float | None = None) -> tuple[GameState, float]:
    return load_state(decode_import(text), catalog, now)


# ── Durable storage ──────────────────────────────────────────────


def save_dir() -> Path:
    return Path(os.environ.get("POKECLICK_HOME", Path.home() / ".pokeclick"))


def save_file() -> Path:
    return save_dir() / "save.json"


def save_run(state: GameState, now: float | None = None) -> bool:
    """Persist the game to disk. Returns False (and logs) on I/O failure."""
    try:
        save_dir().mkdir(parents=True, exist_ok=True)
        save_file().write_text(serialize(state, now))
    except OSError as exc:
        logger.warning("could not write save: %s", exc)
        return False
    return True


def load_run(catalog: Catalog, now: float | None = None) -> tuple[GameState, float] | None:
    """Load the saved game. None if no save exists; SaveError if it is corrupt."""
    path = save_file()
    if not path.exists():
        return None
    try:
        text = path.read_text()
    except OSError as exc:
        raise SaveFormatError(f"could not read {path}: {exc}") from exc
    return load_state(text, catalog, now)


def delete_run() -> None:
    try:
        save_file().unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("could not delete save: %s", exc)
