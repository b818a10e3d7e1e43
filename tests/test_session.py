"""Tests for the game session (state owner, game loop, persistence)."""

import pytest

from pokeclick.engine.actions import GrantResource
from pokeclick.engine.save import SaveError, save_file
from pokeclick.engine.session import GameSession


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


def _session(clock=None, persist=False):
    return GameSession(clock=clock or FakeClock(), persist=persist)


def test_new_session_starts_fresh():
    session = _session()
    assert session.state.energy == 0
    assert session.state.energy_per_click == 1
    assert session.state.unit("pikachu").unlocked


def test_click_and_buy():
    session = _session()
    for _ in range(15):
        session.click()
    assert session.state.energy == 15
    session.buy_unit("pikachu")
    assert session.state.unit("pikachu").count == 1
    assert session.state.energy_per_second == pytest.approx(0.1)


def test_frame_drives_production():
    clock = FakeClock()
    session = _session(clock)
    session.dispatch(GrantResource(1_000))
    session.buy_unit("charmander", 2)
    before = session.state.energy

    clock.now += 1.0
    session.frame()
    assert session.state.energy == pytest.approx(before + 2.0)


def test_frame_sweeps_expired_boosts():
    clock = FakeClock()
    session = _session(clock)
    session.dispatch(GrantResource(20_000))
    session.buy_unit("charmander", 1)
    session.activate_boost("production_boost_2x")
    assert session.state.energy_per_second == 2
    assert session.boost_remaining("production_boost_2x") == 30

    clock.now += 31
    session.frame()
    assert session.state.active_boosts == ()
    assert session.state.energy_per_second == 1
    assert session.cooldown_remaining("production_boost_2x") == pytest.approx(300 - 31)


def test_auto_clicker_clicks_for_you():
    clock = FakeClock()
    session = _session(clock)
    session.dispatch(GrantResource(40_000))
    session.activate_boost("auto_clicker")

    clock.now += 1.0
    session.frame()
    assert session.state.click_count == 5


def test_queries():
    session = _session()
    assert session.unit_cost("pikachu") == 15
    assert session.bulk_unit_cost("pikachu", 2) == 15 + 17
    assert session.max_affordable("pikachu") == 0
    assert session.remaining_ev("pikachu") == 0
    assert not session.can_unlock("pikachu", "pikachu_base_1")
    assert not session.can_unlock("pikachu", "no_such_skill")
    assert session.boost_cost("click_boost_2x") == 5_000
    with pytest.raises(KeyError):
        session.unit_cost("missingno")


def test_available_upgrades_follow_lifetime_energy():
    session = _session()
    assert "poke_ball" not in {u.id for u in session.available_upgrades()}
    session.dispatch(GrantResource(100))
    assert "poke_ball" in {u.id for u in session.available_upgrades()}
    session.buy_upgrade("poke_ball")
    assert "poke_ball" not in {u.id for u in session.available_upgrades()}


def test_skills_and_shiny_through_session():
    session = _session()
    session.dispatch(GrantResource(1e9))
    session.buy_unit("pikachu", 2)
    assert session.can_unlock("pikachu", "pikachu_base_1")
    session.unlock_skill("pikachu", "pikachu_base_1")
    assert session.remaining_ev("pikachu") == 0

    session.make_shiny("pikachu")
    assert session.state.unit("pikachu").is_shiny


def test_export_import_between_sessions():
    source = _session()
    source.dispatch(GrantResource(500))
    source.buy_unit("pikachu", 3)
    text = source.export_text()

    target = _session()
    granted = target.import_text(text)
    assert granted == 0
    assert target.state.unit("pikachu").count == 3
    assert target.state.energy == source.state.energy


def test_bad_import_keeps_state():
    session = _session()
    session.click()
    before = session.state
    with pytest.raises(SaveError):
        session.import_text("definitely not an export")
    assert session.state is before


def test_close_saves_and_next_session_catches_up(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    clock = FakeClock()
    first = _session(clock, persist=True)
    first.dispatch(GrantResource(1_000))
    first.buy_unit("charmander", 2)
    first.close()
    assert first.closed
    assert save_file().exists()

    clock.now += 100
    second = _session(clock, persist=True)
    granted = second.load()
    assert granted == pytest.approx(200)
    assert second.state.unit("charmander").count == 2


def test_load_without_save(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    session = _session(persist=True)
    assert session.load() is None


def test_corrupt_save_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    save_file().write_text("garbage")
    session = _session(persist=True)
    before = session.state
    assert session.load() is None
    assert session.state is before


def test_autosave(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    clock = FakeClock()
    session = _session(clock, persist=True)
    clock.now += 1
    session.frame()
    assert not save_file().exists()
    clock.now += 5
    session.frame()
    assert save_file().exists()


def test_reset_deletes_save(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    session = _session(persist=True)
    session.click()
    session.save()
    assert save_file().exists()
    session.reset()
    assert not save_file().exists()
    assert session.state.click_count == 0


def test_frame_after_close_does_nothing():
    clock = FakeClock()
    session = _session(clock)
    session.dispatch(GrantResource(1_000))
    session.buy_unit("charmander", 1)
    session.close()
    before = session.state
    clock.now += 10
    session.frame()
    assert session.state is before


def test_auto_clicker_stops_at_expiry_between_sweeps():
    clock = FakeClock()
    session = _session(clock)
    session.dispatch(GrantResource(40_000))
    session.activate_boost("auto_clicker")

    clock.now += 59.5
    session.frame()
    clicks = session.state.click_count
    assert clicks > 0

    # Expired at +60 but the next sweep is not due yet
    clock.now += 0.9
    session.frame()
    assert session.state.click_count == clicks


def test_save_with_bad_numbers_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    save_file().write_text(
        '{"energy": 1, "total_energy": 1, "units": [{"id": "pikachu", "count": Infinity}]}'
    )
    session = _session(persist=True)
    before = session.state
    assert session.load() is None
    assert session.state is before


def test_save_with_unhashable_ids_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("POKECLICK_HOME", str(tmp_path))
    save_file().write_text(
        '{"energy": 1, "total_energy": 1, "units": [], "upgrades": [["poke_ball"]]}'
    )
    session = _session(persist=True)
    before = session.state
    assert session.load() is None
    assert session.state is before
