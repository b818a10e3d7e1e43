"""Tests for the Flask JSON API."""

import base64

import pytest

from pokeclick.engine.actions import GrantResource
from pokeclick.engine.session import GameSession
from pokeclick.web import server


@pytest.fixture
def session(monkeypatch):
    game = GameSession(clock=lambda: 1_000.0, persist=False)
    monkeypatch.setattr(server, "_session", game)
    return game


@pytest.fixture
def client(session):
    server.app.config["TESTING"] = True
    return server.app.test_client()


def test_state(client):
    resp = client.get("/api/state")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["energy_raw"] == 0
    assert len(data["units"]) == 18
    assert data["units"][0]["id"] == "pikachu"
    assert data["units"][0]["cost_raw"] == 15
    assert len(data["boosts"]) == 10


def test_click(client):
    data = client.post("/api/click").get_json()
    assert data["accepted"]
    assert data["click_count"] == 1
    assert data["energy_raw"] == 1


def test_buy_unit(client, session):
    session.dispatch(GrantResource(1_000))
    data = client.post("/api/units/pikachu/buy", json={"quantity": 2}).get_json()
    assert data["accepted"]
    assert data["units"][0]["count"] == 2


def test_buy_unit_unaffordable(client):
    data = client.post("/api/units/pikachu/buy").get_json()
    assert not data["accepted"]
    assert data["units"][0]["count"] == 0


def test_buy_unit_bad_quantity(client):
    resp = client.post("/api/units/pikachu/buy", json={"quantity": "lots"})
    assert resp.status_code == 400


def test_unknown_ids_are_404(client):
    assert client.post("/api/units/missingno/buy").status_code == 404
    assert client.post("/api/units/missingno/shiny").status_code == 404
    assert client.post("/api/units/pikachu/skills/pikachu_warp").status_code == 404
    assert client.post("/api/upgrades/nothing/buy").status_code == 404
    assert client.post("/api/boosts/nothing/activate").status_code == 404


def test_buy_upgrade(client, session):
    session.dispatch(GrantResource(100))
    data = client.post("/api/upgrades/poke_ball/buy").get_json()
    assert data["accepted"]
    assert data["per_click_raw"] == 2


def test_skill_and_shiny(client, session):
    session.dispatch(GrantResource(1e9))
    client.post("/api/units/pikachu/buy", json={"quantity": 2})
    data = client.post("/api/units/pikachu/skills/pikachu_base_1").get_json()
    assert data["accepted"]
    assert data["units"][0]["unlocked_skills"] == ["pikachu_base_1"]

    data = client.post("/api/units/pikachu/shiny").get_json()
    assert data["accepted"]
    assert data["units"][0]["is_shiny"]


def test_activate_boost(client, session):
    session.dispatch(GrantResource(10_000))
    data = client.post("/api/boosts/click_boost_2x/activate").get_json()
    assert data["accepted"]
    assert data["per_click_raw"] == 2
    again = client.post("/api/boosts/click_boost_2x/activate").get_json()
    assert not again["accepted"]


def test_export_and_import(client, session):
    session.dispatch(GrantResource(500))
    client.post("/api/units/pikachu/buy", json={"quantity": 3})
    exported = client.get("/api/export").get_json()["data"]

    client.post("/api/reset")
    assert session.state.unit("pikachu").count == 0

    resp = client.post("/api/import", json={"data": exported})
    assert resp.status_code == 200
    assert resp.get_json()["units"][0]["count"] == 3


def test_import_rejects_garbage(client, session):
    session.click()
    before = session.state
    resp = client.post("/api/import", json={"data": "garbage!!"})
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert session.state is before


def test_import_requires_data(client):
    assert client.post("/api/import", json={}).status_code == 400


def test_reset(client, session):
    session.dispatch(GrantResource(500))
    data = client.post("/api/reset").get_json()
    assert data["energy_raw"] == 0


def test_import_rejects_malformed_save(client, session):
    bad = base64.b64encode(b'{"energy": NaN, "total_energy": 1, "units": []}').decode("ascii")
    before = session.state
    resp = client.post("/api/import", json={"data": bad})
    assert resp.status_code == 400
    assert session.state is before
