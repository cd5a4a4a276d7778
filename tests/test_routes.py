"""HTTP API — the race scenario driven through FastAPI."""

import pytest
from fastapi.testclient import TestClient

from backend.app import create_app


@pytest.fixture
def client(tmp_path):
    return TestClient(create_app(tmp_path / "data"))


@pytest.fixture
def installed(client):
    for key in ("village", "newday", "race"):
        assert client.post(f"/api/modules/{key}").status_code == 200
    return client


def test_list_modules(client):
    client.post("/api/modules/race")
    modules = {m["key"]: m for m in client.get("/api/modules").json()}
    assert modules["race"]["installed"] is True
    assert modules["race"]["name"] == "racegate/race"
    assert modules["newday"]["installed"] is False


def test_install_is_idempotent(client):
    first = client.post("/api/modules/race").json()
    second = client.post("/api/modules/race").json()
    assert first["properties"]["sceneIds"] == second["properties"]["sceneIds"]


def test_uninstall(installed):
    assert installed.delete("/api/modules/race").json() == {"ok": True}
    assert installed.delete("/api/modules/race").json() == {"ok": True}
    modules = {m["key"]: m for m in installed.get("/api/modules").json()}
    assert modules["race"]["installed"] is False


def test_unknown_module(client):
    assert client.post("/api/modules/harbor").status_code == 404
    assert client.delete("/api/modules/harbor").status_code == 404


def test_create_character(client):
    resp = client.post("/api/characters", json={"id": "ada", "name": "Ada"})
    assert resp.status_code == 200
    assert resp.json()["properties"] == {}
    assert client.post("/api/characters", json={"id": "ada", "name": "Ada"}).status_code == 409


def test_character_id_must_be_a_slug(client, tmp_path):
    for bad in ("../../outside", "../modules/racegate-race", "Ada", ""):
        resp = client.post("/api/characters", json={"id": bad, "name": "Ada"})
        assert resp.status_code == 422, bad
    assert not (tmp_path / "outside.json").exists()
    assert not list((tmp_path / "data" / "characters").glob("*.json"))


def test_missing_character(client):
    assert client.get("/api/characters/nobody").status_code == 404
    assert client.get("/api/characters/nobody/viewpoint").status_code == 404


def test_viewpoint_without_scenes(client):
    client.post("/api/characters", json={"id": "ada", "name": "Ada"})
    assert client.get("/api/characters/ada/viewpoint").status_code == 500


def test_unknown_action(installed):
    installed.post("/api/characters", json={"id": "ada", "name": "Ada"})
    assert installed.post("/api/characters/ada/actions/nope").status_code == 404


def test_race_flow(installed):
    installed.post("/api/characters", json={"id": "ada", "name": "Ada"})

    viewpoint = installed.get("/api/characters/ada/viewpoint").json()
    assert viewpoint["title"] == "Which race do you belong to?"
    group = next(g for g in viewpoint["action_groups"] if g["id"] == "racegate/race")
    troll = next(a for a in group["actions"] if a["title"] == "Troll")

    viewpoint = installed.post(f"/api/characters/ada/actions/{troll['id']}").json()
    assert viewpoint["title"] == "It is a new day!"

    character = installed.get("/api/characters/ada").json()
    assert character["properties"]["race"] == "Troll"
