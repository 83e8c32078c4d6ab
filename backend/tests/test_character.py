"""Tests for the character module - model defaults and HTTP routes."""

from gamelive.models.character import STARTING_LEVEL, Character
from gamelive.models.user import User


# ---------------------------------------------------------------------------
# Model unit tests (via direct DB session)
# ---------------------------------------------------------------------------


async def test_new_character_starts_at_level_one(db, character_payload):
    user = User(telegram_id=1)
    db.add(user)
    await db.flush()
    character = Character(user_id=user.id, **character_payload)
    db.add(character)
    await db.flush()

    assert character.id is not None
    assert character.level == STARTING_LEVEL
    assert character.xp == 0


# ---------------------------------------------------------------------------
# Route integration tests (via HTTP client)
# ---------------------------------------------------------------------------


async def test_get_character_before_creation(auth_client):
    resp = await auth_client.get("/api/character")
    assert resp.status_code == 200
    assert resp.json() == {"character": None}


async def test_save_character(auth_client, character_payload):
    resp = await auth_client.post("/api/character", json=character_payload)
    assert resp.status_code == 200

    data = resp.json()["character"]
    assert data["name"] == "Aria"
    assert data["hair_style"] == "hair_short"
    assert data["level"] == 1
    assert data["xp"] == 0
    assert data["xp_to_next_level"] == 100

    resp = await auth_client.get("/api/character")
    assert resp.json()["character"]["id"] == data["id"]


async def test_save_character_again_updates_same_row(auth_client, character_payload):
    first = (await auth_client.post("/api/character", json=character_payload)).json()

    changed = dict(character_payload, name="Aria II", outfit_top="top_tshirt", age=28)
    resp = await auth_client.post("/api/character", json=changed)
    assert resp.status_code == 200

    second = resp.json()["character"]
    assert second["id"] == first["character"]["id"]
    assert second["name"] == "Aria II"
    assert second["age"] == 28


async def test_save_character_keeps_progress(hero_client, character_payload):
    quest = (await hero_client.post("/api/quests", json={"title": "Run", "xp_reward": 120})).json()
    await hero_client.post(f"/api/quests/{quest['quest']['id']}/complete")

    resp = await hero_client.post("/api/character", json=dict(character_payload, name="Renamed"))
    data = resp.json()["character"]
    assert data["name"] == "Renamed"
    assert (data["level"], data["xp"]) == (2, 20)


async def test_save_character_validation(auth_client, character_payload):
    resp = await auth_client.post("/api/character", json=dict(character_payload, age=130))
    assert resp.status_code == 400
    assert resp.json() == {"code": "validation_error", "message": "Invalid age", "details": None}

    resp = await auth_client.post("/api/character", json=dict(character_payload, name=""))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Field name is required"

    resp = await auth_client.post("/api/character", json=dict(character_payload, outfit_shoes="heels"))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid outfit_shoes asset"

    assert (await auth_client.get("/api/character")).json()["character"] is None


async def test_save_character_wrong_type(auth_client, character_payload):
    resp = await auth_client.post("/api/character", json=dict(character_payload, age="old"))
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


async def test_character_requires_session(client):
    resp = await client.get("/api/character")
    assert resp.status_code == 401
    assert resp.json()["code"] == "unauthorized"
    assert resp.json()["message"] == "Not authenticated"
