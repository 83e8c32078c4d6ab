"""Tests for field validation rules and the asset catalog loader."""

import pytest

from gamelive.exceptions import ValidationError
from gamelive.services.asset_catalog import AssetCatalog, load_asset_catalog
from gamelive.services.validation import (
    validate_character_payload,
    validate_quest_patch,
    validate_quest_payload,
    validate_step_patch,
)


# ---------------------------------------------------------------------------
# Character
# ---------------------------------------------------------------------------


def test_valid_character_passes(character_payload, catalog):
    validate_character_payload(character_payload, catalog)


@pytest.mark.parametrize("field", ["name", "age", "hair_style", "outfit_shoes"])
def test_character_required_fields(field, character_payload, catalog):
    payload = dict(character_payload, **{field: None})
    with pytest.raises(ValidationError, match=f"Field {field} is required"):
        validate_character_payload(payload, catalog)


def test_character_blank_name_rejected(character_payload, catalog):
    with pytest.raises(ValidationError, match="Field name is required"):
        validate_character_payload(dict(character_payload, name="  "), catalog)


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("age", 0, "Invalid age"),
        ("age", 121, "Invalid age"),
        ("height_cm", 49, "Invalid height"),
        ("height_cm", 251, "Invalid height"),
        ("weight_kg", 19, "Invalid weight"),
        ("weight_kg", 301, "Invalid weight"),
    ],
)
def test_character_ranges(field, value, message, character_payload, catalog):
    with pytest.raises(ValidationError, match=message):
        validate_character_payload(dict(character_payload, **{field: value}), catalog)


def test_character_range_bounds_inclusive(character_payload, catalog):
    payload = dict(character_payload, age=120, height_cm=50, weight_kg=300)
    validate_character_payload(payload, catalog)


def test_unknown_asset_rejected(character_payload, catalog):
    with pytest.raises(ValidationError, match="Invalid outfit_top asset"):
        validate_character_payload(dict(character_payload, outfit_top="top_cape"), catalog)


def test_hair_color_is_checked_against_hair_ids(character_payload, catalog):
    payload = dict(character_payload, hair_color="hair_short")
    validate_character_payload(payload, catalog)

    with pytest.raises(ValidationError, match="Invalid hair_color asset"):
        validate_character_payload(dict(character_payload, hair_color="red"), catalog)


def test_empty_catalog_rejects_every_character(character_payload):
    with pytest.raises(ValidationError, match="Invalid hair_style asset"):
        validate_character_payload(character_payload, AssetCatalog())


# ---------------------------------------------------------------------------
# Quest
# ---------------------------------------------------------------------------


def test_quest_defaults_applied():
    fields = validate_quest_payload({"title": "Stretch"})
    assert fields["xp_reward"] == 10
    assert fields["repeat_type"] == "none"
    assert fields["repeat_interval"] == 1
    assert fields["description"] is None


@pytest.mark.parametrize("title", [None, "", "   "])
def test_quest_title_required(title):
    with pytest.raises(ValidationError, match="title is required"):
        validate_quest_payload({"title": title})


@pytest.mark.parametrize("xp_reward", [0, 1001, -10])
def test_quest_xp_reward_range(xp_reward):
    with pytest.raises(ValidationError, match="xp_reward must be between 1 and 1000"):
        validate_quest_payload({"title": "Run", "xp_reward": xp_reward})


def test_quest_repeat_type_checked():
    with pytest.raises(ValidationError, match="Invalid repeat_type"):
        validate_quest_payload({"title": "Run", "repeat_type": "hourly"})


def test_quest_repeat_interval_positive():
    with pytest.raises(ValidationError, match="repeat_interval"):
        validate_quest_payload({"title": "Run", "repeat_interval": 0})


def test_empty_patch_rejected():
    with pytest.raises(ValidationError, match="No fields to update"):
        validate_quest_patch({})
    with pytest.raises(ValidationError, match="No fields to update"):
        validate_step_patch({})


def test_patch_values_validated():
    with pytest.raises(ValidationError, match="Invalid status"):
        validate_quest_patch({"status": "archived"})
    with pytest.raises(ValidationError, match="title is required"):
        validate_quest_patch({"title": ""})
    with pytest.raises(ValidationError, match="xp_reward"):
        validate_quest_patch({"xp_reward": None})
    validate_quest_patch({"description": None, "due_at": None})


# ---------------------------------------------------------------------------
# Asset catalog
# ---------------------------------------------------------------------------


def test_load_catalog_from_yaml(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "hair:\n  - id: h1\n  - id: h2\ntop:\n  - id: t1\nbottom: []\n",
        encoding="utf-8",
    )
    catalog = load_asset_catalog(path)
    assert catalog.hair == {"h1", "h2"}
    assert catalog.top == {"t1"}
    assert catalog.bottom == frozenset()
    assert catalog.shoes == frozenset()


def test_load_catalog_from_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text('{"shoes": [{"id": "s1", "name": "Boots"}]}', encoding="utf-8")
    assert load_asset_catalog(path).shoes == {"s1"}


def test_missing_catalog_degrades_to_empty(tmp_path):
    catalog = load_asset_catalog(tmp_path / "nope.yaml")
    assert catalog == AssetCatalog()


def test_bundled_catalog_loads():
    from gamelive.config import DEFAULT_CATALOG_PATH

    catalog = load_asset_catalog(DEFAULT_CATALOG_PATH)
    assert "hair_short" in catalog.hair
    assert catalog.top and catalog.bottom and catalog.shoes
