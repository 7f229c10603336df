"""
Tests for the in-memory ProfileStore.
"""
import pytest
from pydantic import ValidationError

from fitai.dependencies.profile_store import ProfileNotFoundError, ProfileStore


def test_round_trip_defaults_completed(store, profile_fields):
    created = store.create_or_update_profile("u-1", profile_fields)
    fetched = store.get_profile("u-1")

    assert fetched == created
    assert fetched.user_id == "u-1"
    assert fetched.id
    assert fetched.name == "Budi"
    assert fetched.weight == 70
    assert fetched.body_fat == 15
    assert fetched.muscle_mass == 40
    assert fetched.age == 25
    assert fetched.goal == "bulking"
    assert fetched.completed == {}


def test_get_missing_profile_returns_none(store):
    assert store.get_profile("nobody") is None


def test_second_submission_updates_same_profile(store, profile_fields):
    first = store.create_or_update_profile("u-1", profile_fields)
    second = store.create_or_update_profile("u-1", {**profile_fields, "goal": "cutting", "weight": 68})

    assert second.id == first.id
    assert second.goal == "cutting"
    assert second.weight == 68
    assert store.get_profile("u-1").goal == "cutting"


def test_resubmission_keeps_completion(store, profile_fields):
    store.create_or_update_profile("u-1", profile_fields)
    store.set_completion("u-1", "mon", True)
    updated = store.create_or_update_profile("u-1", {**profile_fields, "age": 26})
    assert updated.completed == {"mon": True}


def test_one_profile_per_user(store, profile_fields):
    a = store.create_or_update_profile("u-1", profile_fields)
    b = store.create_or_update_profile("u-2", profile_fields)
    assert a.id != b.id
    assert store.get_profile("u-1").id == a.id
    assert store.get_profile("u-2").id == b.id


def test_snake_case_fields_accepted(store):
    profile = store.create_or_update_profile(
        "u-1",
        {"name": "Sari", "weight": 55, "body_fat": 22, "muscle_mass": 30, "age": 29, "goal": "recomposition"},
    )
    assert profile.body_fat == 22


@pytest.mark.parametrize(
    "override",
    [
        {"weight": 1, "bodyFat": 0, "age": 1},
        {"bodyFat": 100, "muscleMass": 0},
        {"muscleMass": 100},
    ],
)
def test_inclusive_bounds_accepted(store, profile_fields, override):
    profile = store.create_or_update_profile("u-1", {**profile_fields, **override})
    assert profile is not None


@pytest.mark.parametrize(
    "override",
    [
        {"weight": 0},
        {"age": 0},
        {"bodyFat": -1},
        {"bodyFat": 101},
        {"muscleMass": 101},
        {"goal": "maintenance"},
        {"name": ""},
        {"weight": "berat"},
        {"weight": True},
        {"weight": "70"},
        {"age": 25.0},
        {"bodyFat": "15"},
    ],
)
def test_invalid_fields_rejected_without_touching_store(store, profile_fields, override):
    with pytest.raises(ValidationError):
        store.create_or_update_profile("u-1", {**profile_fields, **override})
    assert store.get_profile("u-1") is None


@pytest.mark.parametrize("missing", ["name", "weight", "bodyFat", "muscleMass", "age", "goal"])
def test_missing_field_rejected(store, profile_fields, missing):
    fields = dict(profile_fields)
    fields.pop(missing)
    with pytest.raises(ValidationError):
        store.create_or_update_profile("u-1", fields)


def test_completion_toggle(store, profile_fields):
    store.create_or_update_profile("u-1", profile_fields)

    store.set_completion("u-1", "mon", True)
    assert store.get_profile("u-1").completed["mon"] is True

    store.set_completion("u-1", "mon", False)
    completed = store.get_profile("u-1").completed
    assert completed["mon"] is False
    assert "tue" not in completed


def test_completion_requires_profile(store):
    with pytest.raises(ProfileNotFoundError):
        store.set_completion("ghost", "mon", True)


def test_replace_completion_merges(store, profile_fields):
    store.create_or_update_profile("u-1", profile_fields)
    store.set_completion("u-1", "mon", True)
    profile = store.replace_completion("u-1", {"tue": True, "wed": False})
    assert profile.completed == {"mon": True, "tue": True, "wed": False}


def test_update_profile_partial(store, profile_fields):
    created = store.create_or_update_profile("u-1", profile_fields)
    updated = store.update_profile("u-1", {"goal": "recomposition", "bodyFat": 12})
    assert updated.id == created.id
    assert updated.goal == "recomposition"
    assert updated.body_fat == 12
    assert updated.weight == 70


def test_update_profile_validates_and_requires_profile(store, profile_fields):
    with pytest.raises(ProfileNotFoundError):
        store.update_profile("u-1", {"age": 30})
    store.create_or_update_profile("u-1", profile_fields)
    with pytest.raises(ValidationError):
        store.update_profile("u-1", {"bodyFat": 150})
    assert store.get_profile("u-1").body_fat == 15


def test_clear(profile_fields):
    store = ProfileStore()
    store.create_or_update_profile("u-1", profile_fields)
    store.clear()
    assert store.get_profile("u-1") is None


@pytest.mark.parametrize("override", [{"weight": "68"}, {"age": 26.0}, {"muscleMass": False}])
def test_update_profile_rejects_coerced_types(store, profile_fields, override):
    store.create_or_update_profile("u-1", profile_fields)
    with pytest.raises(ValidationError):
        store.update_profile("u-1", override)
    assert store.get_profile("u-1").weight == 70
