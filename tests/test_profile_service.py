"""Tests for profile service."""

from macro_lens.domain.profile import ProfileTargets, ProfileUpdate
from macro_lens.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_get_or_create_creates_empty_profile_once() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)

    created = service.get_or_create("user-1", "eater@example.com", name="Sam")
    fetched = service.get_or_create("user-1", None)

    assert created.name == "Sam"
    assert fetched == created
    assert created.targets is None


def test_partial_update_keeps_targets_unset() -> None:
    service = ProfileService(InMemoryProfileRepository())

    profile = service.update(
        "user-1", "eater@example.com", ProfileUpdate(weight_kg=70, age=25)
    )

    assert profile.weight_kg == 70
    assert profile.age == 25
    assert profile.targets is None
    assert profile.updated_at is not None


def test_complete_update_stores_targets() -> None:
    service = ProfileService(InMemoryProfileRepository())
    service.update(
        "user-1", None, ProfileUpdate(weight_kg=70, height_cm=175, age=25)
    )

    profile = service.update(
        "user-1",
        None,
        ProfileUpdate.model_validate(
            {"gender": "male", "activity_level": "moderate", "goal": "maintain"}
        ),
    )

    assert profile.gender == "male"
    assert profile.activity_level == "moderate"
    assert profile.targets == ProfileTargets(
        target_calories=2594,
        target_protein=140,
        target_carbs=367,
        target_fats=63,
    )


def test_update_recomputes_targets_when_goal_changes() -> None:
    service = ProfileService(InMemoryProfileRepository())
    base = ProfileUpdate.model_validate(
        {
            "weight_kg": 70,
            "height_cm": 175,
            "age": 25,
            "gender": "male",
            "activity_level": "moderate",
            "goal": "maintain",
        }
    )
    service.update("user-1", None, base)

    profile = service.update(
        "user-1", None, ProfileUpdate.model_validate({"goal": "lose"})
    )

    assert profile.goal == "lose"
    assert profile.targets is not None
    assert profile.targets.target_calories == 2094
