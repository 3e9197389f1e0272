"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from macro_lens.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_lens.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from macro_lens.adapters.supabase_stats_repository import SupabaseStatsRepository
from macro_lens.domain.profile import ProfileTargets, UserProfile
from tests.conftest import sample_analysis


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "upsert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_select: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str) -> "FakeTable":
        self._action = "select"
        self.last_select = columns
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_filters.append(("on_conflict", on_conflict))
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_meal_repository_creates_meal_and_foods() -> None:
    client = FakeSupabaseClient()
    meal_id = uuid4()
    client.table("meals").queue("insert", [{"id": str(meal_id)}])
    repository = SupabaseMealRepository(client)
    analysis = sample_analysis()

    created = repository.create_meal(
        user_id="user-1",
        user_email=None,
        image_url=None,
        analysis=analysis,
        created_at=datetime(2024, 3, 15, tzinfo=UTC),
    )
    repository.create_foods(created, list(analysis.foods))

    assert created == meal_id
    meal_payload = client.table("meals").last_payload
    assert meal_payload["total_calories"] == 453
    assert meal_payload["meal_type"] == "lunch"
    foods_payload = client.table("meal_foods").last_payload
    assert len(foods_payload) == 2
    assert foods_payload[0]["meal_id"] == str(meal_id)
    assert foods_payload[1]["confidence"] == "Medium"


def test_meal_repository_raises_on_empty_insert() -> None:
    repository = SupabaseMealRepository(FakeSupabaseClient())

    try:
        repository.create_meal(
            user_id="user-1",
            user_email=None,
            image_url=None,
            analysis=sample_analysis(),
            created_at=datetime.now(tz=UTC),
        )
    except RuntimeError as exc:
        assert "Failed to create meal" in str(exc)
    else:
        raise AssertionError("expected RuntimeError")


def test_meal_repository_parses_embedded_foods() -> None:
    client = FakeSupabaseClient()
    meal_id = str(uuid4())
    client.table("meals").queue(
        "select",
        [
            {
                "id": meal_id,
                "user_id": "user-1",
                "user_email": "eater@example.com",
                "image_url": None,
                "meal_type": "dinner",
                "total_calories": 700,
                "total_protein": 40,
                "total_carbs": 60,
                "total_fats": 20,
                "health_tip": "Nice balance.",
                "created_at": "2024-03-15T18:00:00+00:00",
                "meal_foods": [
                    {
                        "id": str(uuid4()),
                        "meal_id": meal_id,
                        "name": "Pasta",
                        "portion_size": "1 plate",
                        "calories": 700,
                        "protein": 40,
                        "carbs": 60,
                        "fats": 20,
                        "confidence": "High",
                    }
                ],
            }
        ],
    )

    meals = SupabaseMealRepository(client).list_recent_meals("user-1", limit=5)

    assert meals[0].meal_type == "dinner"
    assert meals[0].foods[0].name == "Pasta"
    assert "meal_foods(" in (client.table("meals").last_select or "")
    assert ("user_id", "user-1") in client.table("meals").last_filters


def test_stats_repository_parses_rows() -> None:
    client = FakeSupabaseClient()
    client.table("meals").queue(
        "select",
        [
            {
                "created_at": "2024-03-15T08:00:00+00:00",
                "meal_type": "breakfast",
                "total_calories": 350,
                "total_protein": 12,
                "total_carbs": 50,
                "total_fats": None,
            }
        ],
    )
    since = datetime(2024, 3, 8, tzinfo=UTC)

    rows = SupabaseStatsRepository(client).list_meal_totals("user-1", since)

    assert rows[0].total_calories == 350
    assert rows[0].total_fats == 0
    assert rows[0].meal_type == "breakfast"
    assert ("created_at", since.isoformat()) in client.table("meals").last_filters


def test_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profiles")
    stored = {
        "user_id": "user-1",
        "user_email": "eater@example.com",
        "name": "Sam",
        "weight_kg": 70,
        "height_cm": 175,
        "age": 25,
        "gender": "male",
        "activity_level": "moderate",
        "goal": "maintain",
        "target_calories": 2594,
        "target_protein": 140,
        "target_carbs": 367,
        "target_fats": 63,
        "updated_at": "2024-03-15T08:00:00+00:00",
    }
    table.queue("upsert", [stored])
    table.queue("select", [stored])
    repository = SupabaseProfileRepository(client)
    targets = ProfileTargets(
        target_calories=2594, target_protein=140, target_carbs=367, target_fats=63
    )

    saved = repository.upsert_profile(
        UserProfile(
            user_id="user-1",
            user_email="eater@example.com",
            weight_kg=70,
            targets=targets,
        )
    )
    fetched = repository.get_profile("user-1")

    assert table.last_payload["target_calories"] == 2594
    assert ("on_conflict", "user_id") in table.last_filters
    assert saved.targets == targets
    assert fetched is not None
    assert fetched.weight_kg == 70.0
    assert fetched.updated_at == datetime(2024, 3, 15, 8, tzinfo=UTC)


def test_profile_repository_missing_profile() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_profile("nobody") is None
