"""Shared test fixtures."""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from macro_lens.config import Settings
from macro_lens.containers import AppContainer
from macro_lens.domain.analysis import FoodItem, MealAnalysis
from macro_lens.domain.errors import ImageRejected
from macro_lens.domain.meals import FoodRecord, MealRecord
from macro_lens.domain.profile import UserProfile
from macro_lens.domain.stats import MealTotalsRow
from macro_lens.services.analysis import AnalysisService, ImageProcessor, VisionClient
from macro_lens.services.meals import MealRepository, MealService
from macro_lens.services.profiles import ProfileRepository, ProfileService
from macro_lens.services.stats import StatsRepository, StatsService

SAMPLE_REPLY: dict[str, object] = {
    "foods": [
        {
            "name": "Grilled chicken breast",
            "portion_size": "150g",
            "calories": 248,
            "protein": 46,
            "carbs": 0,
            "fats": 5,
            "confidence": "High",
        },
        {
            "name": "Steamed rice",
            "portion_size": "1 cup",
            "calories": 205,
            "protein": 4,
            "carbs": 45,
            "fats": 0,
            "confidence": "Medium",
        },
    ],
    "total_calories": 453,
    "total_protein": 50,
    "total_carbs": 45,
    "total_fats": 5,
    "meal_type": "lunch",
    "health_tip": "Add some vegetables for fiber.",
}


def sample_analysis() -> MealAnalysis:
    return MealAnalysis.model_validate(SAMPLE_REPLY)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed reply text."""

    reply: str = field(default_factory=lambda: json.dumps(SAMPLE_REPLY))
    calls: list[dict[str, object]] = field(default_factory=list)

    async def describe(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        image_data_url: str,
        prompt: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "temperature": temperature,
                "top_p": top_p,
                "image_data_url": image_data_url,
                "prompt": prompt,
            }
        )
        return self.reply


@dataclass
class FakeImageProcessor(ImageProcessor):
    """Fake image processor that passes bytes through or rejects them."""

    reject: bool = False

    def to_jpeg(self, image_bytes: bytes) -> bytes:
        if self.reject:
            raise ImageRejected("cannot identify image file")
        return image_bytes


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    fail_on_create: bool = False

    def create_meal(  # noqa: PLR0913
        self,
        user_id: str,
        user_email: str | None,
        image_url: str | None,
        analysis: MealAnalysis,
        created_at: datetime,
    ) -> UUID:
        if self.fail_on_create:
            raise RuntimeError("Failed to create meal")
        meal_id = uuid4()
        self.meals[meal_id] = MealRecord(
            id=meal_id,
            user_id=user_id,
            user_email=user_email,
            image_url=image_url,
            meal_type=analysis.meal_type,
            total_calories=analysis.total_calories,
            total_protein=analysis.total_protein,
            total_carbs=analysis.total_carbs,
            total_fats=analysis.total_fats,
            health_tip=analysis.health_tip,
            created_at=created_at,
            foods=[],
        )
        return meal_id

    def create_foods(self, meal_id: UUID, foods: list[FoodItem]) -> None:
        meal = self.meals[meal_id]
        records = [
            FoodRecord(id=uuid4(), meal_id=meal_id, **food.model_dump())
            for food in foods
        ]
        self.meals[meal_id] = replace(meal, foods=meal.foods + records)

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        owned = [meal for meal in self.meals.values() if meal.user_id == user_id]
        return list(reversed(owned))[:limit]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory stats repository for tests."""

    rows: dict[str, list[MealTotalsRow]] = field(default_factory=dict)

    def list_meal_totals(self, user_id: str, since: datetime) -> list[MealTotalsRow]:
        return sorted(
            (row for row in self.rows.get(user_id, []) if row.created_at >= since),
            key=lambda row: row.created_at,
        )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.user_id] = profile
        return profile


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def image_processor() -> FakeImageProcessor:
    return FakeImageProcessor()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    vision_client: FakeVisionClient,
    image_processor: FakeImageProcessor,
    meal_repository: InMemoryMealRepository,
    stats_repository: InMemoryStatsRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    analysis_service = AnalysisService(
        client=vision_client,
        image_processor=image_processor,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        top_p=settings.openai_top_p,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        meal_service=MealService(meal_repository),
        stats_service=StatsService(stats_repository),
        profile_service=ProfileService(profile_repository),
        close_resources=close_resources,
    )
