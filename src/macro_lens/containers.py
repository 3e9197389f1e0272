"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_lens.adapters.openai_vision_client import OpenAIVisionClient
from macro_lens.adapters.pillow_image_processor import PillowImageProcessor
from macro_lens.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_lens.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from macro_lens.adapters.supabase_stats_repository import SupabaseStatsRepository
from macro_lens.config import Settings
from macro_lens.services.analysis import AnalysisService
from macro_lens.services.meals import MealService
from macro_lens.services.profiles import ProfileService
from macro_lens.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    meal_service: MealService
    stats_service: StatsService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        client=vision_client,
        image_processor=PillowImageProcessor(
            quality=resolved_settings.image_jpeg_quality
        ),
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        top_p=resolved_settings.openai_top_p,
    )

    async def close_resources() -> None:
        await vision_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        meal_service=MealService(SupabaseMealRepository(supabase_client)),
        stats_service=StatsService(SupabaseStatsRepository(supabase_client)),
        profile_service=ProfileService(SupabaseProfileRepository(supabase_client)),
        close_resources=close_resources,
    )
