"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from macro_lens.api.dependencies import Identity, require_user
from macro_lens.api.schemas import SaveMealRequest
from macro_lens.app_logging import configure_logging
from macro_lens.containers import AppContainer
from macro_lens.domain.errors import (
    AnalysisError,
    ImageRejected,
    MalformedResponse,
    NoFoodDetected,
    UpstreamFailure,
)
from macro_lens.domain.profile import BodyProfile, ProfileUpdate
from macro_lens.services.calculator import calculate_targets

ERROR_STATUS: dict[type[AnalysisError], int] = {
    ImageRejected: status.HTTP_400_BAD_REQUEST,
    MalformedResponse: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NoFoodDetected: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UpstreamFailure: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(
        request: Request, exc: AnalysisError
    ) -> JSONResponse:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        body: dict[str, object] = {"error": exc.user_message}
        if isinstance(exc, MalformedResponse):
            body["debug"] = exc.excerpt
        return JSONResponse(
            status_code=ERROR_STATUS.get(
                type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            content=body,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/meals/analyze")
    async def analyze_meal(
        request: Request,
        image: UploadFile = File(...),
        identity: Identity = Depends(require_user),
    ) -> dict[str, object]:
        """Analyze an uploaded meal photo without saving it."""
        state_container: AppContainer = request.app.state.container
        max_bytes = state_container.settings.max_upload_bytes
        image_bytes = await image.read(max_bytes + 1)
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No image file provided.",
            )
        if len(image_bytes) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image is too large.",
            )
        logger.info(
            "Analyzing %d byte image for user %s", len(image_bytes), identity.user_id
        )
        analysis = await state_container.analysis_service.analyze(image_bytes)
        return {"success": True, "data": analysis.model_dump()}

    @app.post("/meals")
    async def save_meal(
        payload: SaveMealRequest,
        request: Request,
        identity: Identity = Depends(require_user),
    ) -> dict[str, object]:
        """Persist an analyzed meal for the signed-in user."""
        state_container: AppContainer = request.app.state.container
        meal_id = state_container.meal_service.save_meal(
            user_id=identity.user_id,
            analysis=payload.to_analysis(),
            user_email=identity.email,
            image_url=payload.image_url,
        )
        return {"success": True, "meal_id": str(meal_id)}

    @app.get("/meals")
    async def list_meals(
        request: Request,
        limit: int | None = None,
        identity: Identity = Depends(require_user),
    ) -> dict[str, object]:
        """Return the signed-in user's recent meals."""
        state_container: AppContainer = request.app.state.container
        resolved_limit = limit or state_container.settings.history_limit
        meals = state_container.meal_service.list_meals(
            identity.user_id, limit=resolved_limit
        )
        return {"success": True, "meals": meals}

    @app.get("/stats/weekly")
    async def weekly_stats(
        request: Request, identity: Identity = Depends(require_user)
    ) -> dict[str, object]:
        """Return totals for the last seven days."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.stats_service.get_weekly_stats(identity.user_id)
        return {"success": True, "stats": stats}

    @app.get("/analytics")
    async def analytics(
        request: Request,
        tz: str = "UTC",
        identity: Identity = Depends(require_user),
    ) -> dict[str, object]:
        """Return thirty-day chart data and distributions."""
        state_container: AppContainer = request.app.state.container
        try:
            report = state_container.stats_service.get_analytics(
                identity.user_id, timezone_name=tz
            )
        except (KeyError, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown timezone."
            ) from exc
        return {"success": True, "data": report}

    @app.get("/profile")
    async def get_profile(
        request: Request, identity: Identity = Depends(require_user)
    ) -> dict[str, object]:
        """Return the signed-in user's profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_or_create(
            identity.user_id, identity.email
        )
        return {"success": True, "profile": profile}

    @app.put("/profile")
    async def update_profile(
        update: ProfileUpdate,
        request: Request,
        identity: Identity = Depends(require_user),
    ) -> dict[str, object]:
        """Update profile fields and refresh stored targets."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.update(
            identity.user_id, identity.email, update
        )
        return {"success": True, "profile": profile}

    @app.post("/calculator")
    async def calculator(profile: BodyProfile) -> dict[str, object]:
        """Return BMR, TDEE and macro ranges for a body profile."""
        return {"success": True, "results": calculate_targets(profile)}

    return app
