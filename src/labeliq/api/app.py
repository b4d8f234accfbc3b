"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import openai
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from labeliq.api.logs import router as logs_router
from labeliq.api.nutrition import router as nutrition_router
from labeliq.api.profile import router as profile_router
from labeliq.app_logging import configure_logging
from labeliq.containers import AppContainer
from labeliq.services.profiles import IncompleteProfileError
from labeliq.services.vision import VisionAnalysisError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="LabelIQ", lifespan=lifespan)
    app.state.container = container

    app.include_router(nutrition_router)
    app.include_router(profile_router)
    app.include_router(logs_router)

    @app.exception_handler(IncompleteProfileError)
    async def incomplete_profile(
        request: Request, exc: IncompleteProfileError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(httpx.HTTPError)
    async def upstream_failure(request: Request, exc: httpx.HTTPError) -> JSONResponse:
        logger.exception("Upstream request failed for %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Upstream service unavailable"},
        )

    @app.exception_handler(openai.APIError)
    async def model_failure(request: Request, exc: openai.APIError) -> JSONResponse:
        logger.exception("Model request failed for %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Upstream service unavailable"},
        )

    @app.exception_handler(VisionAnalysisError)
    async def unusable_estimate(
        request: Request, exc: VisionAnalysisError
    ) -> JSONResponse:
        logger.warning("Unusable model estimate for %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Could not analyze image"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
