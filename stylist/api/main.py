"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stylist.api.schemas import (
    ErrorResponse,
    ImageGenerationRequest,
    ImageGenerationResult,
    OutfitRequest,
)
from stylist.config.settings import Settings, get_settings
from stylist.imggen.image_gen import ImageGenerationError, ImageGenerationService
from stylist.monitoring.logging import configure_logging
from stylist.providers import StylistProvider, build_provider
from stylist.services.outfit import OutfitGenerationError, OutfitRecommendationService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(settings: Settings | None = None, provider: StylistProvider | None = None) -> FastAPI:
    """Initialise the FastAPI application.

    Raises ``ConfigurationError`` before any route exists when the selected
    provider has no API key.
    """

    settings = settings or get_settings()
    settings.validate()
    configure_logging(settings)

    provider = provider or build_provider(settings)
    outfit_service = OutfitRecommendationService(provider)
    image_service = ImageGenerationService(provider)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Gateway ready with %s provider.", settings.provider)
        try:
            yield
        finally:
            await provider.close()

    app = FastAPI(
        title="AI Stylist Gateway",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.max_body_bytes:
            logger.warning("Rejected %s body of %s bytes.", request.url.path, content_length)
            return _error(413, "Request body too large")
        return await call_next(request)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/api/generate-outfit", tags=["stylist"])
    async def generate_outfit(payload: OutfitRequest) -> JSONResponse:
        """Return the model's outfit recommendation for the submitted preferences."""

        logger.info(
            "Outfit request: occasion=%r style=%r image=%s",
            payload.occasion,
            payload.style,
            bool(payload.image),
        )
        try:
            result = await outfit_service.recommend(payload)
        except OutfitGenerationError:
            return _error(500, "Failed to generate outfit")
        return JSONResponse(content=result)

    @app.post(
        "/api/generate-image",
        tags=["stylist"],
        response_model=ImageGenerationResult,
        responses={500: {"model": ErrorResponse}},
    )
    async def generate_image(payload: ImageGenerationRequest):
        """Render a preview image for an outfit description."""

        try:
            image_url = await image_service.generate(payload.description)
        except ImageGenerationError as exc:
            return _error(500, str(exc))
        return ImageGenerationResult(image_url=image_url)

    return app


def main() -> None:
    """Run the gateway under uvicorn."""

    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
