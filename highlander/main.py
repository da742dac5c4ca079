import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from highlander.api import (
    bracket_router,
    decks_router,
    health_router,
    legality_router,
)
from highlander.config import settings
from highlander.models.failure import KnownError, UnknownFailure
from highlander.services.card_store import card_store_registry
from highlander.services.rule_lists import get_rule_lists

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Missing reference data keeps the app up but not ready (see /ready)
    try:
        get_rule_lists()
    except KnownError as e:
        logger.error("Rule lists unavailable: %s", e.detail)

    if not card_store_registry.is_loaded:
        try:
            card_store_registry.reload()
        except KnownError as e:
            logger.error("Card store unavailable: %s", e.detail)

    yield


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=pkg_version("highlander"),
    lifespan=lifespan,
)

app.include_router(bracket_router)
app.include_router(decks_router)
app.include_router(health_router)
app.include_router(legality_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render classified failures as {error, kind, detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Hide unclassified failures behind a fixed body."""
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content=UnknownFailure.from_exception(exc).model_dump(mode="json"),
    )
