"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from src.api.properties import router as properties_router
from src.config import get_settings
from src.config.logging import configure_logging
from src.db.session import dispose_engine, ping_database
from src.services.errors import PropertyQueryError

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Configure logging and release the shared engine on shutdown."""

    configure_logging()
    yield
    await dispose_engine()


def _problem(request: Request, status: int, title: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "title": title,
            "status": status,
            "detail": detail,
            "instance": request.url.path,
        },
        media_type="application/problem+json",
    )


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(title=settings.app_name, lifespan=lifespan)

    if settings.cors_allow_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    @application.exception_handler(PropertyQueryError)
    async def handle_query_error(request: Request, exc: PropertyQueryError) -> JSONResponse:
        logger.warning("Bad request on %s: %s", request.url.path, exc)
        return _problem(request, 400, "Bad Request", str(exc))

    async def handle_store_unavailable(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Store unavailable on %s", request.url.path, exc_info=exc)
        return _problem(request, 503, "Service Unavailable", "Property store unavailable")

    for error_type in STORE_UNAVAILABLE_ERRORS:
        application.add_exception_handler(error_type, handle_store_unavailable)

    application.include_router(properties_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Basic health endpoint."""

        return {"status": "ok"}

    @application.get("/readyz")
    async def readyz(request: Request) -> JSONResponse:
        """Readiness endpoint that checks the store connection."""

        try:
            await ping_database()
        except STORE_UNAVAILABLE_ERRORS as exc:
            logger.warning("Readiness check failed: %s", exc)
            return _problem(request, 503, "Service Unavailable", "Property store unavailable")
        return JSONResponse({"status": "ready"})

    return application


app = create_app()
