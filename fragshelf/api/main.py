"""FastAPI entrypoint and HTTP routes."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from fragshelf.api import accounts, fragrances, recommendations
from fragshelf.config.settings import get_settings
from fragshelf.db.session import init_db
from fragshelf.monitoring.logging import configure_logging
from fragshelf.recommender import InvalidContextError


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Configure logging and bring the schema up to date before serving."""

    configure_logging()
    await init_db()
    yield


async def invalid_context_handler(_: Request, exc: InvalidContextError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    app = FastAPI(
        title="FragShelf API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(InvalidContextError, invalid_context_handler)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    app.include_router(accounts.router)
    app.include_router(fragrances.router)
    app.include_router(recommendations.router)
    app.mount("/metrics", make_asgi_app())

    return app


app = create_app()
