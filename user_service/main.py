"""FastAPI application wiring for the user service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .api.errors import install_error_handlers
from .api.routes import router as v1_router
from .config import get_settings
from .domain.service import AccountService
from .repository import AccountRepository, build_pool
from .security.passwords import PasswordHasher
from .security.tokens import TokenIssuer

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise shared resources (Postgres pool, signer, services) for the app lifecycle."""
    pool = build_pool(settings.database_url, settings.db_timeout_seconds)
    try:
        pool.open()
        repository = AccountRepository(pool)
        repository.ensure_schema()
        token_issuer = TokenIssuer.from_settings(settings)
        app.state.pool = pool
        app.state.token_issuer = token_issuer
        app.state.account_service = AccountService(
            repository,
            PasswordHasher(rounds=settings.bcrypt_rounds),
            token_issuer,
        )
        logger.info("%s %s ready", settings.app_name, settings.version)
        yield
    finally:
        pool.close()


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)
install_error_handlers(app)


@app.get("/healthz", tags=["health"])
def healthz() -> dict[str, str]:
    """Return a minimal readiness indicator used by orchestration systems."""
    return {"status": "ok"}


@app.get("/metrics", tags=["health"])
def metrics() -> Response:
    """Expose Prometheus metrics for scrapes."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(v1_router)


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.http_host, port=settings.http_port)
