"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with metadata and lifespan
  - Own the DB pool lifecycle: opened on startup, closed on shutdown
  - Compose the Container and store it in app.state
  - Configure middleware (CORS, security headers, request context,
    body limit, rate limit)
  - Mount auth + business routers under /api and expose health checks

Collaborators:
  - notaria.container.build_container: composition root
  - notaria.infrastructure.db.pool: open_pool / close_pool
  - interfaces.api.http.router: processes + users endpoints
  - auth_routes.router: register / login / me

Notes:
  - APP_ENV=test skips the pool and uses in-memory repositories
  - A pre-built Container (tests) is used as-is and never closed here
  - Middleware order (outermost first): RateLimit → CORS → RequestContext
    → SecurityHeaders → BodyLimit → routes
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..container import Container, build_container
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..crosscutting.rate_limit import RateLimitMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..infrastructure.db import close_pool, open_pool
from ..interfaces.api.http.router import router as api_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool and builds the container."""
    settings = get_settings()
    pool = None

    if getattr(app.state, "container", None) is None:
        if not settings.is_test_env():
            pool = open_pool(
                settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                statement_timeout_ms=settings.db_statement_timeout_ms,
            )
        app.state.container = build_container(settings, pool)

    logger.info(
        "Notaría API starting up",
        extra={
            "app_env": settings.app_env,
            "store": "postgres" if pool is not None else "provided/in-memory",
            "rate_limit_rps": settings.rate_limit_rps,
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )

    try:
        yield
    finally:
        close_pool(pool)
        logger.info("Notaría API shutting down")


def _custom_openapi(app: FastAPI):
    def openapi():
        if app.openapi_schema:
            return app.openapi_schema
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
        schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Access token via Authorization: Bearer <token>.",
            }
        }
        public_paths = {
            f"{API_PREFIX}/auth/register",
            f"{API_PREFIX}/auth/login",
            f"{API_PREFIX}/health",
            "/healthz",
            "/readyz",
        }
        for path, methods in schema.get("paths", {}).items():
            for operation in methods.values():
                if not isinstance(operation, dict):
                    continue
                operation["security"] = (
                    [] if path in public_paths else [{"BearerAuth": []}]
                )
        app.openapi_schema = schema
        return app.openapi_schema

    return openapi


def create_app(container: Container | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        container: pre-composed dependencies (tests). When omitted the
            lifespan builds one from settings.
    """
    settings = get_settings()

    app = FastAPI(
        title="Notaría 2.0 API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registro, login y sesión (JWT)"},
            {"name": "processes", "description": "Expedientes del usuario"},
            {"name": "users", "description": "Cuentas de usuario"},
        ],
    )
    app.state.container = container
    app.openapi = _custom_openapi(app)

    # R: add_middleware apila: el último agregado es el más externo.
    app.add_middleware(BodyLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(RateLimitMiddleware)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(api_router, prefix=API_PREFIX)

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """Liveness: el proceso responde (no toca la DB)."""
        return {
            "ok": True,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get(f"{API_PREFIX}/health")
    def api_health(request: Request):
        return healthz(request)

    @app.get("/readyz")
    def readyz(request: Request):
        """
        Readiness: el store responde.

        Returns:
            ok: True si la DB (o el store en memoria) responde
            db: "connected" o "disconnected"
            request_id: correlación con logs
        """
        db_status = "disconnected"
        current = getattr(request.app.state, "container", None)
        try:
            if current is not None and current.is_ready():
                db_status = "connected"
        except Exception as e:
            logger.warning("Ready check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
