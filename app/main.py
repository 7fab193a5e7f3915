"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.container import ServiceContainer
from app.core.exceptions import BoardError, Unauthorized

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Root logging to stderr with UTC timestamps."""
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    formatter.converter = time.gmtime
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=settings.LOG_LEVEL, handlers=[handler])


def _error_body(request: Request, status_code: int, code: str, message: str) -> dict:
    return {
        "error": code,
        "message": message,
        "status_code": status_code,
        "path": request.url.path,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def board_error_handler(request: Request, exc: BoardError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, exc.code, exc.message),
        headers=headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=code,
        content=_error_body(request, code, "InternalServerError", "Internal server error."),
    )


def create_app(settings: Settings, container: ServiceContainer | None = None) -> FastAPI:
    """Build the app around one settings object; every component is constructed from it."""
    app = FastAPI(
        title="Board API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.container = container or ServiceContainer.build(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BoardError, board_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Board API"}

    return app


settings = get_settings()
configure_logging(settings)
app = create_app(settings)
