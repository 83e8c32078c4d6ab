"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gamelive.config import settings
from gamelive.db.database import Base, engine
from gamelive.exceptions import ConfigError, GameliveError
from gamelive.services.asset_catalog import get_asset_catalog

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.JWT_SECRET:
        raise ConfigError("JWT_SECRET is required")
    # Startup: create tables (dev only; use migrations in production)
    import gamelive.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    get_asset_catalog()
    yield
    # Shutdown: close connections
    await engine.dispose()


app = FastAPI(
    title="Gamelive API",
    description="Quest tracker with a role-play character for Telegram Mini Apps",
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message, "details": details},
    )


@app.exception_handler(GameliveError)
async def _gamelive_error_handler(request: Request, exc: GameliveError):
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "code": exc.code, "error": exc.message, "details": exc.details},
        )
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(422, "validation_error", "Request validation failed", jsonable_errors(exc))


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, "http_error", str(exc.detail))


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return _error_response(500, "server_error", "Internal server error", {"type": type(exc).__name__})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


# --- Routes ---
from gamelive.api.routes import auth, character, quests, steps  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(character.router, prefix="/api/character", tags=["character"])
app.include_router(quests.router, prefix="/api/quests", tags=["quests"])
app.include_router(steps.router, prefix="/api/steps", tags=["steps"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}
