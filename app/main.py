import logging
from contextlib import asynccontextmanager
from typing import Type

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from app.core.config import settings
from app.core.database import dispose_db, init_db
from app.routers.auth_router import router as auth_router
from app.routers.me_router import router as me_router
from app.routers.reply_router import router as reply_router
from app.routers.tweet_router import router as tweet_router
from app.routers.user_router import router as user_router
from app.utils.exceptions import (
    ApiError, BadRequestError, ConflictError, ForbiddenError,
    NotFoundError, UnauthorizedError
)

# ─── logging ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ─── application lifespan ────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables on startup, release the connection pool on shutdown
    """
    await init_db()
    logger.info("Database ready (%s)", settings.ENVIRONMENT)
    yield
    await dispose_db()


# ─── FastAPI application ─────────────────────────────────────────────────
app = FastAPI(
    title="Chirp API",
    description="Micro-blogging backend: users, tweets, replies, favorites and follows",
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

# ─── CORS ────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── exception class -> status code ──────────────────────────────────────
EXCEPTION_STATUS_MAP: dict[Type[Exception], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def status_for(exc: Exception) -> int:
    """
    Status code of the nearest mapped base class, 500 when none matches
    """
    for klass in type(exc).__mro__:
        if klass in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[klass]
    return 500


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok"}


# ─── exception handlers ──────────────────────────────────────────────────
@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    """
    ApiError subclasses -> {"data": null, "error": message}
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Unmapped API error on %s %s: %s", request.method, request.url.path, exc.message)
    return ORJSONResponse(status_code=status_code, content={"data": None, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """
    Body/path validation failures -> 400 with per-field messages
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        cause = err.get("ctx", {}).get("error")
        errors.append({
            "field": ".".join(loc),
            "message": str(cause) if cause is not None else err.get("msg", ""),
        })

    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        message = "Invalid parameter!"
    else:
        message = "Invalid request."
    return ORJSONResponse(
        status_code=400,
        content={"data": None, "error": message, "errors": errors},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return ORJSONResponse(
        status_code=500,
        content={"data": None, "error": "Internal server error."},
    )


# ─── routers ─────────────────────────────────────────────────────────────
app.include_router(auth_router,  prefix="/api")
app.include_router(me_router,    prefix="/api")
app.include_router(user_router,  prefix="/api")
app.include_router(tweet_router, prefix="/api")
app.include_router(reply_router, prefix="/api")

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
