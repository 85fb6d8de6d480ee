"""FastAPI application entrypoint. No business logic; only wiring, error rendering and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from rollcall import __version__
from rollcall.api.v1 import router as api_router
from rollcall.core.config import settings
from rollcall.core.database import init_db
from rollcall.core.errors import ServiceError, Unauthenticated
from rollcall.services.uploads import UPLOADS_URL_PATH, upload_dir

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    if settings.DB_AUTO_CREATE:
        init_db()
        logger.info("Database tables ensured (DB_AUTO_CREATE=true)")
    logger.info("Rollcall started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Rollcall API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    if exc.status_code >= 500:
        logger.error("Internal error: %s", exc.message, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request.")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": f"{location}: {detail}" if location else detail,
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Something went wrong on the server."},
    )


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Rollcall API"}


# Stored profile pictures; the directory must exist before StaticFiles checks it.
upload_dir().mkdir(parents=True, exist_ok=True)
app.mount(UPLOADS_URL_PATH, StaticFiles(directory=upload_dir()), name="uploads")
