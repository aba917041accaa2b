"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import accounts, auth, dashboard, enrollments, groups, health, levels, sessions, students, users
from app.core.database import close_db, init_db
from app.core.errors import AppError
from app.core.settings import settings
from app.services.student_service import UPLOADS_URL_PREFIX
from app.web.admin import router as admin_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

WEB_DIR = Path(__file__).parent / "web"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting school admin application...")

    await init_db()

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    yield

    await close_db()
    logger.info("Application stopped")


# Create FastAPI app
app = FastAPI(
    title="School Admin",
    description="Sessions, levels, groups, students, accounts and enrollments",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return _error(
        status.HTTP_400_BAD_REQUEST,
        f"{location}: {message}" if location else message,
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return _error(status.HTTP_400_BAD_REQUEST, "Value already in use or invalid reference")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Mount static files
app.mount("/static", StaticFiles(directory=WEB_DIR / "static"), name="static")
app.mount(
    UPLOADS_URL_PREFIX,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)

# Include API routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(sessions.router)
app.include_router(levels.router)
app.include_router(groups.router)
app.include_router(students.router)
app.include_router(enrollments.router)
app.include_router(users.router)
app.include_router(dashboard.router)

# Include web admin router
app.include_router(admin_router)


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.env == "dev",
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
