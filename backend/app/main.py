import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import settings
from app.core.errors import AppError, NotFoundError
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from app.models import User, JobRole, Skill, JobRoleSkill, SalaryByLocation, SavedInsight  # noqa: F401
from app.services.dashboard import DashboardService
from app.services.listings import ListingRepository

# Import API router
from app.api.api import api_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("healthinfo")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables and the listing dataset on startup."""
    Base.metadata.create_all(bind=engine)

    for name in settings.insecure_defaults():
        logger.warning("%s is not set; using the insecure development default", name)

    app.state.dashboard = DashboardService(ListingRepository(str(settings.listings_csv_path)))
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Health informatics job market insights for job seekers and HR",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Signed cookie session used by the login handshake
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE_SECONDS,
    same_site="lax",
    https_only=settings.is_production,
)


# ============== Exception Handlers ==============


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg')}" if location else errors[0].get("msg", message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # The error text is returned to the caller as-is
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "error": str(exc)},
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/health_informatics.csv", tags=["Dataset"])
async def listings_csv():
    """The raw job-listing dataset."""
    path = settings.listings_csv_path
    if not path.is_file():
        raise NotFoundError("Dataset not found")
    return FileResponse(path, media_type="text/csv", filename="health_informatics.csv")


# Include API router with /api prefix
app.include_router(api_router, prefix="/api")
