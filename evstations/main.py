"""
FastAPI application main module.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from evstations.config import get_settings
from evstations.database import init_db
from evstations.errors import StationServiceError, ValidationError
from evstations.routers import stations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    await init_db()
    logger.info("Database ready")
    yield


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="Charging station directory service",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(stations.router)


@app.exception_handler(StationServiceError)
async def station_error_handler(request: Request, exc: StationServiceError):
    """Map station errors to status codes and JSON bodies."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_error_handler(request: Request, exc: RequestValidationError):
    """Unparseable request bodies are reported like any other validation failure."""
    violations = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            violation = ("body", "Request body must be valid JSON")
        else:
            violation = (".".join(str(part) for part in error["loc"]), error["msg"])
        if violation not in violations:
            violations.append(violation)
    return JSONResponse(status_code=400, content=ValidationError(violations).to_dict())


@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "name": settings.app_name,
        "status": "healthy",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "ok"}
