"""
Main FastAPI application for the AI Design Engine
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings, validate_required_config
from logging_config import logger
from routers import ai_designer
from routers.dependencies import limiter
from services.completion_client import CompletionClientError, build_completion_client

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting AI Design Engine", environment=settings.ENVIRONMENT)

    # Validate required configuration
    validate_required_config()

    # Initialize Sentry if DSN provided
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[FastApiIntegration()],
        )
        logger.info("Sentry initialized")

    # Tests may pre-seed a client on app.state
    if getattr(app.state, "completion_client", None) is None:
        try:
            app.state.completion_client = build_completion_client(settings)
        except CompletionClientError as e:
            logger.error("Completion client not available", error=str(e))
            app.state.completion_client = None

    client = app.state.completion_client
    logger.info(
        "AI Design Engine started",
        completion_provider=getattr(client, "name", None),
        rate_limit_enabled=settings.RATE_LIMIT_ENABLED
    )

    yield

    logger.info("Shutting down AI Design Engine")


# Create FastAPI app
app = FastAPI(
    title="AI Design Engine",
    description="AI-assisted color, layout, SEO and content suggestions for the website builder",
    version=VERSION,
    lifespan=lifespan
)

# Add rate limiter
app.state.limiter = limiter
app.state.completion_client = None
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware - Configure from environment
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.CORS_ORIGINS.split(",")
    if origin.strip()
]

# In development, allow all origins for easier testing
if settings.ENVIRONMENT == "development" or settings.DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Cannot use credentials with wildcard origins
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "AI Design Engine",
        "version": VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check: the completion client is the only critical dependency"""
    client = getattr(request.app.state, "completion_client", None)

    health = {
        "status": "healthy" if client is not None else "degraded",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "completion_client": {
                "configured": client is not None,
                "provider": getattr(client, "name", None),
                "status": "ok" if client is not None else "missing"
            }
        }
    }

    return health


@app.get("/readiness")
async def readiness_check(request: Request):
    """Kubernetes readiness probe"""
    health = await health_check(request)

    if health["checks"]["completion_client"]["status"] == "ok":
        return {"status": "ready"}

    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "checks": health["checks"]}
    )


# Include routers
app.include_router(ai_designer.router, prefix="/api/v1/ai", tags=["AI Designer"])


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler with Sentry integration"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        path=request.url.path,
        exc_info=True
    )

    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.ENVIRONMENT == "development" else None
        }
    )


if __name__ == "__main__":
    import uvicorn
    reload_enabled = settings.ENVIRONMENT == "development" or settings.DEBUG
    uvicorn.run("main:app", host="0.0.0.0", port=8002, reload=reload_enabled)
