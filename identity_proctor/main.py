"""
Identity Proctor Service - FastAPI Application
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .proctor import router as proctor_router
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Identity verification and capture policy checks for proctored exams",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)


# ============================================================================
# Request Logging Middleware
# ============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests with timing."""
    start = time.time()
    method = request.method
    path = request.url.path
    
    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception(f"{method} {path} failed: {e}")
        raise
    
    if path not in ["/health", "/favicon.ico"]:
        duration_ms = int((time.time() - start) * 1000)
        logger.info(f"{method} {path} -> {response.status_code} in {duration_ms}ms")
    
    return response


# Permissive CORS: callers are browser clients on any origin
# Note: When using allow_origins=["*"], credentials must be False
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(proctor_router)


@app.on_event("startup")
async def startup_event():
    """Configure logging and report the active configuration."""
    setup_logging(
        service_name="identity-proctor",
        level=settings.LOG_LEVEL,
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR
    )
    logger.info(f"Collection: {settings.COLLECTION_ID}, table: {settings.FACES_TABLENAME}, region: {settings.REGION}")
    logger.info(f"Min confidence: {settings.MIN_CONFIDENCE}, objects of interest: {settings.OBJECTS_OF_INTEREST_LABELS}")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "docs": "/docs" if settings.DEBUG else "Disabled in production"
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run("identity_proctor.main:app", host="0.0.0.0", port=settings.PORT)
