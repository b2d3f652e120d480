"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.exceptions import NotFoundError, ValidationError

app = FastAPI(
    title="Topic Cover API",
    description="Backend API for creating and updating topics with branded cover images",
    version="0.1.0",
)

logger = logging.getLogger(__name__)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],  # Frontend URL
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Report every failing field in one response."""
    return JSONResponse(
        status_code=400,
        content={"code": exc.code, "message": exc.message, "errors": exc.errors},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    """Report a missing topic."""
    logger.info("Topic lookup failed: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=404, content={"code": exc.code, "message": exc.message})


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Topic Cover API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

# Import and include routers
from app.routers import topics

app.include_router(topics.router, prefix="/api/topics", tags=["topics"])

app.mount(
    settings.static_url.rstrip("/"),
    StaticFiles(directory=settings.static_dir, check_dir=False),
    name="static",
)
app.mount(
    settings.upload_url.rstrip("/"),
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="upload",
)
