"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docscan import __version__
from docscan.api.router import router
from docscan.config import get_settings
from docscan.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "Starting Document Scan service",
        version=__version__,
        environment=settings.environment.value,
        max_upload_bytes=settings.max_upload_bytes,
    )

    yield

    logger.info("Shutting down Document Scan service")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Document Scan",
        description="""
        Pixel processing for a document-scanning pipeline.

        ## Features

        - **Perspective correction**: dewarp a photographed page from its four corners
        - **Black-and-white enhancement**: bilateral smoothing plus adaptive thresholding
        - **Grayscale conversion**: BT.601 luma

        ## Usage

        1. Upload an image (PNG, JPEG, WEBP, HEIC, BMP, TIFF)
        2. Pick a task
        3. Receive the processed image as PNG
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if not settings.is_production else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Service info."""
        return {
            "message": "Document Scan API",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


# Create app instance
app = create_app()
