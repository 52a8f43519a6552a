"""
Proposal Generator - FastAPI Application Entry Point.

Turns client meeting transcripts into web design proposals:
- Transcript analysis with an LLM extraction agent
- Markdown proposal assembly and PDF rendering
- Notion-backed CRM board and a YouTube feed adapter

Run with:
    uvicorn proposalgen.main:app --reload --port 3000
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from proposalgen.api import auth_router, crm_router, feeds_router, proposals_router
from proposalgen.core.config import get_settings, missing_credentials
from proposalgen.core.errors import ExtractionError, ProposalGenError
from proposalgen.core.logging_setup import setup_logging

SERVICE_NAME = "Proposal Generator"
SERVICE_VERSION = "1.0.0"

logger = setup_logging()


# ===========================================
# Application Lifespan
# ===========================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    logger.info("=" * 50)
    logger.info(f"{SERVICE_NAME} Starting Up")
    logger.info("=" * 50)
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"Render mode: {settings.RENDER_MODE}")

    missing = missing_credentials(settings)
    if missing:
        logger.critical(f"Missing required credentials: {', '.join(missing)}")
        raise RuntimeError(f"Missing required credentials: {', '.join(missing)}")

    if not settings.NOTION_API_KEY:
        logger.warning("Notion API key not configured - CRM endpoints will fail")

    logger.info("Startup complete - ready to accept requests")

    yield

    # Shutdown
    logger.info(f"{SERVICE_NAME} shutting down...")


# ===========================================
# FastAPI Application
# ===========================================

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=SERVICE_NAME,
        description="""
        Web design proposal generator.

        ## Proposals

        - `POST /api/analyze` - Extract proposal data from a meeting transcript
        - `POST /api/generate-pdf` - Build the proposal PDF (or markdown)
        - `GET|POST /api/settings` - Business name and contact details

        ## Access

        - `POST /api/login` - Exchange the shared password for a token
        - `GET /api/auth-check` - Validate a token

        ## Extras

        - `GET|POST|PATCH /api/crm` - Notion CRM board
        - `GET /api/youtube-rss` - Channel feed as JSON
        """,
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "X-Auth-Token"],
    )

    # Include routers
    app.include_router(auth_router)
    app.include_router(proposals_router)
    app.include_router(crm_router)
    app.include_router(feeds_router)

    register_error_handlers(app)

    return app


# ===========================================
# Error Handlers
# ===========================================

def register_error_handlers(app: FastAPI) -> None:
    """Translate failures into {"error", "message"} payloads."""

    @app.exception_handler(ProposalGenError)
    async def proposal_error_handler(request: Request, exc: ProposalGenError):
        """Known failure raised by a service or dependency."""
        if isinstance(exc, ExtractionError):
            logger.error(f"{exc.message} - raw completion: {exc.raw_text[:500]!r}")
        elif exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed or incomplete request body."""
        fields = [".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors()]
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request",
                "message": f"Invalid or missing fields: {', '.join(fields)}"
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if get_settings().DEBUG else "An error occurred"
            }
        )


# Create app instance
app = create_app()


# ===========================================
# Root Endpoints
# ===========================================

@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return JSONResponse({
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "endpoints": {
            "auth": {
                "login": "POST /api/login",
                "check": "GET /api/auth-check"
            },
            "proposals": {
                "analyze": "POST /api/analyze",
                "generate": "POST /api/generate-pdf",
                "settings": "GET|POST /api/settings"
            },
            "crm": "GET|POST|PATCH /api/crm",
            "youtube": "GET /api/youtube-rss"
        }
    })


@app.get("/health", tags=["root"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "proposalgen"}


# ===========================================
# Main Entry Point
# ===========================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "proposalgen.main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
