"""FastAPI application setup for the Apple docs search service."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apple_docs.api.dependencies import get_app_settings, get_gate, shutdown as shutdown_engine
from apple_docs.api.routes_admin import router as admin_router
from apple_docs.api.routes_docs import router as docs_router
from apple_docs.api.routes_search import router as search_router
from apple_docs.core.errors import AppleDocsError
from apple_docs.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Apple Docs Search",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(search_router, prefix="", tags=["search"])
app.include_router(docs_router, prefix="", tags=["documents"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.exception_handler(AppleDocsError)
async def engine_error_handler(request: Request, exc: AppleDocsError) -> JSONResponse:
    logger.error("Error in %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def startup() -> None:
    """Load settings and start the admission gate; the engine opens lazily."""
    get_app_settings()
    get_gate()


@app.on_event("shutdown")
async def shutdown() -> None:
    shutdown_engine()


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
