"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from content.presentation import routes as content_routes
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from webhooks.dependencies import shutdown_change_event_dispatcher
from webhooks.presentation import routes as webhook_routes


@asynccontextmanager
async def content_api_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration on startup
    - Draining pending change event dispatches and closing the shared
      HTTP client on shutdown
    """
    configure_logging(debug=get_settings().debug)
    yield
    await shutdown_change_event_dispatcher()


app = FastAPI(
    title=get_settings().app_name,
    description="Tenant-isolated content API with per-tenant build webhooks",
    version=__version__,
    lifespan=content_api_lifespan,
)

# Include bounded context routes
app.include_router(content_routes.router)
app.include_router(webhook_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
