from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .catalog import CatalogClient
from .config import Settings, get_settings
from .mcp_transport.router import router as mcp_router
from .tools import ToolDispatcher


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI app serving MCP over HTTP.

    Args:
        settings: Settings to use; read from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: one catalog client (and connection pool) for the process
        client = CatalogClient(settings.client_config())
        app.state.dispatcher = ToolDispatcher(client)

        yield

        # Shutdown: close the HTTP client
        await client.aclose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "app": settings.APP_NAME}

    app.include_router(mcp_router)
    return app
