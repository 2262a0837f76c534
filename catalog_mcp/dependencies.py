"""Global dependencies for the application."""

from fastapi import Request

from catalog_mcp.tools import ToolDispatcher


async def get_dispatcher(request: Request) -> ToolDispatcher:
    """Dependency to get the process-wide tool dispatcher.

    The dispatcher and its catalog client are created in the app lifespan
    and shared across requests to reuse the client's connection pool.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared ToolDispatcher instance.
    """
    return request.app.state.dispatcher
