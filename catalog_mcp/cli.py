"""Command-line entry point for the catalog MCP server."""

import sys

import anyio
import click
import structlog
import uvicorn

from . import __version__
from .catalog import CatalogClient
from .config import Settings, get_settings
from .exceptions import ConfigurationError
from .logging import configure_logging
from .main import create_app
from .mcp_transport.stdio import run_stdio
from .tools import ToolDispatcher

logger = structlog.get_logger(__name__)


async def _serve_stdio(settings: Settings) -> None:
    async with CatalogClient(settings.client_config()) as client:
        if not client.config.has_api_key:
            logger.warning("api_key_missing", hint="tool calls will fail until DATALOG_API_KEY is set")
        await run_stdio(ToolDispatcher(client))
    logger.info("stdio_server_stopped")


def _serve_http(settings: Settings, host: str, port: int) -> None:
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,
    )


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default=None,
    help="Protocol transport (default: MCP_TRANSPORT or stdio)",
)
@click.option("--host", default=None, help="Bind address for the http transport")
@click.option("--port", type=int, default=None, help="Bind port for the http transport")
def main(transport: str | None, host: str | None, port: int | None) -> None:
    """Expose the catalog service as MCP tools."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        click.echo(f"Failed to start server: {e.message}", err=True)
        sys.exit(1)

    configure_logging(level=settings.LOG_LEVEL, fmt=settings.LOG_FORMAT)
    transport = transport or settings.MCP_TRANSPORT

    try:
        if transport == "http":
            _serve_http(settings, host or settings.HTTP_HOST, port or settings.HTTP_PORT)
        else:
            anyio.run(_serve_stdio, settings)
    except KeyboardInterrupt:
        logger.info("server_interrupted")
    except Exception:
        logger.exception("server_failed", transport=transport)
        sys.exit(1)
