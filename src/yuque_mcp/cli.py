"""Command-line entry point: pick a transport and serve the Yuque tools."""

import asyncio
from dataclasses import replace

import typer
from dotenv import load_dotenv
from loguru import logger
from mcp.server.fastmcp import FastMCP

from yuque_mcp.api import YuqueClient
from yuque_mcp.config import BASE_URL_ENV, TOKEN_ENV, ConfigError, ServerConfig
from yuque_mcp.logging_config import configure_logging
from yuque_mcp.mcp.server import create_server, describe_tools
from yuque_mcp.mcp.transport import SseApp, serve_http

app = typer.Typer(help="Yuque MCP server: knowledge-base tools over stdio or SSE.")


def _warn_missing_token() -> None:
    logger.warning("No Yuque API token provided in environment. You can:")
    logger.warning("1. Set {} in your environment or .env file", TOKEN_ENV)
    logger.warning("2. Provide accessToken via query parameter: /sse?accessToken=your_token")
    logger.warning("Some API operations will fail without a valid token.")


def _display_available_tools() -> None:
    logger.info("Available Yuque tools:")
    for name, summary in describe_tools():
        logger.info("  • {}: {}", name, summary)


async def _serve(
    server: FastMCP, client: YuqueClient, config: ServerConfig, *, stdio: bool
) -> None:
    try:
        if stdio:
            logger.info("Starting Yuque MCP Server in stdio mode...")
            await server.run_stdio_async()
        else:
            logger.info("Starting Yuque MCP Server in HTTP mode on port {}...", config.port)
            await serve_http(SseApp(server, client), host=config.host, port=config.port)
    finally:
        await client.aclose()


@app.command()
def serve(
    stdio: bool = typer.Option(False, "--stdio", help="Serve over stdin/stdout instead of HTTP"),
    port: int | None = typer.Option(None, "--port", "-p", help="HTTP port (default: $PORT or 3000)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Start the MCP server."""
    configure_logging(verbose=verbose)
    load_dotenv()

    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration: {}", e)
        raise typer.Exit(1) from None
    if port is not None:
        config = replace(config, port=port)

    if not config.api_token:
        _warn_missing_token()
    logger.debug("API base URL {!r} (from {} or default)", config.api_base_url, BASE_URL_ENV)

    client = YuqueClient(config.api_token, config.api_base_url)
    server = create_server(client)
    _display_available_tools()

    try:
        asyncio.run(_serve(server, client, config, stdio=stdio or config.stdio))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Failed to start server")
        raise typer.Exit(1) from None
