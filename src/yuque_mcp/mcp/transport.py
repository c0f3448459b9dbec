"""HTTP transport: one SSE event stream plus a POST side channel.

Only one event stream is tracked at a time. A new ``GET /sse`` replaces the
active stream, and ``POST /messages`` is always routed to it.

Credentials passed as ``accessToken``/``baseUrl`` query parameters on
``GET /sse`` overwrite the shared API client's credentials for every client
until the next override. This is a single-tenant simplification, not
per-session isolation.
"""

from datetime import UTC, datetime

import uvicorn
from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from yuque_mcp.config import SERVER_VERSION
from yuque_mcp.protocols import ClientProtocol

MESSAGE_PATH = "/messages"


class _MessageEndpoint:
    """Raw ASGI endpoint; the SSE transport writes its own response."""

    def __init__(self, app: "SseApp") -> None:
        self._app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        transport = self._app.active_transport
        if transport is None:
            response = PlainTextResponse("SSE connection not established", status_code=400)
            await response(scope, receive, send)
            return
        await transport.handle_post_message(scope, receive, send)


class SseApp:
    """Binds a FastMCP server to the SSE/HTTP surface."""

    def __init__(self, server: FastMCP, client: ClientProtocol) -> None:
        self._server = server
        self._client = client
        self.active_transport: SseServerTransport | None = None

    def override_credentials(self, token: str | None, base_url: str | None) -> bool:
        """Apply per-connection credentials to the shared client, if any were given."""
        token = token or None
        base_url = base_url or None
        if token is None and base_url is None:
            return False
        parts = []
        if token:
            parts.append("token from query")
        if base_url:
            parts.append(f"base URL {base_url}")
        logger.info("Using custom configuration: {}", ", ".join(parts))
        self._client.update_config(token=token, base_url=base_url)
        return True

    async def handle_sse(self, request: Request) -> Response:
        logger.info("New SSE connection established")
        self.override_credentials(
            request.query_params.get("accessToken"), request.query_params.get("baseUrl")
        )

        transport = SseServerTransport(MESSAGE_PATH)
        self.active_transport = transport
        lowlevel = self._server._mcp_server
        try:
            async with transport.connect_sse(
                request.scope,
                request.receive,
                request._send,  # noqa: SLF001
            ) as (read_stream, write_stream):
                await lowlevel.run(
                    read_stream, write_stream, lowlevel.create_initialization_options()
                )
        finally:
            if self.active_transport is transport:
                self.active_transport = None
            logger.info("SSE connection closed")
        return Response()

    async def health(self, _request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "version": SERVER_VERSION,
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

    def build(self) -> Starlette:
        return Starlette(
            routes=[
                Route("/health", endpoint=self.health, methods=["GET"]),
                Route("/sse", endpoint=self.handle_sse, methods=["GET"]),
                Route(MESSAGE_PATH, endpoint=_MessageEndpoint(self), methods=["POST"]),
            ]
        )


async def serve_http(app: SseApp, *, host: str, port: int) -> None:
    """Serve the HTTP surface until interrupted."""
    logger.info("Yuque MCP HTTP server listening on port {}", port)
    logger.info("SSE endpoint available at http://localhost:{}/sse", port)
    logger.info("Message endpoint available at http://localhost:{}{}", port, MESSAGE_PATH)
    # log_config=None keeps the loguru bridge installed by configure_logging.
    config = uvicorn.Config(app.build(), host=host, port=port, log_config=None)
    await uvicorn.Server(config).serve()
