"""Tool log strategies.

Tools report progress through a ``ToolLog``. Until a transport is attached
nothing is emitted; once a session exists, lines are sent to the client as
MCP log notifications.
"""

from collections.abc import Awaitable, Callable

from loguru import logger
from mcp.server.fastmcp import Context


class NullToolLog:
    """Discards everything. Used when no transport is attached."""

    async def info(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass


class ContextToolLog:
    """Sends tool lines to the connected client through the MCP session.

    Lines are mirrored to the process log at debug level so they are visible
    locally with ``--verbose``. A line the session cannot deliver (the client
    went away mid-call) is dropped; it never fails the tool call.
    """

    def __init__(self, ctx: Context) -> None:
        self._ctx = ctx

    async def info(self, message: str) -> None:
        await self._send(self._ctx.info, message)

    async def error(self, message: str) -> None:
        await self._send(self._ctx.error, message)

    async def _send(self, notify: Callable[[str], Awaitable[None]], message: str) -> None:
        logger.debug(message)
        try:
            await notify(message)
        except Exception as e:
            logger.debug("Could not send log line to client: {}", e)


NULL_LOG = NullToolLog()
