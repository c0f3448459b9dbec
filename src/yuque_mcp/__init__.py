"""Yuque knowledge base exposed as MCP tools."""

from yuque_mcp.api import YuqueClient
from yuque_mcp.config import SERVER_VERSION as __version__
from yuque_mcp.config import ServerConfig
from yuque_mcp.protocols import ClientProtocol, ToolLog
from yuque_mcp.results import Err, Ok, ToolResult

__all__ = [
    "ClientProtocol",
    "Err",
    "Ok",
    "ServerConfig",
    "ToolLog",
    "ToolResult",
    "YuqueClient",
    "__version__",
]
