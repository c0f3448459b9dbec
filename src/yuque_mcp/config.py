"""Configuration for the Yuque MCP server."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

SERVER_NAME = "yuque-mcp"
SERVER_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://www.yuque.com/api/v2"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"

# Seconds. Applies to connect, read, write and pool acquisition alike.
DEFAULT_TIMEOUT = 30.0

PORT_ENV = "PORT"
TOKEN_ENV = "YUQUE_API_TOKEN"
BASE_URL_ENV = "YUQUE_API_BASE_URL"
HOST_ENV = "YUQUE_MCP_HOST"
STDIO_ENV = "YUQUE_MCP_STDIO"

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    """Raised when the environment holds an unusable value."""


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings read once at startup."""

    port: int = DEFAULT_PORT
    api_token: str = ""
    api_base_url: str = DEFAULT_BASE_URL
    host: str = DEFAULT_HOST
    stdio: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a config from environment variables.

        Empty values count as unset.

        Raises:
            ConfigError: If PORT is not an integer in 1-65535.
        """
        env = os.environ if environ is None else environ

        raw_port = env.get(PORT_ENV) or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            msg = f"{PORT_ENV} must be an integer, got {raw_port!r}"
            raise ConfigError(msg) from None
        if not 0 < port < 65536:
            msg = f"{PORT_ENV} out of range: {port}"
            raise ConfigError(msg)

        return cls(
            port=port,
            api_token=(env.get(TOKEN_ENV) or "").strip(),
            api_base_url=env.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
            host=env.get(HOST_ENV) or DEFAULT_HOST,
            stdio=(env.get(STDIO_ENV) or "").strip().lower() in _TRUTHY,
        )
