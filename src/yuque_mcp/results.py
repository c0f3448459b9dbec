"""Tagged result type returned by every tool."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok:
    """The remote call succeeded; ``payload`` is its ``data`` field."""

    payload: Any

    @property
    def ok(self) -> bool:
        return True

    def render(self) -> str:
        return json.dumps(self.payload, ensure_ascii=False, indent=2)


@dataclass(frozen=True)
class Err:
    """The remote call failed while ``action`` (e.g. "fetching doc") was running."""

    action: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def render(self) -> str:
        return f"Error {self.action}: {self.message}"


ToolResult = Ok | Err
