"""Tests for the tagged tool result."""

import json

from yuque_mcp.results import Err, Ok


def test_ok_renders_pretty_json_keeping_unicode() -> None:
    result = Ok({"title": "语雀笔记", "id": 1})

    text = result.render()

    assert result.ok is True
    assert "语雀笔记" in text
    assert "\n" in text
    assert json.loads(text) == {"title": "语雀笔记", "id": 1}


def test_err_renders_action_and_message() -> None:
    result = Err("fetching doc", "404 Not Found")

    assert result.ok is False
    assert result.render() == "Error fetching doc: 404 Not Found"
