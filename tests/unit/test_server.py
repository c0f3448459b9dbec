"""End-to-end tests through an in-memory MCP session."""

import json
from typing import Any

import pytest
from mcp import types
from mcp.shared.memory import create_connected_server_and_client_session

from tests.unit.fakes import FailingClient, FakeClient
from tests.unit.payloads import DOC, USER
from yuque_mcp.mcp.server import create_server, describe_tools

EXPECTED_TOOLS = {
    "get_current_user",
    "get_user_docs",
    "get_user_repos",
    "get_group_repos",
    "get_repo",
    "create_repo",
    "update_repo",
    "delete_repo",
    "get_repo_docs",
    "get_doc",
    "create_doc",
    "update_doc",
    "delete_doc",
    "get_doc_versions",
    "get_doc_version",
    "get_repo_toc",
    "update_repo_toc",
    "search",
    "get_group_statistics",
    "get_group_member_statistics",
    "get_group_book_statistics",
    "get_group_doc_statistics",
}


def _text(result: types.CallToolResult) -> str:
    assert len(result.content) == 1
    block = result.content[0]
    assert isinstance(block, types.TextContent)
    return block.text


def test_describe_tools_lists_every_tool() -> None:
    described = dict(describe_tools())
    assert set(described) == EXPECTED_TOOLS
    assert all(summary for summary in described.values())


@pytest.mark.asyncio
async def test_server_registers_every_tool(fake_client: FakeClient) -> None:
    server = create_server(fake_client)

    tools = await server.list_tools()

    assert {t.name for t in tools} == EXPECTED_TOOLS


@pytest.mark.asyncio
async def test_schema_marks_required_and_enum_fields(fake_client: FakeClient) -> None:
    server = create_server(fake_client)

    tools = {t.name: t for t in await server.list_tools()}
    schema = tools["create_doc"].inputSchema

    assert set(schema["required"]) == {"namespace", "title", "slug", "body"}
    assert "ctx" not in schema["properties"]
    assert tools["search"].inputSchema["required"] == ["query", "type"]


@pytest.mark.asyncio
async def test_schema_lists_enum_values(fake_client: FakeClient) -> None:
    server = create_server(fake_client)

    tools = {t.name: t for t in await server.list_tools()}
    defs = tools["create_doc"].inputSchema["$defs"]

    assert defs["DocFormat"]["enum"] == ["markdown", "html", "lake"]
    assert defs["Visibility"]["enum"] == [0, 1, 2]
    assert tools["search"].inputSchema["$defs"]["SearchType"]["enum"] == ["doc", "repo"]


@pytest.mark.asyncio
async def test_call_tool_returns_json_text(fake_client: FakeClient) -> None:
    fake_client.add_response("get_doc", DOC)
    server = create_server(fake_client)

    async with create_connected_server_and_client_session(server._mcp_server) as session:
        result = await session.call_tool(
            "get_doc", {"namespace": "alice/notes", "slug": "title-slug"}
        )

    assert not result.isError
    assert json.loads(_text(result)) == DOC


@pytest.mark.asyncio
async def test_remote_failure_is_a_successful_tool_response() -> None:
    server = create_server(FailingClient())

    async with create_connected_server_and_client_session(server._mcp_server) as session:
        result = await session.call_tool("get_current_user", {})

    assert not result.isError
    assert _text(result).startswith("Error fetching current user: ")


@pytest.mark.asyncio
async def test_invalid_arguments_fail_before_the_network(fake_client: FakeClient) -> None:
    server = create_server(fake_client)

    async with create_connected_server_and_client_session(server._mcp_server) as session:
        missing = await session.call_tool("get_doc", {"namespace": "alice/notes"})
        bad_enum = await session.call_tool("search", {"query": "foo", "type": "user"})

    assert missing.isError
    assert bad_enum.isError
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_out_of_range_paging_fails_before_the_network(fake_client: FakeClient) -> None:
    server = create_server(fake_client)

    async with create_connected_server_and_client_session(server._mcp_server) as session:
        results = [
            await session.call_tool(
                "get_group_member_statistics", {"login": "team", "limit": 500, "page": 0}
            ),
            await session.call_tool("get_group_book_statistics", {"login": "team", "limit": 21}),
            await session.call_tool("get_repo_docs", {"namespace": "a/b", "limit": -5}),
            await session.call_tool("get_user_docs", {"limit": 101}),
            await session.call_tool("get_user_repos", {"login": "alice", "offset": -1}),
            await session.call_tool("search", {"query": "foo", "type": "doc", "page": 0}),
        ]

    assert all(r.isError for r in results)
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_paging_bounds_are_inclusive(fake_client: FakeClient) -> None:
    fake_client.add_response("get_repo_docs", [])
    fake_client.add_response("get_group_doc_statistics", {})
    server = create_server(fake_client)

    async with create_connected_server_and_client_session(server._mcp_server) as session:
        docs = await session.call_tool(
            "get_repo_docs", {"namespace": "a/b", "offset": 0, "limit": 100}
        )
        stats = await session.call_tool(
            "get_group_doc_statistics", {"login": "team", "page": 1, "limit": 20}
        )

    assert not docs.isError
    assert not stats.isError
    assert [c[0] for c in fake_client.calls] == ["get_repo_docs", "get_group_doc_statistics"]


@pytest.mark.asyncio
async def test_tool_progress_is_sent_as_log_notifications(fake_client: FakeClient) -> None:
    fake_client.add_response("get_current_user", USER)
    server = create_server(fake_client)
    received: list[Any] = []

    async def on_log(params: types.LoggingMessageNotificationParams) -> None:
        received.append((params.level, params.data))

    async with create_connected_server_and_client_session(
        server._mcp_server, logging_callback=on_log
    ) as session:
        await session.call_tool("get_current_user", {})

    assert ("info", "Fetching current user information") in received
    assert ("info", "Successfully fetched user: Alice") in received
