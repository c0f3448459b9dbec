"""Tests for YuqueClient — async HTTP client for the Yuque API."""

from collections.abc import Callable

import httpx
import pytest

from tests.unit.payloads import BASE_URL, DOC, SEARCH_RESULTS, USER, envelope, request_json
from yuque_mcp.api import YuqueClient
from yuque_mcp.config import DEFAULT_BASE_URL
from yuque_mcp.models import StatisticsFilters

MakeClient = Callable[..., YuqueClient]


def test_defaults_to_public_yuque_endpoint() -> None:
    client = YuqueClient()
    assert client.base_url == DEFAULT_BASE_URL
    assert client.token == ""


@pytest.mark.asyncio
async def test_request_sends_token_header(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(USER))

    await client.get_current_user()

    request = recorded_requests[0]
    assert request.headers["X-Auth-Token"] == "test-token"
    assert request.headers["Content-Type"] == "application/json"
    assert str(request.url) == f"{BASE_URL}/user"


@pytest.mark.asyncio
async def test_empty_token_omits_auth_header(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(USER), token="")

    await client.get_current_user()

    assert "X-Auth-Token" not in recorded_requests[0].headers


@pytest.mark.asyncio
async def test_returns_data_field_of_envelope(make_client: MakeClient) -> None:
    client = make_client(lambda _r: envelope(USER))

    assert await client.get_current_user() == USER


@pytest.mark.asyncio
async def test_update_config_token_keeps_base_url(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(USER))

    client.update_config("new-token", None)
    await client.get_current_user()

    request = recorded_requests[0]
    assert request.headers["X-Auth-Token"] == "new-token"
    assert str(request.url) == f"{BASE_URL}/user"
    assert client.base_url == BASE_URL


@pytest.mark.asyncio
async def test_update_config_base_url_keeps_token(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(USER))

    client.update_config(None, "https://other.test/api/v2")
    await client.get_current_user()

    request = recorded_requests[0]
    assert request.headers["X-Auth-Token"] == "test-token"
    assert str(request.url) == "https://other.test/api/v2/user"
    assert client.token == "test-token"


@pytest.mark.asyncio
async def test_replaced_http_client_is_closed_after_next_request(
    make_client: MakeClient,
) -> None:
    client = make_client(lambda _r: envelope(USER))
    replaced = client._http

    client.update_config("new-token", None)
    await client.get_current_user()

    assert replaced.is_closed
    assert not client._http.is_closed


@pytest.mark.asyncio
async def test_replaced_http_client_stays_open_for_in_flight_request(
    make_client: MakeClient,
) -> None:
    open_during_request: list[bool] = []

    def reconfigure_mid_request(_request: httpx.Request) -> httpx.Response:
        client.update_config("new-token", None)
        open_during_request.append(not replaced.is_closed)
        return envelope(USER)

    client = make_client(reconfigure_mid_request)
    replaced = client._http

    assert await client.get_current_user() == USER
    assert open_during_request == [True]
    assert replaced.is_closed


@pytest.mark.asyncio
async def test_aclose_closes_replaced_clients(make_client: MakeClient) -> None:
    client = make_client()
    replaced = client._http
    client.update_config("new-token", None)

    await client.aclose()

    assert replaced.is_closed
    assert client._http.is_closed


@pytest.mark.asyncio
async def test_search_passes_query_and_type(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(SEARCH_RESULTS))

    result = await client.search("foo", "doc")

    assert result == SEARCH_RESULTS
    request = recorded_requests[0]
    assert request.url.path == "/api/v2/search"
    assert request.url.query == b"q=foo&type=doc"


@pytest.mark.asyncio
async def test_create_doc_body_uses_defaults(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(DOC))

    await client.create_doc("alice/notes", title="Title", slug="title-slug", body="body text")

    request = recorded_requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v2/repos/alice/notes/docs"
    assert request_json(request) == {
        "title": "Title",
        "slug": "title-slug",
        "body": "body text",
        "format": "markdown",
        "public": 1,
    }


@pytest.mark.asyncio
async def test_update_doc_sends_only_given_fields(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope(DOC))

    await client.update_doc("alice/notes", 100, title="New title", public=0)

    request = recorded_requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/v2/repos/alice/notes/docs/100"
    assert request_json(request) == {"title": "New title", "public": 0}


@pytest.mark.asyncio
async def test_list_omits_unset_pagination(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope([]))

    await client.get_repo_docs("alice/notes")
    await client.get_repo_docs("alice/notes", offset=20, limit=10)

    assert recorded_requests[0].url.query == b""
    assert recorded_requests[1].url.params["offset"] == "20"
    assert recorded_requests[1].url.params["limit"] == "10"


@pytest.mark.asyncio
async def test_create_repo_routes_by_owner_type(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope({}))

    await client.create_repo("alice", name="Notes", slug="notes")
    await client.create_repo("team", name="Wiki", slug="wiki", owner_type="group", public=2)

    assert recorded_requests[0].url.path == "/api/v2/users/alice/repos"
    assert request_json(recorded_requests[0]) == {"name": "Notes", "slug": "notes"}
    assert recorded_requests[1].url.path == "/api/v2/groups/team/repos"
    assert request_json(recorded_requests[1]) == {"name": "Wiki", "slug": "wiki", "public": 2}


@pytest.mark.asyncio
async def test_update_repo_toc_drops_unset_fields(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope([]))

    await client.update_repo_toc(
        "alice/notes", action="appendNode", action_mode="child", doc_ids=[100], type="DOC"
    )

    request = recorded_requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/v2/repos/alice/notes/toc"
    assert request_json(request) == {
        "action": "appendNode",
        "action_mode": "child",
        "doc_ids": [100],
        "type": "DOC",
    }


@pytest.mark.asyncio
async def test_doc_versions_uses_doc_id_query(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope([]))

    await client.get_doc_versions(100)

    assert recorded_requests[0].url.path == "/api/v2/doc_versions"
    assert recorded_requests[0].url.params["doc_id"] == "100"


@pytest.mark.asyncio
async def test_doc_statistics_renames_filters(
    make_client: MakeClient, recorded_requests: list[httpx.Request]
) -> None:
    client = make_client(lambda _r: envelope({}))

    await client.get_group_doc_statistics(
        "team",
        book_id=10,
        filters=StatisticsFilters(range=30, sort_field="read_count", sort_order="desc"),
    )

    request = recorded_requests[0]
    assert request.url.path == "/api/v2/groups/team/statistics/docs"
    assert dict(request.url.params) == {
        "bookId": "10",
        "range": "30",
        "sortField": "read_count",
        "sortOrder": "desc",
    }


@pytest.mark.asyncio
async def test_raises_on_http_error(make_client: MakeClient) -> None:
    client = make_client(lambda _r: httpx.Response(401, json={"message": "Unauthorized"}))

    with pytest.raises(httpx.HTTPStatusError):
        await client.get_current_user()


@pytest.mark.asyncio
async def test_raises_on_transport_error(make_client: MakeClient) -> None:
    def refuse(_request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    client = make_client(refuse)

    with pytest.raises(httpx.ConnectError):
        await client.get_user_docs()
