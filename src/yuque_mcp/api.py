"""Yuque REST API client."""

from collections import Counter
from typing import Any

import httpx
from loguru import logger

from yuque_mcp.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, SERVER_NAME, SERVER_VERSION
from yuque_mcp.models import StatisticsFilters


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop unset values so the remote never sees ``null`` sentinels."""
    return {k: v for k, v in values.items() if v is not None}


class YuqueClient:
    """Async client for the Yuque v2 API.

    Holds the one piece of process-wide mutable state: the token/base URL
    pair. ``update_config`` swaps both the values and the underlying HTTP
    client in a single synchronous step, so every request sees either the old
    pair or the new one. Requests already in flight keep the client they
    started on; a replaced client is closed once its last request finishes.
    """

    def __init__(
        self,
        token: str = "",
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url
        self._transport = transport
        self._http = self._build_http()
        self._retired: list[httpx.AsyncClient] = []
        self._in_flight: Counter[httpx.AsyncClient] = Counter()

    @property
    def token(self) -> str:
        return self._token

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_http(self) -> httpx.AsyncClient:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": f"{SERVER_NAME}/{SERVER_VERSION}",
        }
        if self._token:
            headers["X-Auth-Token"] = self._token
        return httpx.AsyncClient(
            base_url=self._base_url.rstrip("/"),
            headers=headers,
            timeout=DEFAULT_TIMEOUT,
            transport=self._transport,
        )

    def update_config(self, token: str | None = None, base_url: str | None = None) -> None:
        """Replace the token and/or base URL for all subsequent requests."""
        if token is not None:
            self._token = token
        if base_url is not None:
            self._base_url = base_url
        self._retired.append(self._http)
        self._http = self._build_http()
        logger.debug(
            "API client reconfigured: base_url {!r}, token {}",
            self._base_url,
            "set" if self._token else "unset",
        )

    async def aclose(self) -> None:
        for http in self._retired:
            await http.aclose()
        self._retired.clear()
        await self._http.aclose()

    async def _close_idle_retired(self) -> None:
        idle = [http for http in self._retired if not self._in_flight[http]]
        for http in idle:
            self._retired.remove(http)
            await http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one request and return the ``data`` field of the envelope."""
        http = self._http
        logger.debug("Making request: {} {} {}", method, path, repr(params or body or {})[:64])
        self._in_flight[http] += 1
        try:
            response = await http.request(
                method,
                path,
                params=_compact(params) if params else None,
                json=_compact(body) if body is not None else None,
            )
        finally:
            self._in_flight[http] -= 1
            if not self._in_flight[http]:
                del self._in_flight[http]
            await self._close_idle_retired()
        response.raise_for_status()
        return response.json().get("data")

    # --- Users ---

    async def get_current_user(self) -> dict[str, Any]:
        return await self._request("GET", "/user")

    async def get_user_docs(
        self, *, offset: int | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]:
        return await self._request("GET", "/user/docs", params={"offset": offset, "limit": limit})

    # --- Repos ---

    async def get_user_repos(
        self,
        login: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        type: str | None = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            f"/users/{login}/repos",
            params={"offset": offset, "limit": limit, "type": type},
        )

    async def get_group_repos(
        self,
        login: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        type: str | None = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            f"/groups/{login}/repos",
            params={"offset": offset, "limit": limit, "type": type},
        )

    async def get_repo(self, namespace: str) -> dict[str, Any]:
        return await self._request("GET", f"/repos/{namespace}")

    async def create_repo(
        self,
        owner_login: str,
        *,
        name: str,
        slug: str,
        owner_type: str = "user",
        description: str | None = None,
        public: int | None = None,
    ) -> dict[str, Any]:
        """Create a repo under a user (``owner_type="user"``) or a group."""
        owner_path = "groups" if owner_type == "group" else "users"
        return await self._request(
            "POST",
            f"/{owner_path}/{owner_login}/repos",
            body={"name": name, "slug": slug, "description": description, "public": public},
        )

    async def update_repo(
        self,
        namespace: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        public: int | None = None,
        toc: str | None = None,
    ) -> dict[str, Any]:
        return await self._request(
            "PUT",
            f"/repos/{namespace}",
            body={
                "name": name,
                "slug": slug,
                "description": description,
                "public": public,
                "toc": toc,
            },
        )

    async def delete_repo(self, namespace: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/repos/{namespace}")

    # --- Docs ---

    async def get_repo_docs(
        self, namespace: str, *, offset: int | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET", f"/repos/{namespace}/docs", params={"offset": offset, "limit": limit}
        )

    async def get_doc(self, namespace: str, slug: str) -> dict[str, Any]:
        return await self._request("GET", f"/repos/{namespace}/docs/{slug}")

    async def create_doc(
        self,
        namespace: str,
        *,
        title: str,
        slug: str,
        body: str,
        format: str = "markdown",
        public: int = 1,
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/repos/{namespace}/docs",
            body={"title": title, "slug": slug, "body": body, "format": format, "public": public},
        )

    async def update_doc(
        self,
        namespace: str,
        doc_id: int,
        *,
        title: str | None = None,
        slug: str | None = None,
        body: str | None = None,
        format: str | None = None,
        public: int | None = None,
    ) -> dict[str, Any]:
        """Update only the fields that are given."""
        return await self._request(
            "PUT",
            f"/repos/{namespace}/docs/{doc_id}",
            body={"title": title, "slug": slug, "body": body, "format": format, "public": public},
        )

    async def delete_doc(self, namespace: str, doc_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/repos/{namespace}/docs/{doc_id}")

    # --- Versions ---

    async def get_doc_versions(self, doc_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", "/doc_versions", params={"doc_id": doc_id})

    async def get_doc_version(self, version_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/doc_versions/{version_id}")

    # --- Table of contents ---

    async def get_repo_toc(self, namespace: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/repos/{namespace}/toc")

    async def update_repo_toc(
        self,
        namespace: str,
        *,
        action: str,
        action_mode: str | None = None,
        target_uuid: str | None = None,
        node_uuid: str | None = None,
        doc_ids: list[int] | None = None,
        type: str | None = None,
        title: str | None = None,
        url: str | None = None,
        open_window: int | None = None,
        visible: int | None = None,
    ) -> list[dict[str, Any]]:
        """Apply one node edit to a repo's TOC and return the new tree."""
        return await self._request(
            "PUT",
            f"/repos/{namespace}/toc",
            body={
                "action": action,
                "action_mode": action_mode,
                "target_uuid": target_uuid,
                "node_uuid": node_uuid,
                "doc_ids": doc_ids,
                "type": type,
                "title": title,
                "url": url,
                "open_window": open_window,
                "visible": visible,
            },
        )

    # --- Search ---

    async def search(
        self,
        query: str,
        type: str,
        *,
        scope: str | None = None,
        page: int | None = None,
        offset: int | None = None,
        creator: str | None = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "/search",
            params={
                "q": query,
                "type": type,
                "scope": scope,
                "page": page,
                "offset": offset,
                "creator": creator,
            },
        )

    # --- Statistics ---

    async def get_group_statistics(self, login: str) -> dict[str, Any]:
        return await self._request("GET", f"/groups/{login}/statistics")

    async def get_group_member_statistics(
        self, login: str, filters: StatisticsFilters | None = None
    ) -> dict[str, Any]:
        params = (filters or StatisticsFilters()).to_params()
        return await self._request("GET", f"/groups/{login}/statistics/members", params=params)

    async def get_group_book_statistics(
        self, login: str, filters: StatisticsFilters | None = None
    ) -> dict[str, Any]:
        params = (filters or StatisticsFilters()).to_params()
        return await self._request("GET", f"/groups/{login}/statistics/books", params=params)

    async def get_group_doc_statistics(
        self,
        login: str,
        *,
        book_id: int | None = None,
        filters: StatisticsFilters | None = None,
    ) -> dict[str, Any]:
        params = {"bookId": book_id, **(filters or StatisticsFilters()).to_params()}
        return await self._request("GET", f"/groups/{login}/statistics/docs", params=params)
