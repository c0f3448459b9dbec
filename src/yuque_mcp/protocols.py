"""Protocols for dependency injection in the tool layer."""

from typing import Any, Protocol, runtime_checkable

from yuque_mcp.models import StatisticsFilters


@runtime_checkable
class ToolLog(Protocol):
    """Where tool progress lines go while a call runs."""

    async def info(self, message: str) -> None:
        """Report progress."""
        ...

    async def error(self, message: str) -> None:
        """Report a failed remote call."""
        ...


@runtime_checkable
class ClientProtocol(Protocol):
    """Protocol for Yuque API clients.

    Every method performs one remote call and returns the ``data`` payload,
    or raises when the call fails.
    """

    def update_config(self, token: str | None = None, base_url: str | None = None) -> None: ...

    async def get_current_user(self) -> dict[str, Any]: ...

    async def get_user_docs(
        self, *, offset: int | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]: ...

    async def get_user_repos(
        self,
        login: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        type: str | None = None,
    ) -> list[dict[str, Any]]: ...

    async def get_group_repos(
        self,
        login: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        type: str | None = None,
    ) -> list[dict[str, Any]]: ...

    async def get_repo(self, namespace: str) -> dict[str, Any]: ...

    async def create_repo(
        self,
        owner_login: str,
        *,
        name: str,
        slug: str,
        owner_type: str = "user",
        description: str | None = None,
        public: int | None = None,
    ) -> dict[str, Any]: ...

    async def update_repo(
        self,
        namespace: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        public: int | None = None,
        toc: str | None = None,
    ) -> dict[str, Any]: ...

    async def delete_repo(self, namespace: str) -> dict[str, Any]: ...

    async def get_repo_docs(
        self, namespace: str, *, offset: int | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]: ...

    async def get_doc(self, namespace: str, slug: str) -> dict[str, Any]: ...

    async def create_doc(
        self,
        namespace: str,
        *,
        title: str,
        slug: str,
        body: str,
        format: str = "markdown",
        public: int = 1,
    ) -> dict[str, Any]: ...

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
    ) -> dict[str, Any]: ...

    async def delete_doc(self, namespace: str, doc_id: int) -> dict[str, Any]: ...

    async def get_doc_versions(self, doc_id: int) -> list[dict[str, Any]]: ...

    async def get_doc_version(self, version_id: int) -> dict[str, Any]: ...

    async def get_repo_toc(self, namespace: str) -> list[dict[str, Any]]: ...

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
    ) -> list[dict[str, Any]]: ...

    async def search(
        self,
        query: str,
        type: str,
        *,
        scope: str | None = None,
        page: int | None = None,
        offset: int | None = None,
        creator: str | None = None,
    ) -> list[dict[str, Any]]: ...

    async def get_group_statistics(self, login: str) -> dict[str, Any]: ...

    async def get_group_member_statistics(
        self, login: str, filters: StatisticsFilters | None = None
    ) -> dict[str, Any]: ...

    async def get_group_book_statistics(
        self, login: str, filters: StatisticsFilters | None = None
    ) -> dict[str, Any]: ...

    async def get_group_doc_statistics(
        self,
        login: str,
        *,
        book_id: int | None = None,
        filters: StatisticsFilters | None = None,
    ) -> dict[str, Any]: ...
