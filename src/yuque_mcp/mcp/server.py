"""MCP server exposing Yuque knowledge-base tools."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated, Any, Literal

import httpx
from mcp.server.fastmcp import Context, FastMCP
from pydantic import Field

from yuque_mcp.config import SERVER_NAME
from yuque_mcp.models import (
    DocFormat,
    SearchType,
    StatisticsFilters,
    TocAction,
    TocActionMode,
    TocNodeType,
    Visibility,
)
from yuque_mcp.protocols import ClientProtocol, ToolLog
from yuque_mcp.results import Err, Ok, ToolResult
from yuque_mcp.tool_log import NULL_LOG, ContextToolLog

Offset = Annotated[int, Field(ge=0)]
Page = Annotated[int, Field(ge=1)]
ListLimit = Annotated[int, Field(ge=1, le=100)]
StatsLimit = Annotated[int, Field(ge=1, le=20)]
StatsRange = Literal[0, 30, 365]
SortOrder = Literal["desc", "asc"]


def _describe(exc: Exception) -> str:
    """Human-readable message for a failed remote call."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        detail = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            detail = f": {body['message']}"
        return f"{response.status_code} {response.reason_phrase} for {exc.request.url}{detail}"
    return str(exc) or type(exc).__name__


def _count(data: Any) -> int:
    return len(data) if isinstance(data, list) else 0


def _field(data: Any, key: str, default: Any = None) -> Any:
    return data.get(key, default) if isinstance(data, dict) else default


async def _run(
    log: ToolLog,
    *,
    action: str,
    started: str,
    call: Callable[[], Awaitable[Any]],
    done: Callable[[Any], str],
) -> ToolResult:
    """Perform one remote call and wrap its outcome.

    Never raises for a failed call: the failure becomes an ``Err`` whose
    rendered text the client reads like any other result.
    """
    await log.info(started)
    try:
        data = await call()
    except Exception as e:
        message = _describe(e)
        await log.error(f"Error {action}: {message}")
        return Err(action, message)
    await log.info(done(data))
    return Ok(data)


# --- Core functions (testable without MCP context) ---


async def get_current_user(client: ClientProtocol, *, log: ToolLog = NULL_LOG) -> ToolResult:
    """Fetch the authenticated user's profile."""
    return await _run(
        log,
        action="fetching current user",
        started="Fetching current user information",
        call=client.get_current_user,
        done=lambda user: f"Successfully fetched user: {_field(user, 'name')}",
    )


async def get_user_docs(
    client: ClientProtocol,
    *,
    offset: int | None = None,
    limit: int | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching user docs",
        started="Fetching user's documents",
        call=lambda: client.get_user_docs(offset=offset, limit=limit),
        done=lambda docs: f"Successfully fetched {_count(docs)} documents",
    )


async def get_user_repos(
    client: ClientProtocol,
    *,
    login: str,
    offset: int | None = None,
    limit: int | None = None,
    type: str | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching repos",
        started=f"Fetching repositories for user: {login}",
        call=lambda: client.get_user_repos(login, offset=offset, limit=limit, type=type),
        done=lambda repos: f"Successfully fetched {_count(repos)} repositories",
    )


async def get_group_repos(
    client: ClientProtocol,
    *,
    login: str,
    offset: int | None = None,
    limit: int | None = None,
    type: str | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching group repos",
        started=f"Fetching repositories for group: {login}",
        call=lambda: client.get_group_repos(login, offset=offset, limit=limit, type=type),
        done=lambda repos: f"Successfully fetched {_count(repos)} repositories",
    )


async def get_repo(
    client: ClientProtocol, *, namespace: str, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching repo",
        started=f"Fetching repository: {namespace}",
        call=lambda: client.get_repo(namespace),
        done=lambda repo: f"Successfully fetched repository: {namespace}",
    )


async def create_repo(
    client: ClientProtocol,
    *,
    login: str,
    name: str,
    slug: str,
    owner_type: Literal["user", "group"] = "user",
    description: str | None = None,
    public: int = 1,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    """Create a repo owned by a user or a group."""
    return await _run(
        log,
        action="creating repo",
        started=f'Creating repository "{name}" for {owner_type}: {login}',
        call=lambda: client.create_repo(
            login,
            name=name,
            slug=slug,
            owner_type=owner_type,
            description=description,
            public=public,
        ),
        done=lambda repo: f"Successfully created repository: {login}/{slug}",
    )


async def update_repo(
    client: ClientProtocol,
    *,
    namespace: str,
    name: str | None = None,
    slug: str | None = None,
    description: str | None = None,
    public: int | None = None,
    toc: str | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="updating repo",
        started=f"Updating repository: {namespace}",
        call=lambda: client.update_repo(
            namespace, name=name, slug=slug, description=description, public=public, toc=toc
        ),
        done=lambda repo: f"Successfully updated repository: {namespace}",
    )


async def delete_repo(
    client: ClientProtocol, *, namespace: str, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="deleting repo",
        started=f"Deleting repository: {namespace}",
        call=lambda: client.delete_repo(namespace),
        done=lambda repo: f"Successfully deleted repository: {namespace}",
    )


async def get_repo_docs(
    client: ClientProtocol,
    *,
    namespace: str,
    offset: int | None = None,
    limit: int | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching docs",
        started=f"Fetching documents for repository: {namespace}",
        call=lambda: client.get_repo_docs(namespace, offset=offset, limit=limit),
        done=lambda docs: f"Successfully fetched {_count(docs)} documents",
    )


async def get_doc(
    client: ClientProtocol, *, namespace: str, slug: str, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching doc",
        started=f"Fetching document {slug} from repository: {namespace}",
        call=lambda: client.get_doc(namespace, slug),
        done=lambda doc: f"Successfully fetched document: {_field(doc, 'title', slug)}",
    )


async def create_doc(
    client: ClientProtocol,
    *,
    namespace: str,
    title: str,
    slug: str,
    body: str,
    format: str = "markdown",
    public: int = 1,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    """Create a doc. Defaults to a public markdown document."""
    return await _run(
        log,
        action="creating doc",
        started=f'Creating document "{title}" in repository: {namespace}',
        call=lambda: client.create_doc(
            namespace, title=title, slug=slug, body=body, format=format, public=public
        ),
        done=lambda doc: f"Successfully created document: {title}",
    )


async def update_doc(
    client: ClientProtocol,
    *,
    namespace: str,
    id: int,
    title: str | None = None,
    slug: str | None = None,
    body: str | None = None,
    format: str | None = None,
    public: int | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    """Update the given fields of a doc; omitted fields are left as they are."""
    return await _run(
        log,
        action="updating doc",
        started=f"Updating document {id} in repository: {namespace}",
        call=lambda: client.update_doc(
            namespace, id, title=title, slug=slug, body=body, format=format, public=public
        ),
        done=lambda doc: f"Successfully updated document: {id}",
    )


async def delete_doc(
    client: ClientProtocol, *, namespace: str, id: int, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="deleting doc",
        started=f"Deleting document {id} from repository: {namespace}",
        call=lambda: client.delete_doc(namespace, id),
        done=lambda doc: f"Successfully deleted document {id}",
    )


async def get_doc_versions(
    client: ClientProtocol, *, doc_id: int, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching doc versions",
        started=f"Fetching versions of document {doc_id}",
        call=lambda: client.get_doc_versions(doc_id),
        done=lambda versions: f"Successfully fetched {_count(versions)} versions",
    )


async def get_doc_version(
    client: ClientProtocol, *, version_id: int, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching doc version",
        started=f"Fetching document version {version_id}",
        call=lambda: client.get_doc_version(version_id),
        done=lambda version: f"Successfully fetched document version {version_id}",
    )


async def get_repo_toc(
    client: ClientProtocol, *, namespace: str, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching repo toc",
        started=f"Fetching table of contents for repository: {namespace}",
        call=lambda: client.get_repo_toc(namespace),
        done=lambda toc: f"Successfully fetched {_count(toc)} toc items",
    )


async def update_repo_toc(
    client: ClientProtocol,
    *,
    namespace: str,
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
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    """Apply one node edit to a repo's table of contents."""
    return await _run(
        log,
        action="updating repo toc",
        started=f"Updating table of contents for repository {namespace}: {action}",
        call=lambda: client.update_repo_toc(
            namespace,
            action=action,
            action_mode=action_mode,
            target_uuid=target_uuid,
            node_uuid=node_uuid,
            doc_ids=doc_ids,
            type=type,
            title=title,
            url=url,
            open_window=open_window,
            visible=visible,
        ),
        done=lambda toc: f"Successfully updated toc, now {_count(toc)} items",
    )


async def search(
    client: ClientProtocol,
    *,
    query: str,
    type: str,
    scope: str | None = None,
    page: int | None = None,
    offset: int | None = None,
    creator: str | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    """Full-text search over docs or repos."""
    return await _run(
        log,
        action="searching",
        started=f"Searching for: {query} with type: {type}",
        call=lambda: client.search(
            query, type, scope=scope, page=page, offset=offset, creator=creator
        ),
        done=lambda results: f"Successfully found {_count(results)} results",
    )


async def get_group_statistics(
    client: ClientProtocol, *, login: str, log: ToolLog = NULL_LOG
) -> ToolResult:
    return await _run(
        log,
        action="fetching group statistics",
        started=f"Fetching statistics for group: {login}",
        call=lambda: client.get_group_statistics(login),
        done=lambda stats: f"Successfully fetched statistics for group: {login}",
    )


async def get_group_member_statistics(
    client: ClientProtocol,
    *,
    login: str,
    filters: StatisticsFilters | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching group member statistics",
        started=f"Fetching member statistics for group: {login}",
        call=lambda: client.get_group_member_statistics(login, filters),
        done=lambda stats: f"Successfully fetched member statistics for group: {login}",
    )


async def get_group_book_statistics(
    client: ClientProtocol,
    *,
    login: str,
    filters: StatisticsFilters | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching group book statistics",
        started=f"Fetching repository statistics for group: {login}",
        call=lambda: client.get_group_book_statistics(login, filters),
        done=lambda stats: f"Successfully fetched repository statistics for group: {login}",
    )


async def get_group_doc_statistics(
    client: ClientProtocol,
    *,
    login: str,
    book_id: int | None = None,
    filters: StatisticsFilters | None = None,
    log: ToolLog = NULL_LOG,
) -> ToolResult:
    return await _run(
        log,
        action="fetching group doc statistics",
        started=f"Fetching document statistics for group: {login}",
        call=lambda: client.get_group_doc_statistics(login, book_id=book_id, filters=filters),
        done=lambda stats: f"Successfully fetched document statistics for group: {login}",
    )


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime.

    ``client`` is the same object for every session. Credentials overridden
    by one SSE connection apply to all of them.
    """

    client: ClientProtocol


INSTRUCTIONS = """\
Tools for the Yuque knowledge base. Repositories ("books") are addressed by
namespace, always written as `owner-login/repo-slug`.

## Tips
- Use get_user_repos or get_group_repos to discover namespaces, then
  get_repo_docs to list the docs in one, then get_doc with a doc slug.
- update_doc and delete_doc take the numeric doc id, not the slug.
- Visibility (`public`): 0 private, 1 public, 2 visible to the organization.
- A result starting with "Error " means the remote call failed; the rest of
  the text says why.
"""

_TOOLS: dict[str, Callable[..., Awaitable[str]]] = {}


def _tool(name: str) -> Callable[[Callable[..., Awaitable[str]]], Callable[..., Awaitable[str]]]:
    def register(fn: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[str]]:
        _TOOLS[name] = fn
        return fn

    return register


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


def _bound(mcp_ctx: Context) -> tuple[ClientProtocol, ToolLog]:
    return _ctx(mcp_ctx).client, ContextToolLog(mcp_ctx)


def describe_tools() -> list[tuple[str, str]]:
    """Name and one-line summary of every registered tool."""
    return [(name, (fn.__doc__ or "").strip().splitlines()[0]) for name, fn in _TOOLS.items()]


def create_server(client: ClientProtocol) -> FastMCP:
    """Build a FastMCP server whose tools all talk through ``client``."""

    @asynccontextmanager
    async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
        yield ServerContext(client=client)

    server = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS, lifespan=server_lifespan)
    for name, fn in _TOOLS.items():
        server.add_tool(fn, name=name)
    return server


# --- MCP Tool Wrappers ---


@_tool("get_current_user")
async def get_current_user_tool(ctx: Context) -> str:
    """Get the authenticated user's profile: id, login, name, avatar and counts."""
    client, log = _bound(ctx)
    result = await get_current_user(client, log=log)
    return result.render()


@_tool("get_user_docs")
async def get_user_docs_tool(
    ctx: Context, offset: Offset | None = None, limit: ListLimit | None = None
) -> str:
    """List all docs of the current user, both personal and collaborative.

    Args:
        offset: Pagination offset.
        limit: Max results (1-100).
    """
    client, log = _bound(ctx)
    result = await get_user_docs(client, offset=offset, limit=limit, log=log)
    return result.render()


@_tool("get_user_repos")
async def get_user_repos_tool(
    ctx: Context,
    login: str,
    offset: Offset | None = None,
    limit: ListLimit | None = None,
    type: Literal["Book", "Design"] | None = None,
) -> str:
    """List the repositories (knowledge bases) owned by a user.

    Args:
        login: The user's login name.
        offset: Pagination offset.
        limit: Max results (1-100).
        type: Repo type filter, "Book" or "Design".
    """
    client, log = _bound(ctx)
    result = await get_user_repos(
        client, login=login, offset=offset, limit=limit, type=type, log=log
    )
    return result.render()


@_tool("get_group_repos")
async def get_group_repos_tool(
    ctx: Context,
    login: str,
    offset: Offset | None = None,
    limit: ListLimit | None = None,
    type: Literal["Book", "Design"] | None = None,
) -> str:
    """List the repositories owned by a group (team).

    Args:
        login: The group's login name.
        offset: Pagination offset.
        limit: Max results (1-100).
        type: Repo type filter, "Book" or "Design".
    """
    client, log = _bound(ctx)
    result = await get_group_repos(
        client, login=login, offset=offset, limit=limit, type=type, log=log
    )
    return result.render()


@_tool("get_repo")
async def get_repo_tool(ctx: Context, namespace: str) -> str:
    """Get a repository's details.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
    """
    client, log = _bound(ctx)
    return (await get_repo(client, namespace=namespace, log=log)).render()


@_tool("create_repo")
async def create_repo_tool(
    ctx: Context,
    login: str,
    name: str,
    slug: str,
    owner_type: Literal["user", "group"] = "user",
    description: str | None = None,
    public: Visibility = Visibility.PUBLIC,
) -> str:
    """Create a repository for a user or a group.

    Args:
        login: Login of the owning user or group.
        name: Display name.
        slug: Path segment used in the namespace.
        owner_type: "user" (default) or "group".
        description: Optional description.
        public: 0 private, 1 public (default), 2 organization only.
    """
    client, log = _bound(ctx)
    result = await create_repo(
        client,
        login=login,
        name=name,
        slug=slug,
        owner_type=owner_type,
        description=description,
        public=public,
        log=log,
    )
    return result.render()


@_tool("update_repo")
async def update_repo_tool(
    ctx: Context,
    namespace: str,
    name: str | None = None,
    slug: str | None = None,
    description: str | None = None,
    public: Visibility | None = None,
    toc: str | None = None,
) -> str:
    """Update a repository's name, slug, description, visibility or TOC markdown.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        name: New display name.
        slug: New slug.
        description: New description.
        public: 0 private, 1 public, 2 organization only.
        toc: Table of contents as markdown.
    """
    client, log = _bound(ctx)
    result = await update_repo(
        client,
        namespace=namespace,
        name=name,
        slug=slug,
        description=description,
        public=public,
        toc=toc,
        log=log,
    )
    return result.render()


@_tool("delete_repo")
async def delete_repo_tool(ctx: Context, namespace: str) -> str:
    """Delete a repository and every doc in it. This cannot be undone.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
    """
    client, log = _bound(ctx)
    return (await delete_repo(client, namespace=namespace, log=log)).render()


@_tool("get_repo_docs")
async def get_repo_docs_tool(
    ctx: Context, namespace: str, offset: Offset | None = None, limit: ListLimit | None = None
) -> str:
    """List the docs in a repository, with titles and update times.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        offset: Pagination offset.
        limit: Max results (1-100).
    """
    client, log = _bound(ctx)
    result = await get_repo_docs(client, namespace=namespace, offset=offset, limit=limit, log=log)
    return result.render()


@_tool("get_doc")
async def get_doc_tool(ctx: Context, namespace: str, slug: str) -> str:
    """Get a doc's full content and metadata.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        slug: The doc's slug (or numeric id).
    """
    client, log = _bound(ctx)
    return (await get_doc(client, namespace=namespace, slug=slug, log=log)).render()


@_tool("create_doc")
async def create_doc_tool(
    ctx: Context,
    namespace: str,
    title: str,
    slug: str,
    body: str,
    format: DocFormat = DocFormat.MARKDOWN,
    public: Visibility = Visibility.PUBLIC,
) -> str:
    """Create a doc in a repository.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        title: Doc title.
        slug: Path segment for the doc URL.
        body: Doc content in the given format.
        format: "markdown" (default), "html" or "lake".
        public: 0 private, 1 public (default), 2 organization only.
    """
    client, log = _bound(ctx)
    result = await create_doc(
        client,
        namespace=namespace,
        title=title,
        slug=slug,
        body=body,
        format=format,
        public=public,
        log=log,
    )
    return result.render()


@_tool("update_doc")
async def update_doc_tool(
    ctx: Context,
    namespace: str,
    id: int,
    title: str | None = None,
    slug: str | None = None,
    body: str | None = None,
    format: DocFormat | None = None,
    public: Visibility | None = None,
) -> str:
    """Update an existing doc's title, slug, content or visibility.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        id: Numeric doc id.
        title: New title.
        slug: New slug.
        body: New content.
        format: Format of the new content.
        public: 0 private, 1 public, 2 organization only.
    """
    client, log = _bound(ctx)
    result = await update_doc(
        client,
        namespace=namespace,
        id=id,
        title=title,
        slug=slug,
        body=body,
        format=format,
        public=public,
        log=log,
    )
    return result.render()


@_tool("delete_doc")
async def delete_doc_tool(ctx: Context, namespace: str, id: int) -> str:
    """Delete a doc from a repository. This cannot be undone.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        id: Numeric doc id.
    """
    client, log = _bound(ctx)
    return (await delete_doc(client, namespace=namespace, id=id, log=log)).render()


@_tool("get_doc_versions")
async def get_doc_versions_tool(ctx: Context, doc_id: int) -> str:
    """List the saved versions of a doc.

    Args:
        doc_id: Numeric doc id.
    """
    client, log = _bound(ctx)
    return (await get_doc_versions(client, doc_id=doc_id, log=log)).render()


@_tool("get_doc_version")
async def get_doc_version_tool(ctx: Context, version_id: int) -> str:
    """Get one saved version of a doc, including its content.

    Args:
        version_id: Numeric version id from get_doc_versions.
    """
    client, log = _bound(ctx)
    return (await get_doc_version(client, version_id=version_id, log=log)).render()


@_tool("get_repo_toc")
async def get_repo_toc_tool(ctx: Context, namespace: str) -> str:
    """Get a repository's table of contents as a flat list of linked nodes.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
    """
    client, log = _bound(ctx)
    return (await get_repo_toc(client, namespace=namespace, log=log)).render()


@_tool("update_repo_toc")
async def update_repo_toc_tool(
    ctx: Context,
    namespace: str,
    action: TocAction,
    action_mode: TocActionMode | None = None,
    target_uuid: str | None = None,
    node_uuid: str | None = None,
    doc_ids: list[int] | None = None,
    type: TocNodeType | None = None,
    title: str | None = None,
    url: str | None = None,
    open_window: Literal[0, 1] | None = None,
    visible: Literal[0, 1] | None = None,
) -> str:
    """Add, move, edit or remove one node in a repository's table of contents.

    Args:
        namespace: Repository namespace, "owner-login/repo-slug".
        action: appendNode, prependNode, editNode or removeNode.
        action_mode: "sibling" or "child" (relative to target_uuid).
        target_uuid: Node the action is relative to; defaults to the root.
        node_uuid: Node to edit or remove.
        doc_ids: Doc ids to insert, for DOC nodes.
        type: DOC, LINK or TITLE.
        title: Node title, for LINK and TITLE nodes.
        url: Link target, for LINK nodes.
        open_window: 1 opens a LINK node in a new window.
        visible: 0 hides the node.
    """
    client, log = _bound(ctx)
    result = await update_repo_toc(
        client,
        namespace=namespace,
        action=action,
        action_mode=action_mode,
        target_uuid=target_uuid,
        node_uuid=node_uuid,
        doc_ids=doc_ids,
        type=type,
        title=title,
        url=url,
        open_window=open_window,
        visible=visible,
        log=log,
    )
    return result.render()


@_tool("search")
async def search_tool(
    ctx: Context,
    query: str,
    type: SearchType,
    scope: str | None = None,
    page: Page | None = None,
    offset: Offset | None = None,
    creator: str | None = None,
) -> str:
    """Search Yuque for docs or repositories.

    Args:
        query: Search keywords.
        type: "doc" or "repo".
        scope: Limit to a group or repo path, e.g. "group-login" or "owner/repo".
        page: Page number, starting at 1.
        offset: Result offset.
        creator: Only results created by this login.
    """
    client, log = _bound(ctx)
    result = await search(
        client,
        query=query,
        type=type,
        scope=scope,
        page=page,
        offset=offset,
        creator=creator,
        log=log,
    )
    return result.render()


@_tool("get_group_statistics")
async def get_group_statistics_tool(ctx: Context, login: str) -> str:
    """Get summary statistics for a group: members, repos, docs, reads, likes.

    Args:
        login: The group's login name.
    """
    client, log = _bound(ctx)
    return (await get_group_statistics(client, login=login, log=log)).render()


@_tool("get_group_member_statistics")
async def get_group_member_statistics_tool(
    ctx: Context,
    login: str,
    name: str | None = None,
    range: StatsRange | None = None,
    page: Page | None = None,
    limit: StatsLimit | None = None,
    sort_field: str | None = None,
    sort_order: SortOrder | None = None,
) -> str:
    """Get per-member statistics for a group.

    Args:
        login: The group's login name.
        name: Filter by member name.
        range: 0 all time, 30 or 365 last days.
        page: Page number, starting at 1.
        limit: Page size (max 20).
        sort_field: Field to sort by, e.g. "write_doc_count".
        sort_order: "desc" or "asc".
    """
    client, log = _bound(ctx)
    filters = StatisticsFilters(
        name=name,
        range=range,
        page=page,
        limit=limit,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    result = await get_group_member_statistics(client, login=login, filters=filters, log=log)
    return result.render()


@_tool("get_group_book_statistics")
async def get_group_book_statistics_tool(
    ctx: Context,
    login: str,
    name: str | None = None,
    range: StatsRange | None = None,
    page: Page | None = None,
    limit: StatsLimit | None = None,
    sort_field: str | None = None,
    sort_order: SortOrder | None = None,
) -> str:
    """Get per-repository statistics for a group.

    Args:
        login: The group's login name.
        name: Filter by repository name.
        range: 0 all time, 30 or 365 last days.
        page: Page number, starting at 1.
        limit: Page size (max 20).
        sort_field: Field to sort by, e.g. "read_count".
        sort_order: "desc" or "asc".
    """
    client, log = _bound(ctx)
    filters = StatisticsFilters(
        name=name,
        range=range,
        page=page,
        limit=limit,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    result = await get_group_book_statistics(client, login=login, filters=filters, log=log)
    return result.render()


@_tool("get_group_doc_statistics")
async def get_group_doc_statistics_tool(
    ctx: Context,
    login: str,
    book_id: int | None = None,
    name: str | None = None,
    range: StatsRange | None = None,
    page: Page | None = None,
    limit: StatsLimit | None = None,
    sort_field: str | None = None,
    sort_order: SortOrder | None = None,
) -> str:
    """Get per-doc statistics for a group, optionally within one repository.

    Args:
        login: The group's login name.
        book_id: Only docs of this repository id.
        name: Filter by doc title.
        range: 0 all time, 30 or 365 last days.
        page: Page number, starting at 1.
        limit: Page size (max 20).
        sort_field: Field to sort by, e.g. "read_count".
        sort_order: "desc" or "asc".
    """
    client, log = _bound(ctx)
    filters = StatisticsFilters(
        name=name,
        range=range,
        page=page,
        limit=limit,
        sort_field=sort_field,
        sort_order=sort_order,
    )
    result = await get_group_doc_statistics(
        client, login=login, book_id=book_id, filters=filters, log=log
    )
    return result.render()
