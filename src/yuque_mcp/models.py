"""Domain models for Yuque resources.

The API client hands back the remote ``data`` payload untouched; these
dataclasses document the fields the tools rely on and are used to build
fixtures in tests.
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class Visibility(IntEnum):
    """Visibility level of a doc or repo."""

    PRIVATE = 0
    PUBLIC = 1
    ORGANIZATION = 2


class DocFormat(StrEnum):
    """Body format accepted when writing a doc."""

    MARKDOWN = "markdown"
    HTML = "html"
    LAKE = "lake"


class SearchType(StrEnum):
    DOC = "doc"
    REPO = "repo"


class TocAction(StrEnum):
    APPEND = "appendNode"
    PREPEND = "prependNode"
    EDIT = "editNode"
    REMOVE = "removeNode"


class TocActionMode(StrEnum):
    SIBLING = "sibling"
    CHILD = "child"


class TocNodeType(StrEnum):
    DOC = "DOC"
    LINK = "LINK"
    TITLE = "TITLE"


@dataclass(frozen=True)
class User:
    """A Yuque account."""

    id: int
    login: str
    name: str
    type: str = "User"
    description: str | None = None
    avatar_url: str | None = None
    books_count: int = 0
    public_books_count: int = 0
    followers_count: int = 0
    following_count: int = 0


@dataclass(frozen=True)
class Group:
    """A team. Shares the user endpoint shape with ``type == "Group"``."""

    id: int
    login: str
    name: str
    type: str = "Group"
    description: str | None = None
    members_count: int = 0
    books_count: int = 0
    public_books_count: int = 0


@dataclass(frozen=True)
class Repo:
    """A knowledge base ("book" in the remote API)."""

    id: int
    namespace: str
    name: str
    slug: str
    user_id: int
    type: str = "Book"
    description: str | None = None
    public: Visibility = Visibility.PUBLIC
    items_count: int = 0
    likes_count: int = 0
    watches_count: int = 0


@dataclass(frozen=True)
class Doc:
    """A single document inside a repo."""

    id: int
    slug: str
    title: str
    book_id: int
    format: DocFormat = DocFormat.MARKDOWN
    public: Visibility = Visibility.PUBLIC
    body: str | None = None
    word_count: int = 0
    likes_count: int = 0
    read_count: int = 0


@dataclass(frozen=True)
class DocVersion:
    """A saved revision of a doc."""

    id: int
    doc_id: int
    slug: str
    title: str
    user_id: int


@dataclass(frozen=True)
class TocItem:
    """One node in a repo's table of contents tree."""

    uuid: str
    type: TocNodeType
    title: str
    level: int = 0
    visible: int = 1
    url: str = ""
    doc_id: int | None = None
    parent_uuid: str = ""
    prev_uuid: str = ""
    sibling_uuid: str = ""
    child_uuid: str = ""


@dataclass(frozen=True)
class SearchResult:
    """A ranked search hit; ``target`` is the matched doc or repo."""

    id: int
    type: SearchType
    title: str
    summary: str
    url: str
    target: dict[str, object] | None = None


@dataclass(frozen=True)
class StatisticsFilters:
    """Filters shared by the member, book and doc statistics endpoints."""

    name: str | None = None
    range: int | None = None
    page: int | None = None
    limit: int | None = None
    sort_field: str | None = None
    sort_order: str | None = None

    def to_params(self) -> dict[str, str | int]:
        """Render as query parameters, dropping unset filters."""
        params = {
            "name": self.name,
            "range": self.range,
            "page": self.page,
            "limit": self.limit,
            "sortField": self.sort_field,
            "sortOrder": self.sort_order,
        }
        return {k: v for k, v in params.items() if v is not None}
