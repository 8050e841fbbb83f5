"""Typed command records built from parsed arguments.

Each supported invocation maps to exactly one record. Building a record is
the only place where flags are interpreted, so validation failures surface
before any profile is loaded or client constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .args import ParsedArgs, drop_unset, parse_id_list, parse_list_query, parse_number
from .cli_shared import UnknownCommand, UsageError

DELETE_MANY_DEFAULT_PER_PAGE = 100
DEFAULT_CREATE_STATUS = "draft"


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class SiteInfo:
    pass


@dataclass(frozen=True)
class PostQuery:
    status: str | None = None
    search: str | None = None
    categories: str | None = None
    tags: str | None = None
    after: str | None = None
    before: str | None = None
    page: int | float | None = None
    per_page: int | float | None = None
    orderby: str | None = None
    order: str | None = None

    def params(self) -> dict[str, Any]:
        return drop_unset(
            {
                "status": self.status,
                "search": self.search,
                "categories": self.categories,
                "tags": self.tags,
                "after": self.after,
                "before": self.before,
                "page": self.page,
                "per_page": self.per_page,
                "orderby": self.orderby,
                "order": self.order,
            }
        )


@dataclass(frozen=True)
class PostFields:
    title: str | None = None
    content: str | None = None
    status: str | None = None
    date: str | None = None
    categories: list[int | float | str] | None = None
    tags: list[int | float | str] | None = None

    def data(self) -> dict[str, Any]:
        return drop_unset(
            {
                "title": self.title,
                "content": self.content,
                "status": self.status,
                "date": self.date,
                "categories": self.categories,
                "tags": self.tags,
            }
        )


@dataclass(frozen=True)
class ListPosts:
    query: PostQuery = field(default_factory=PostQuery)


@dataclass(frozen=True)
class GetPost:
    post_id: str


@dataclass(frozen=True)
class CreatePost:
    fields: PostFields


@dataclass(frozen=True)
class UpdatePost:
    post_id: str
    fields: PostFields


@dataclass(frozen=True)
class DeletePost:
    post_id: str


@dataclass(frozen=True)
class DeleteManyPosts:
    query: PostQuery
    dry_run: bool


Command = Union[
    Help,
    SiteInfo,
    ListPosts,
    GetPost,
    CreatePost,
    UpdatePost,
    DeletePost,
    DeleteManyPosts,
]


def _filter_query(parsed: ParsedArgs, *, per_page_default: int | None = None) -> dict[str, Any]:
    per_page = parse_number(parsed.text("per_page"))
    return {
        "status": parsed.text("status"),
        "search": parsed.text("search"),
        "categories": parse_list_query(parsed.text("categories")),
        "tags": parse_list_query(parsed.text("tags")),
        "after": parsed.text("after"),
        "before": parsed.text("before"),
        "page": parse_number(parsed.text("page")),
        "per_page": per_page or per_page_default,
    }


def _require_post_id(parsed: ParsedArgs) -> str:
    post_id = (parsed.positional(2) or "").strip()
    if not post_id:
        raise UsageError("Post ID required.")
    return post_id


def _read_content(parsed: ParsedArgs) -> str:
    path = parsed.text("content-file")
    if path:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise UsageError(f"failed to read --content-file: {e}") from e
    return parsed.text("content") or ""


def _content_given(parsed: ParsedArgs) -> bool:
    return parsed.has("content") or parsed.has("content-file")


def _build_posts(parsed: ParsedArgs, subcommand: str | None) -> Command | None:
    if subcommand == "list":
        return ListPosts(
            query=PostQuery(
                **_filter_query(parsed),
                orderby=parsed.text("orderby"),
                order=parsed.text("order"),
            )
        )

    if subcommand == "get":
        return GetPost(post_id=_require_post_id(parsed))

    if subcommand == "create":
        title = parsed.text("title")
        if not title:
            raise UsageError("--title is required.")
        return CreatePost(
            fields=PostFields(
                title=title,
                content=_read_content(parsed),
                status=parsed.text("status") or DEFAULT_CREATE_STATUS,
                date=parsed.text("date"),
                categories=parse_id_list(parsed.text("categories")),
                tags=parse_id_list(parsed.text("tags")),
            )
        )

    if subcommand == "update":
        post_id = _require_post_id(parsed)
        return UpdatePost(
            post_id=post_id,
            fields=PostFields(
                title=parsed.text("title"),
                content=_read_content(parsed) if _content_given(parsed) else None,
                status=parsed.text("status"),
                date=parsed.text("date"),
                categories=parse_id_list(parsed.text("categories")),
                tags=parse_id_list(parsed.text("tags")),
            ),
        )

    if subcommand == "delete":
        return DeletePost(post_id=_require_post_id(parsed))

    if subcommand == "delete-many":
        # Destructive only with --confirm and without --dry-run.
        dry_run = not parsed.has("confirm") or parsed.has("dry-run")
        return DeleteManyPosts(
            query=PostQuery(**_filter_query(parsed, per_page_default=DELETE_MANY_DEFAULT_PER_PAGE)),
            dry_run=dry_run,
        )

    return None


def build_command(parsed: ParsedArgs) -> Command:
    command = parsed.positional(0)
    subcommand = parsed.positional(1)

    if not command or command in ("help", "--help") or parsed.has("help"):
        return Help()

    built: Command | None = None
    if command == "site" and subcommand == "info":
        built = SiteInfo()
    elif command == "posts":
        built = _build_posts(parsed, subcommand)

    if built is None:
        raise UnknownCommand(f'Unknown command "{command} {subcommand or ""}". Use "help" for usage.')
    return built
