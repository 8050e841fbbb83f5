from __future__ import annotations

import asyncio
import os
import sys
from typing import Any

import click
import typer
from dotenv import load_dotenv

from . import __version__
from .args import ParsedArgs, parse_args
from .cli_shared import (
    DEFAULT_PROFILE,
    WP_PROFILE,
    GlobalOpts,
    OpError,
    UsageError,
    WpContentError,
    _env_or_none,
    _rich_error,
)
from .client import ContentClient
from .client_factory import build_client
from .commands import (
    Command,
    CreatePost,
    DeleteManyPosts,
    DeletePost,
    GetPost,
    Help,
    ListPosts,
    SiteInfo,
    UpdatePost,
    build_command,
)
from .output import format_output, print_post_list, rendered_title
from .profiles import load_profile

HELP_TEXT = """
WordPress Content Manager

Usage:
  wp-content site info [--json]
  wp-content posts list [--status <status>] [--search <text>] [--categories 1,2] [--tags 3,4] [--after <date>] [--before <date>] [--page <n>] [--per_page <n>] [--orderby <field>] [--order asc|desc] [--json]
  wp-content posts get <id> [--json]
  wp-content posts create --title <title> [--content <html>] [--content-file <path>] [--status <status>] [--date <iso>] [--categories 1,2] [--tags 3,4]
  wp-content posts update <id> [--title <title>] [--content <html>] [--content-file <path>] [--status <status>] [--date <iso>] [--categories 1,2] [--tags 3,4]
  wp-content posts delete <id>
  wp-content posts delete-many [filters] [--dry-run] [--confirm]

Profiles:
  --profile <name> or WP_PROFILE=<name>

Environment:
  WP_USERNAME, WP_APP_PASSWORD  application password credentials (required)
  WP_SITE_URL, WP_API_URL       override profile site_url/api_url
  WP_CLI_PATH                   override profile cli_path (client import path)
  WP_PROFILES_DIR               directory holding <profile>.json files
"""


app = typer.Typer(
    name="wp-content",
    help="Manage WordPress posts through the REST API.",
    add_completion=False,
)


def _bootstrap_env() -> None:
    # Discover and load .env without overriding already-exported values.
    load_dotenv()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wp-content {__version__}")
        raise typer.Exit(code=0)


def _global_opts(parsed: ParsedArgs) -> GlobalOpts:
    return GlobalOpts(
        profile=parsed.text("profile") or _env_or_none(WP_PROFILE) or DEFAULT_PROFILE,
        json_output=parsed.has("json"),
        quiet=parsed.has("quiet"),
    )


async def _delete_many(client: ContentClient, cmd: DeleteManyPosts, g: GlobalOpts) -> dict[str, Any]:
    posts = await client.list_posts(cmd.query.params())
    if cmd.dry_run:
        summary = [
            {"id": p.get("id"), "title": rendered_title(p), "status": p.get("status")}
            for p in posts
        ]
        return {"dry_run": True, "count": len(summary), "posts": summary}

    results: list[dict[str, Any]] = []
    for post in posts:
        post_id = post.get("id")
        try:
            res = await client.delete_post(post_id)
        except OpError as e:
            raise OpError(
                f"delete-many aborted at post {post_id} after deleting {len(results)} of {len(posts)}: {e}"
            ) from e
        status = res.get("status") if isinstance(res, dict) else None
        results.append({"id": post_id, "status": status or "deleted"})
        g.note(f"deleted post {post_id}")
    return {"deleted": len(results), "results": results}


async def run_command(command: Command, client: ContentClient, g: GlobalOpts) -> int:
    if isinstance(command, SiteInfo):
        format_output(await client.get_site_info(), g.json_output)
    elif isinstance(command, ListPosts):
        print_post_list(await client.list_posts(command.query.params()), g.json_output)
    elif isinstance(command, GetPost):
        format_output(await client.get_post(command.post_id), g.json_output)
    elif isinstance(command, CreatePost):
        format_output(await client.create_post(command.fields.data()), g.json_output)
    elif isinstance(command, UpdatePost):
        format_output(await client.update_post(command.post_id, command.fields.data()), g.json_output)
    elif isinstance(command, DeletePost):
        format_output(await client.delete_post(command.post_id), g.json_output)
    elif isinstance(command, DeleteManyPosts):
        format_output(await _delete_many(client, command, g), g.json_output)
    else:
        raise UsageError(f"unsupported command: {type(command).__name__}")
    return 0


async def _run_and_close(command: Command, client: ContentClient, g: GlobalOpts) -> int:
    try:
        return await run_command(command, client, g)
    except WpContentError:
        raise
    except Exception as e:
        # Third-party clients may raise anything; report it as an operation failure.
        raise OpError(f"{type(e).__name__}: {e}") from e
    finally:
        await client.aclose()


def dispatch(argv: list[str]) -> int:
    parsed = parse_args(argv)
    command = build_command(parsed)
    if isinstance(command, Help):
        sys.stdout.write(HELP_TEXT.lstrip("\n"))
        return 0

    g = _global_opts(parsed)
    profile = load_profile(g.profile)
    client = build_client(profile, env=os.environ)
    return asyncio.run(_run_and_close(command, client, g))


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
    help="Run a content command (see 'wp-content help').",
)
def run(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    del version
    # click drops a bare "--" from ctx.args; prefer the untouched argv from main().
    raw = ctx.obj.get("argv") if isinstance(ctx.obj, dict) else None
    try:
        code = dispatch(list(raw) if raw is not None else list(ctx.args))
    except UsageError as e:
        _rich_error(str(e))
        raise typer.Exit(code=2)
    except OpError as e:
        _rich_error(str(e))
        raise typer.Exit(code=1)
    if code:
        raise typer.Exit(code=code)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    _bootstrap_env()
    try:
        result = app(args=argv, prog_name="wp-content", standalone_mode=False, obj={"argv": argv})
        if result is None:
            return 0
        return int(result)
    except typer.Exit as e:
        return int(e.exit_code)
    except click.ClickException as e:
        _rich_error(e.format_message())
        return int(e.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
