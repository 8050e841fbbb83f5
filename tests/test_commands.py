import pytest

from wpcontent.args import parse_args
from wpcontent.cli_shared import UnknownCommand, UsageError
from wpcontent.commands import (
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


def _build(*argv: str):
    return build_command(parse_args(list(argv)))


@pytest.mark.parametrize("argv", [(), ("help",), ("--help",), ("posts", "list", "--help")])
def test_help_routes(argv):
    assert isinstance(_build(*argv), Help)


def test_site_info_route():
    assert isinstance(_build("site", "info", "--json"), SiteInfo)


@pytest.mark.parametrize(
    "argv",
    [("site",), ("site", "stats"), ("posts",), ("posts", "publish"), ("pages", "list")],
)
def test_unknown_commands_raise(argv):
    with pytest.raises(UnknownCommand, match="Unknown command"):
        _build(*argv)


def test_unknown_command_message_names_command_and_subcommand():
    with pytest.raises(UnknownCommand) as exc:
        _build("posts", "publish")
    assert str(exc.value) == 'Unknown command "posts publish". Use "help" for usage.'


def test_list_query_normalization():
    cmd = _build(
        "posts", "list",
        "--status", "publish",
        "--categories", " 1, 2 ",
        "--tags", "",
        "--page", "x",
        "--per_page", "5",
        "--orderby", "date",
        "--order", "asc",
    )
    assert isinstance(cmd, ListPosts)
    assert cmd.query.params() == {
        "status": "publish",
        "categories": "1,2",
        "per_page": 5,
        "orderby": "date",
        "order": "asc",
    }


@pytest.mark.parametrize("sub", ["get", "update", "delete"])
def test_post_id_required(sub):
    with pytest.raises(UsageError, match="Post ID required"):
        _build("posts", sub)


def test_get_and_delete_carry_post_id():
    assert _build("posts", "get", "42") == GetPost(post_id="42")
    assert _build("posts", "delete", "7") == DeletePost(post_id="7")


@pytest.mark.parametrize("argv", [("posts", "create"), ("posts", "create", "--title", "--json")])
def test_create_requires_title(argv):
    with pytest.raises(UsageError, match="--title is required"):
        _build(*argv)


def test_create_defaults_status_to_draft_and_parses_id_lists():
    cmd = _build("posts", "create", "--title", "Hello", "--categories", "3,news", "--tags", " 4 ")
    assert isinstance(cmd, CreatePost)
    assert cmd.fields.data() == {
        "title": "Hello",
        "status": "draft",
        "categories": [3, "news"],
        "tags": [4],
    }


def test_create_reads_content_file_over_content(tmp_path):
    body = tmp_path / "body.html"
    body.write_text("<p>from file</p>", encoding="utf-8")
    cmd = _build("posts", "create", "--title", "T", "--content", "inline", "--content-file", str(body))
    assert cmd.fields.content == "<p>from file</p>"


def test_unreadable_content_file_is_usage_error(tmp_path):
    with pytest.raises(UsageError, match="--content-file"):
        _build("posts", "create", "--title", "T", "--content-file", str(tmp_path / "missing.html"))


def test_update_only_sends_content_when_given():
    cmd = _build("posts", "update", "12", "--status", "publish")
    assert isinstance(cmd, UpdatePost)
    assert cmd.post_id == "12"
    assert cmd.fields.data() == {"status": "publish"}

    cmd = _build("posts", "update", "12", "--content", "<p>new</p>")
    assert cmd.fields.data() == {"content": "<p>new</p>"}


@pytest.mark.parametrize(
    "flags, dry_run",
    [
        ((), True),
        (("--dry-run",), True),
        (("--confirm",), False),
        (("--confirm", "--dry-run"), True),
        (("--dry-run", "--confirm"), True),
    ],
)
def test_delete_many_requires_confirm_without_dry_run(flags, dry_run):
    cmd = _build("posts", "delete-many", *flags)
    assert isinstance(cmd, DeleteManyPosts)
    assert cmd.dry_run is dry_run


def test_delete_many_defaults_per_page_and_ignores_ordering():
    cmd = _build("posts", "delete-many", "--status", "draft", "--orderby", "title")
    assert cmd.query.params() == {"status": "draft", "per_page": 100}

    cmd = _build("posts", "delete-many", "--per_page", "20")
    assert cmd.query.params() == {"per_page": 20}
