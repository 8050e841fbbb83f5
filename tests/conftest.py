from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wpcontent.cli_shared import OpError

_WP_ENV = (
    "WP_PROFILE",
    "WP_PROFILES_DIR",
    "WP_CLI_PATH",
    "WP_SITE_URL",
    "WP_API_URL",
    "WP_USERNAME",
    "WP_APP_PASSWORD",
    "WP_HTTP_TIMEOUT",
)


def _post(post_id: int, title: str, *, status: str = "publish") -> dict[str, Any]:
    return {
        "id": post_id,
        "title": {"rendered": title},
        "status": status,
        "date": f"2026-01-0{post_id}T09:00:00",
        "link": f"https://blog.example.com/?p={post_id}",
    }


class FakeClient:
    def __init__(self, posts: list[dict[str, Any]] | None = None) -> None:
        self.posts = list(posts or [])
        self.calls: list[tuple[Any, ...]] = []
        self.fail_delete_ids: set[Any] = set()
        self.closed = False

    async def get_site_info(self) -> dict[str, Any]:
        self.calls.append(("get_site_info",))
        return {"name": "Example Blog", "url": "https://blog.example.com", "namespaces": ["wp/v2"]}

    async def list_posts(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        self.calls.append(("list_posts", params))
        return list(self.posts)

    async def get_post(self, post_id: str) -> dict[str, Any]:
        self.calls.append(("get_post", post_id))
        return _post(int(post_id), "Fetched")

    async def create_post(self, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create_post", data))
        return {"id": 99, **data}

    async def update_post(self, post_id: str, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update_post", post_id, data))
        return {"id": int(post_id), **data}

    async def delete_post(self, post_id: Any) -> dict[str, Any]:
        self.calls.append(("delete_post", post_id))
        if post_id in self.fail_delete_ids:
            raise OpError(f"DELETE /wp/v2/posts/{post_id} failed: status=500 boom")
        return {"id": post_id, "status": "trash"}

    async def aclose(self) -> None:
        self.closed = True

    def deleted_ids(self) -> list[Any]:
        return [c[1] for c in self.calls if c[0] == "delete_post"]


@pytest.fixture
def make_post():
    return _post


@pytest.fixture
def wp_env(monkeypatch, tmp_path: Path) -> Path:
    for name in _WP_ENV:
        monkeypatch.delenv(name, raising=False)
    profiles = tmp_path / "profiles"
    profiles.mkdir()
    (profiles / "example-blog.json").write_text(
        json.dumps(
            {
                "cli_path": "wpcontent.client:WordPressClient",
                "site_url": "https://blog.example.com",
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("WP_PROFILES_DIR", str(profiles))
    monkeypatch.setenv("WP_USERNAME", "editor")
    monkeypatch.setenv("WP_APP_PASSWORD", "abcd efgh ijkl")
    return profiles


@pytest.fixture
def fake_client(monkeypatch, wp_env):
    client = FakeClient()
    client.built_for = []

    def factory(profile, *, env):
        client.built_for.append(profile.name)
        return client

    monkeypatch.setattr("wpcontent.main.build_client", factory)
    return client
