"""WordPress REST client.

`ContentClient` is the contract the dispatcher depends on; `WordPressClient`
is the default implementation over `httpx.AsyncClient` using application
password (HTTP basic) auth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from . import __version__
from .cli_shared import OpError

DEFAULT_TIMEOUT_SECONDS = 30.0

SITE_INFO_KEYS = (
    "name",
    "description",
    "url",
    "home",
    "gmt_offset",
    "timezone_string",
    "namespaces",
)


class ApiError(OpError):
    def __init__(self, message: str, *, status: int, code: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.code = code


@dataclass(frozen=True)
class ClientConfig:
    site_url: str
    api_url: str
    username: str
    app_password: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@runtime_checkable
class ContentClient(Protocol):
    async def get_site_info(self) -> dict[str, Any]:
        ...

    async def list_posts(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        ...

    async def get_post(self, post_id: str) -> dict[str, Any]:
        ...

    async def create_post(self, data: dict[str, Any]) -> dict[str, Any]:
        ...

    async def update_post(self, post_id: str, data: dict[str, Any]) -> dict[str, Any]:
        ...

    async def delete_post(self, post_id: str | int) -> dict[str, Any]:
        ...

    async def aclose(self) -> None:
        ...


def _error_message(resp: httpx.Response) -> tuple[str, str]:
    try:
        parsed = resp.json()
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        code = str(parsed.get("code") or "").strip()
        msg = str(parsed.get("message") or "").strip()
        if msg:
            return code, msg
    return "", resp.text.strip() or resp.reason_phrase


class WordPressClient:
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.api_url.rstrip("/"),
            auth=httpx.BasicAuth(config.username, config.app_password),
            timeout=httpx.Timeout(config.timeout_seconds),
            follow_redirects=True,
            headers={
                "User-Agent": f"wp-content/{__version__}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> WordPressClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        try:
            resp = await self._http.request(method, path, params=params, json=body)
        except httpx.HTTPError as e:
            raise OpError(f"{method} {path} failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            code, msg = _error_message(resp)
            detail = f" ({code})" if code else ""
            raise ApiError(
                f"{method} {path} failed: status={resp.status_code}{detail} {msg}",
                status=resp.status_code,
                code=code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise OpError(f"invalid JSON from {method} {path}: {e}") from e

    async def _request_object(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        out = await self._request(method, path, **kwargs)
        if not isinstance(out, dict):
            raise OpError(f"invalid response from {method} {path}: expected object")
        return out

    async def get_site_info(self) -> dict[str, Any]:
        doc = await self._request_object("GET", "/")
        return {k: doc.get(k) for k in SITE_INFO_KEYS if k in doc}

    async def list_posts(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        out = await self._request("GET", "/wp/v2/posts", params=params)
        if not isinstance(out, list):
            raise OpError("invalid response from GET /wp/v2/posts: expected array")
        return [p for p in out if isinstance(p, dict)]

    async def get_post(self, post_id: str) -> dict[str, Any]:
        return await self._request_object("GET", f"/wp/v2/posts/{post_id}")

    async def create_post(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request_object("POST", "/wp/v2/posts", body=data)

    async def update_post(self, post_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request_object("POST", f"/wp/v2/posts/{post_id}", body=data)

    async def delete_post(self, post_id: str | int) -> dict[str, Any]:
        return await self._request_object("DELETE", f"/wp/v2/posts/{post_id}")
