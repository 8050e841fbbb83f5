"""Resolve client settings from env + profile and construct a content client.

Resolution never touches process state: the environment is read, not
written, and the chosen client receives an explicit `ClientConfig`.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Mapping

from .cli_shared import (
    WP_API_URL,
    WP_APP_PASSWORD,
    WP_CLI_PATH,
    WP_HTTP_TIMEOUT,
    WP_SITE_URL,
    WP_USERNAME,
    ClientNotFound,
    ClientPathUnset,
    ConfigurationError,
    CredentialsMissing,
    DependenciesMissing,
    _env_or_none,
)
from .client import DEFAULT_TIMEOUT_SECONDS, ClientConfig, ContentClient
from .profiles import Profile

DEFAULT_CLIENT_PATH = "wpcontent.client:WordPressClient"


def resolve_client_path(profile: Profile, *, env: Mapping[str, str]) -> str:
    path = _env_or_none(WP_CLI_PATH, env=env) or profile.cli_path
    if not path:
        raise ClientPathUnset(
            f"WordPress client path not set. Use {WP_CLI_PATH} or profile cli_path "
            f"(e.g. {DEFAULT_CLIENT_PATH})."
        )
    return path


def _split_client_path(path: str) -> tuple[str, str]:
    module_name, sep, attr = path.partition(":")
    module_name = module_name.strip()
    attr = attr.strip()
    if not sep or not module_name or not attr:
        raise ClientNotFound(f"WordPress client path not found: {path!r} (expected 'package.module:ClassName')")
    return module_name, attr


def load_client_factory(path: str) -> Callable[..., Any]:
    module_name, attr = _split_client_path(path)
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        missing = str(e.name or "")
        if missing and (module_name == missing or module_name.startswith(missing + ".")):
            raise ClientNotFound(f"WordPress client path not found: {path}") from e
        raise DependenciesMissing(
            f"client dependencies are not installed: missing module {missing!r} required by {module_name}"
        ) from e
    factory = getattr(module, attr, None)
    if factory is None:
        raise ClientNotFound(f"WordPress client entry not found: {attr!r} in {module_name}")
    if not callable(factory):
        raise ClientNotFound(f"WordPress client entry is not callable: {path}")
    return factory


def _timeout(env: Mapping[str, str]) -> float:
    raw = _env_or_none(WP_HTTP_TIMEOUT, env=env)
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        val = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"invalid {WP_HTTP_TIMEOUT}: {raw!r}") from e
    if val <= 0:
        raise ConfigurationError(f"invalid {WP_HTTP_TIMEOUT}: must be > 0")
    return val


def resolve_client_config(profile: Profile, *, env: Mapping[str, str]) -> ClientConfig:
    site_url = (_env_or_none(WP_SITE_URL, env=env) or profile.site_url or "").rstrip("/")
    api_url = (_env_or_none(WP_API_URL, env=env) or profile.api_url or "").rstrip("/")
    if not api_url and site_url:
        api_url = f"{site_url}/wp-json"
    if not api_url:
        raise ConfigurationError(
            f"missing site URL (set {WP_SITE_URL}/{WP_API_URL} or profile site_url/api_url)"
        )

    username = _env_or_none(WP_USERNAME, env=env)
    app_password = _env_or_none(WP_APP_PASSWORD, env=env)
    if not username or not app_password:
        raise CredentialsMissing(f"Missing {WP_USERNAME} or {WP_APP_PASSWORD}.")

    return ClientConfig(
        site_url=site_url,
        api_url=api_url,
        username=username,
        app_password=app_password,
        timeout_seconds=_timeout(env),
    )


def build_client(profile: Profile, *, env: Mapping[str, str]) -> ContentClient:
    factory = load_client_factory(resolve_client_path(profile, env=env))
    config = resolve_client_config(profile, env=env)
    client = factory(config)
    if not isinstance(client, ContentClient):
        raise ClientNotFound(
            f"WordPress client {type(client).__name__} does not implement the content client interface"
        )
    return client
