from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape


class WpContentError(Exception):
    pass


class UsageError(WpContentError):
    pass


class UnknownCommand(UsageError):
    pass


class ConfigurationError(UsageError):
    pass


class ProfileNotFound(ConfigurationError):
    pass


class MalformedProfile(ConfigurationError):
    pass


class ClientPathUnset(ConfigurationError):
    pass


class ClientNotFound(ConfigurationError):
    pass


class DependenciesMissing(ConfigurationError):
    pass


class CredentialsMissing(ConfigurationError):
    pass


class OpError(WpContentError):
    pass


WP_PROFILE = "WP_PROFILE"
WP_PROFILES_DIR = "WP_PROFILES_DIR"
WP_CLI_PATH = "WP_CLI_PATH"
WP_SITE_URL = "WP_SITE_URL"
WP_API_URL = "WP_API_URL"
WP_USERNAME = "WP_USERNAME"
WP_APP_PASSWORD = "WP_APP_PASSWORD"
WP_HTTP_TIMEOUT = "WP_HTTP_TIMEOUT"

DEFAULT_PROFILE = "example-blog"

_ERROR_CONSOLE = Console(stderr=True)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {escape(msg)}", highlight=False, soft_wrap=True)


@dataclass(frozen=True)
class GlobalOpts:
    profile: str
    json_output: bool
    quiet: bool

    def note(self, msg: str) -> None:
        if not self.quiet:
            _eprint(msg)


def _env_or_none(*names: str, env: Mapping[str, str] | None = None) -> str | None:
    source = os.environ if env is None else env
    for n in names:
        v = (source.get(n) or "").strip()
        if v:
            return v
    return None


def _print_json(obj: Any) -> None:
    sys.stdout.write(json.dumps(obj, indent=2, ensure_ascii=False) + "\n")
