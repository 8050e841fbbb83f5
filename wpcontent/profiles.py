from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cli_shared import WP_PROFILES_DIR, MalformedProfile, ProfileNotFound, _env_or_none


@dataclass(frozen=True)
class Profile:
    name: str
    cli_path: str | None = None
    site_url: str | None = None
    api_url: str | None = None


def _install_root() -> Path:
    # Profiles ship as package data next to this module.
    return Path(__file__).resolve().parent


def profiles_dir() -> Path:
    override = _env_or_none(WP_PROFILES_DIR)
    if override:
        return Path(override).expanduser()
    return _install_root() / "profiles"


def profile_path(name: str, *, directory: Path | None = None) -> Path:
    return (directory or profiles_dir()) / f"{name}.json"


def _opt_str(doc: dict[str, Any], key: str, *, path: Path) -> str | None:
    val = doc.get(key)
    if val is None:
        return None
    if not isinstance(val, str):
        raise MalformedProfile(f"invalid profile {path}: {key!r} must be a string")
    return val.strip() or None


def load_profile(name: str, *, directory: Path | None = None) -> Profile:
    path = profile_path(name, directory=directory)
    if not path.is_file():
        raise ProfileNotFound(f"Profile not found: {path}")
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MalformedProfile(f"invalid profile {path}: {e}") from e
    if not isinstance(doc, dict):
        raise MalformedProfile(f"invalid profile {path}: expected JSON object")
    return Profile(
        name=name,
        cli_path=_opt_str(doc, "cli_path", path=path),
        site_url=_opt_str(doc, "site_url", path=path),
        api_url=_opt_str(doc, "api_url", path=path),
    )
