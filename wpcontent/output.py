from __future__ import annotations

import json
import sys
from typing import Any

from .cli_shared import _print_json


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list, bool)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if value is None:
        return ""
    return str(value)


def _write_mapping(obj: dict[str, Any], *, indent: str = "") -> None:
    for key, value in obj.items():
        sys.stdout.write(f"{indent}{key}: {_cell(value)}\n")


def format_output(data: Any, json_output: bool) -> None:
    if json_output:
        _print_json(data)
        return
    if isinstance(data, dict):
        _write_mapping(data)
        return
    if isinstance(data, list):
        for i, item in enumerate(data):
            if isinstance(item, dict):
                if i:
                    sys.stdout.write("\n")
                _write_mapping(item)
            else:
                sys.stdout.write(f"{_cell(item)}\n")
        return
    sys.stdout.write(f"{_cell(data)}\n")


def rendered_title(post: dict[str, Any]) -> str:
    title = post.get("title")
    if isinstance(title, dict):
        return str(title.get("rendered") or "")
    if isinstance(title, str):
        return title
    return ""


def print_post_list(posts: list[dict[str, Any]], json_output: bool) -> None:
    if json_output:
        _print_json(posts)
        return
    for post in posts:
        sys.stdout.write(f"[{post.get('id')}] {rendered_title(post)}\n")
        sys.stdout.write(f"  Status: {post.get('status')} | Date: {post.get('date')}\n")
        sys.stdout.write(f"  Link: {post.get('link')}\n")
