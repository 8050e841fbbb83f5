from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

FLAG_PREFIX = "--"

FlagValue = Union[str, bool]


@dataclass(frozen=True)
class ParsedArgs:
    flags: dict[str, FlagValue] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)

    def positional(self, index: int) -> str | None:
        if index < len(self.positionals):
            return self.positionals[index]
        return None

    def has(self, name: str) -> bool:
        return bool(self.flags.get(name))

    def text(self, name: str) -> str | None:
        """Return a flag's string value, or None when absent, empty or boolean."""

        val = self.flags.get(name)
        if isinstance(val, str) and val:
            return val
        return None


def parse_args(argv: list[str]) -> ParsedArgs:
    """Split raw arguments into flags and positionals in a single pass.

    A `--name` token consumes the following token as its value unless that
    token is missing, empty or itself a flag, in which case the flag is True.
    Flag names are not validated. A bare `--` is an ordinary flag with an
    empty name, not an end-of-options marker.
    """

    flags: dict[str, FlagValue] = {}
    positionals: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith(FLAG_PREFIX):
            key = arg[len(FLAG_PREFIX):]
            nxt = argv[i + 1] if i + 1 < len(argv) else None
            if nxt and not nxt.startswith(FLAG_PREFIX):
                flags[key] = nxt
                i += 2
            else:
                flags[key] = True
                i += 1
        else:
            positionals.append(arg)
            i += 1
    return ParsedArgs(flags=flags, positionals=positionals)


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_list_query(raw: str | None) -> str | None:
    parts = _split_csv(raw)
    return ",".join(parts) if parts else None


def _number(raw: str) -> int | float | None:
    try:
        n = float(raw)
    except ValueError:
        return None
    if not math.isfinite(n):
        return None
    return int(n) if n.is_integer() else n


def parse_id_list(raw: str | None) -> list[int | float | str] | None:
    parts = _split_csv(raw)
    if not parts:
        return None
    out: list[int | float | str] = []
    for part in parts:
        n = _number(part)
        out.append(part if n is None else n)
    return out


def parse_number(raw: str | None) -> int | float | None:
    if raw is None:
        return None
    return _number(raw.strip())


def drop_unset(params: dict[str, object]) -> dict[str, object]:
    """Drop keys whose value is None, empty or zero; such keys mean "unset"."""

    return {k: v for k, v in params.items() if v}
