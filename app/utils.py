"""Utility helpers for the MoodPicks service."""

from __future__ import annotations

import re
from typing import Hashable, Iterable, TypeVar


T = TypeVar("T", bound=Hashable)

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def split_tokens(value: object) -> list[str]:
    """Flatten comma separated strings (or iterables of them) into tokens.

    Blank fragments are dropped; order is preserved.
    """

    if value is None:
        return []
    if isinstance(value, str):
        raw_values: Iterable[object] = [value]
    elif isinstance(value, Iterable):
        raw_values = value
    else:
        raw_values = [value]

    tokens: list[str] = []
    for raw in raw_values:
        if raw is None:
            continue
        for part in str(raw).split(","):
            part = part.strip()
            if part:
                tokens.append(part)
    return tokens


def fold_token(value: str) -> str:
    """Return the lookup key for a user supplied token."""

    return value.strip().casefold()


def parse_leading_int(value: object) -> int | None:
    """Parse the leading integer of ``value`` or return ``None``.

    ``"12"`` and ``"12abc"`` both yield 12, anything without leading digits
    yields ``None``. Booleans are rejected.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    match = LEADING_INT_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def dedupe(values: Iterable[T]) -> tuple[T, ...]:
    """Remove duplicates keeping first-seen order."""

    return tuple(dict.fromkeys(values))
