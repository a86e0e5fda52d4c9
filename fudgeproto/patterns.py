"""Path-aware wildcard matching for exclude patterns."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Pattern


def match_path(pattern: str, path: str) -> bool:
    """Return True when ``path`` matches the wildcard ``pattern``.

    ``*`` matches within a single segment, ``?`` matches one character
    other than a separator and ``**`` matches any number of segments. A
    pattern ending in ``/`` matches everything below that directory.
    Backslashes are treated as forward slashes on both sides.
    """
    normalized = path.replace("\\", "/")
    return _compile(pattern).match(normalized) is not None


def matches_any(patterns: Iterable[str], path: str) -> bool:
    for pattern in patterns:
        if match_path(pattern, path):
            return True
    return False


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Pattern[str]:
    normalized = pattern.replace("\\", "/")
    if normalized.endswith("/"):
        normalized += "**"

    parts = []
    index = 0
    length = len(normalized)
    while index < length:
        char = normalized[index]
        if char == "/" and normalized[index + 1:] == "**":
            # trailing "/**" also matches the directory itself
            parts.append("(?:/.*)?")
            break
        if char == "*":
            if normalized.startswith("**", index):
                index += 2
                if index < length and normalized[index] == "/":
                    index += 1
                    parts.append("(?:.*/)?")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts) + r"\Z")


__all__ = ["match_path", "matches_any"]
