"""Object path validation.

A D-Bus object path is ``/`` or a sequence of ``/element`` parts where
every element is a non-empty run of ``[A-Za-z0-9_]``.  Trailing slashes
are only allowed for the root path.
"""
from __future__ import annotations

import re
from typing import Final

_ELEMENT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_]+")


def object_path_problem(path: str) -> str | None:
    """Return why ``path`` is not a valid object path, or None if it is."""
    if not path:
        return "object path must not be empty"
    if not path.startswith("/"):
        return "object path must start with '/'"
    if path == "/":
        return None
    if "//" in path:
        return "object path must not contain consecutive '/'"
    if path.endswith("/"):
        return "object path must not end with '/'"
    for element in path[1:].split("/"):
        if not _ELEMENT.fullmatch(element):
            return f"object path element {element!r} may only contain [A-Za-z0-9_]"
    return None


def is_valid_object_path(path: str) -> bool:
    """Return True if ``path`` is a valid D-Bus object path."""
    return object_path_problem(path) is None
