"""Value helpers shared by the parse and stringify pipelines."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class _Hole:
    """Singleton marking an absent index inside a sparse list."""

    _instance: "_Hole | None" = None

    def __new__(cls) -> "_Hole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Hole"

    def __bool__(self) -> bool:
        return False


Hole = _Hole()


def is_structured(value: Any) -> bool:
    """True for the container variants: lists, tuples and mappings."""
    return isinstance(value, (list, tuple, Mapping))


def is_container(value: Any) -> bool:
    """True for the containers parse builds: lists and dicts."""
    return isinstance(value, (list, dict))


def present_items(items: list) -> list[tuple[int, Any]]:
    """(index, value) pairs of a possibly sparse list, holes skipped."""
    return [(i, v) for i, v in enumerate(items) if v is not Hole]


def to_text(value: Any) -> str:
    """Render a scalar the way it appears on the wire.

    - bool → ``true`` / ``false``
    - integral float → no trailing ``.0``
    - bytes → utf-8 text
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)
