"""Compaction of the sparse lists left behind by merging."""

from __future__ import annotations

from typing import Any

from .values import Hole, is_container, present_items


def compact(value: Any) -> Any:
    """Make every reachable sparse list dense and 0-indexed.

    Each container is visited once, by identity, and lists are rewritten
    in place, so every parent of a shared list sees the dense form.
    """
    if not is_container(value):
        return value

    queue: list[Any] = [value]
    seen = {id(value)}

    i = 0
    while i < len(queue):
        node = queue[i]
        i += 1
        children = present_items(node) if isinstance(node, list) else node.items()
        for _, child in children:
            if is_container(child) and id(child) not in seen:
                seen.add(id(child))
                queue.append(child)

    for node in queue:
        if isinstance(node, list):
            node[:] = [v for v in node if v is not Hole]

    return value
