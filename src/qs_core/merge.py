"""Structure merger: key path + leaf → tree, and tree folding."""

from __future__ import annotations

import re
from typing import Any

from .keys import UNSAFE_KEYS, Segment, SegmentKind
from .values import Hole, is_container, present_items, to_text

_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


# ---------------------------------------------------------------------------
# Leaf-to-tree
# ---------------------------------------------------------------------------

def build_value(
    segments: list[Segment],
    leaf: Any,
    parse_arrays: bool = True,
    array_limit: int = 20,
) -> Any:
    """Wrap *leaf* in one container per segment, innermost segment first.

    - ``[]`` → list holding the leaf
    - ``[N]`` with 0 <= N <= array_limit → sparse list, leaf at index N
    - anything else → single-entry dict
    """
    value = leaf
    for segment in reversed(segments):
        token = segment.text
        is_bracket = segment.kind is SegmentKind.BRACKET

        if is_bracket and token == "" and parse_arrays:
            value = list(value) if isinstance(value, list) else [value]
        elif (
            is_bracket
            and parse_arrays
            and _INDEX_RE.fullmatch(token)
            and int(token) <= array_limit
        ):
            value = [Hole] * int(token) + [value]
        elif not parse_arrays and token == "":
            value = {"0": value}
        else:
            value = {token: value}

    return value


# ---------------------------------------------------------------------------
# Folding
# ---------------------------------------------------------------------------

def list_to_dict(items: list) -> dict[str, Any]:
    """Index-keyed dict of the present elements of a sparse list."""
    return {str(i): v for i, v in present_items(items)}


def merge(target: Any, source: Any, allow_prototypes: bool = False) -> Any:
    """Fold *source* into *target* and return the result.

    *target* is updated in place when it is a container; the return value
    must still be used since a scalar target is replaced by a new list.
    """
    if source is None or (isinstance(source, str) and not source):
        return target

    if not is_container(source):
        if isinstance(target, list):
            target.append(source)
        elif isinstance(target, dict):
            flag = source if isinstance(source, str) else to_text(source)
            if allow_prototypes or flag not in UNSAFE_KEYS:
                target[flag] = True
        else:
            return [target, source]
        return target

    if not is_container(target):
        if isinstance(source, list):
            return [target, *source]
        return [target, source]

    if isinstance(target, list) and isinstance(source, list):
        for i, item in present_items(source):
            if i < len(target) and target[i] is not Hole:
                if is_container(target[i]):
                    target[i] = merge(target[i], item, allow_prototypes)
                else:
                    target.append(item)
            else:
                if i >= len(target):
                    target.extend([Hole] * (i + 1 - len(target)))
                target[i] = item
        return target

    merge_target = list_to_dict(target) if isinstance(target, list) else target
    entries = list_to_dict(source).items() if isinstance(source, list) else source.items()
    for key, value in entries:
        if key in merge_target:
            merge_target[key] = merge(merge_target[key], value, allow_prototypes)
        else:
            merge_target[key] = value
    return merge_target
