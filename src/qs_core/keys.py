"""Key-path tokenizer: ``a[b][c]`` / ``a.b.c`` → ordered segments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto


# ---------------------------------------------------------------------------
# SegmentKind / Segment
# ---------------------------------------------------------------------------

class SegmentKind(Enum):
    ROOT = auto()       # text before the first bracket group
    BRACKET = auto()    # content of one [...] group
    OVERFLOW = auto()   # unparsed remainder past the depth limit


@dataclass(slots=True, frozen=True)
class Segment:
    kind: SegmentKind
    text: str


# Built-in object property names. Keys using them are treated as hostile.
UNSAFE_KEYS = frozenset({
    "__proto__",
    "__defineGetter__",
    "__defineSetter__",
    "__lookupGetter__",
    "__lookupSetter__",
    "constructor",
    "hasOwnProperty",
    "isPrototypeOf",
    "propertyIsEnumerable",
    "toLocaleString",
    "toString",
    "valueOf",
})

_DOT_RE = re.compile(r"\.([^.\[]+)")
_GROUP_RE = re.compile(r"\[[^\[\]]*\]")


def tokenize_key(
    key: str,
    allow_dots: bool = False,
    depth: int = 5,
    allow_prototypes: bool = False,
) -> list[Segment] | None:
    """Split *key* into its path segments.

    Returns ``None`` when the key is empty or, with the prototype guard
    on, when any segment names an unsafe property.

    Example::

        tokenize_key("a[b][c][d]", depth=1)
        → [ROOT "a", BRACKET "b", OVERFLOW "[c][d]"]
    """
    if not key:
        return None

    if allow_dots:
        key = _DOT_RE.sub(r"[\1]", key)

    segments: list[Segment] = []

    first = _GROUP_RE.search(key)
    parent = key[: first.start()] if first else key
    if parent:
        if _rejected(parent, allow_prototypes):
            return None
        segments.append(Segment(SegmentKind.ROOT, parent))

    for count, match in enumerate(_GROUP_RE.finditer(key)):
        if count >= depth:
            segments.append(Segment(SegmentKind.OVERFLOW, key[match.start():]))
            break
        inner = match.group(0)[1:-1]
        if _rejected(inner, allow_prototypes):
            return None
        segments.append(Segment(SegmentKind.BRACKET, inner))

    return segments


def _rejected(name: str, allow_prototypes: bool) -> bool:
    return not allow_prototypes and name in UNSAFE_KEYS
