"""Stringify engine: nested data → query string."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from functools import cmp_to_key
from typing import Any, Callable

from . import codec
from .formats import SENTINELS, ArrayFormat
from .options import StringifyOptions
from .values import Hole, is_structured, to_text


# ---------------------------------------------------------------------------
# Array prefix generators
# ---------------------------------------------------------------------------

def _indices(prefix: str, key: Any) -> str:
    return f"{prefix}[{key}]"


def _brackets(prefix: str, key: Any) -> str:
    return f"{prefix}[]"


def _repeat(prefix: str, key: Any) -> str:
    return prefix


ARRAY_PREFIX_GENERATORS: dict[ArrayFormat, Callable[[str, Any], str]] = {
    ArrayFormat.INDICES: _indices,
    ArrayFormat.BRACKETS: _brackets,
    ArrayFormat.REPEAT: _repeat,
}


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def stringify(value: Any, options: StringifyOptions | Mapping | None = None, **overrides: Any) -> str:
    """Serialize a dict (or list) into a query string.

    Usage::

        stringify({"a": ["b", "c"]})                          # → "a[0]=b&a[1]=c"
        stringify({"a": ["b", "c"]}, array_format="brackets")  # → "a[]=b&a[]=c"
        stringify({"a": {"b": "c"}}, allow_dots=True)         # → "a.b=c"

    Anything other than a dict or list at the top level gives ``""``.
    """
    opts = StringifyOptions.resolve(options, overrides)

    obj = value
    if callable(opts.filter):
        obj = opts.filter("", obj)

    if not is_structured(obj):
        return ""

    pairs: list[str] = []
    for key, child in _entries(obj, opts):
        pairs.extend(_stringify(child, to_text(key), opts))

    joined = opts.delimiter.join(pairs)
    if not joined:
        return ""

    prefix = "?" if opts.add_query_prefix else ""
    if opts.charset_sentinel:
        prefix += SENTINELS[opts.charset] + opts.delimiter
    return prefix + joined


# ---------------------------------------------------------------------------
# Recursive walk
# ---------------------------------------------------------------------------

def _stringify(obj: Any, prefix: str, opts: StringifyOptions) -> list[str]:
    """Emit the encoded pairs for *obj* found under key *prefix*."""
    formatter = opts.formatter
    encoder = opts.encoder if opts.encode else None

    if callable(opts.filter):
        obj = opts.filter(prefix, obj)

    if isinstance(obj, date):
        obj = opts.serialize_date(obj)
    elif obj is None:
        if opts.strict_null_handling:
            key = prefix if encoder is None or opts.encode_values_only else encoder(prefix, codec.encode, opts.charset.value)
            return [formatter(key)]
        obj = ""

    if not is_structured(obj):
        if encoder is None:
            return [f"{formatter(prefix)}={formatter(to_text(obj))}"]
        key = prefix if opts.encode_values_only else encoder(prefix, codec.encode, opts.charset.value)
        return [f"{formatter(key)}={formatter(encoder(obj, codec.encode, opts.charset.value))}"]

    pairs: list[str] = []
    is_list = not isinstance(obj, Mapping)
    generate = ARRAY_PREFIX_GENERATORS[opts.list_format]
    for key, child in _entries(obj, opts):
        if is_list:
            child_prefix = generate(prefix, key)
        elif opts.allow_dots:
            child_prefix = f"{prefix}.{to_text(key)}"
        else:
            child_prefix = f"{prefix}[{to_text(key)}]"
        pairs.extend(_stringify(child, child_prefix, opts))
    return pairs


def _entries(node: Any, opts: StringifyOptions) -> list[tuple[Any, Any]]:
    """(key, child) pairs of a container in emission order.

    A list filter gives the keys and their order at every level; keys the
    node lacks are skipped. Otherwise the node's own keys are used,
    re-sorted by the comparator when one is set.
    """
    if isinstance(opts.filter, (list, tuple)):
        keys = [k for k in opts.filter if _has(node, k)]
        entries = [(k, node[int(k)] if not isinstance(node, Mapping) else node[k]) for k in keys]
    else:
        keys = list(node.keys()) if isinstance(node, Mapping) else list(range(len(node)))
        if opts.sort is not None:
            keys.sort(key=cmp_to_key(opts.sort))
        entries = [(k, node[k]) for k in keys]

    return [
        (k, v)
        for k, v in entries
        if v is not Hole and not (opts.skip_nulls and v is None)
    ]


def _has(node: Any, key: Any) -> bool:
    if isinstance(node, Mapping):
        return key in node
    try:
        index = int(key)
    except (TypeError, ValueError):
        return False
    return 0 <= index < len(node) and to_text(index) == to_text(key)
