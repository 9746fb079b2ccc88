"""Parse orchestrator: query string → nested dict."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Mapping
from typing import Any

from . import codec
from .compact import compact
from .formats import ISO_SENTINEL, UTF8_SENTINEL, Charset
from .keys import tokenize_key
from .merge import build_value, merge
from .options import ParseOptions
from .values import is_container

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(value: str | Mapping | None, options: ParseOptions | Mapping | None = None, **overrides: Any) -> dict:
    """Parse a query string (or a prebuilt flat mapping) into nested data.

    Usage::

        parse("a[b][c]=d")                  # → {"a": {"b": {"c": "d"}}}
        parse("a.b=c", allow_dots=True)     # → {"a": {"b": "c"}}
        parse("?a=b", ParseOptions(ignore_query_prefix=True))

    Malformed input never raises; only invalid options do.
    """
    opts = ParseOptions.resolve(options, overrides)

    if value is None or (isinstance(value, str) and not value):
        return {}

    prebuilt = isinstance(value, Mapping)
    flat = value if prebuilt else parse_pairs(value, opts)

    result: Any = {}
    for key, leaf in flat.items():
        segments = tokenize_key(key, opts.allow_dots, opts.depth, opts.allow_prototypes)
        if segments is None:
            if key:
                logger.debug("skipping unsafe key %r", key)
            continue
        if prebuilt and is_container(leaf):
            # merge() updates containers in place; keep the caller's data intact.
            leaf = copy.deepcopy(leaf)
        tree = build_value(segments, leaf, opts.parse_arrays, opts.array_limit)
        result = merge(result, tree, opts.allow_prototypes)

    return compact(result)


# ---------------------------------------------------------------------------
# Pair splitting
# ---------------------------------------------------------------------------

def parse_pairs(text: str, opts: ParseOptions) -> dict[str, Any]:
    """Split *text* into decoded pairs, collecting repeated keys in a list.

    Example::

        parse_pairs("a=1&b=2&a=3", opts)  → {"a": ["1", "3"], "b": "2"}
    """
    if opts.ignore_query_prefix and text.startswith("?"):
        text = text[1:]

    parts = split_parts(text, opts)
    charset = opts.charset

    if opts.charset_sentinel:
        charset = _detect_charset(parts, charset)

    flat: dict[str, Any] = {}
    for part in parts:
        key, val = _split_pair(part, opts, charset)
        if key not in flat:
            flat[key] = val
        elif isinstance(flat[key], list):
            flat[key].append(val)
        else:
            flat[key] = [flat[key], val]

    return flat


def split_parts(text: str, opts: ParseOptions) -> list[str]:
    """Split on the delimiter, keeping at most ``parameter_limit`` parts."""
    delimiter = opts.delimiter
    if opts.unlimited:
        if isinstance(delimiter, re.Pattern):
            return delimiter.split(text)
        return text.split(delimiter)

    limit = int(opts.parameter_limit)
    if limit == 0:
        return []
    if isinstance(delimiter, re.Pattern):
        parts = delimiter.split(text, maxsplit=limit)
    else:
        parts = text.split(delimiter, limit)
    if len(parts) > limit:
        logger.debug("parameter_limit %d reached, dropping the rest of the input", limit)
        parts = parts[:limit]
    return parts


def _detect_charset(parts: list[str], charset: Charset) -> Charset:
    """Look at the first ``utf8=`` part; a sentinel match picks the charset
    and is removed from *parts*. Any other ``utf8=`` part is kept."""
    for i, part in enumerate(parts):
        if not part.startswith("utf8="):
            continue
        if part == UTF8_SENTINEL:
            charset = Charset.UTF8
            del parts[i]
        elif part == ISO_SENTINEL:
            charset = Charset.LATIN1
            del parts[i]
        logger.debug("charset sentinel %r, using %s", part, charset.value)
        break
    return charset


def _split_pair(part: str, opts: ParseOptions, charset: Charset) -> tuple[Any, Any]:
    # ``a[b]=c]=d``: the key runs up to the last "]=".
    bracket_equals = part.rfind("]=")
    pos = part.find("=") if bracket_equals == -1 else bracket_equals + 1

    decoder = opts.decoder
    if pos == -1:
        key = decoder(part, codec.decode, charset.value)
        val = None if opts.strict_null_handling else ""
    else:
        key = decoder(part[:pos], codec.decode, charset.value)
        val = decoder(part[pos + 1:], codec.decode, charset.value)

    if isinstance(val, str) and val and opts.interpret_numeric_entities and charset is Charset.LATIN1:
        val = codec.interpret_numeric_entities(val)
    return key, val
