"""Output formats, charsets and the charset sentinels."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class Format(str, Enum):
    RFC1738 = "RFC1738"
    RFC3986 = "RFC3986"


class Charset(str, Enum):
    UTF8 = "utf-8"
    LATIN1 = "iso-8859-1"


class ArrayFormat(str, Enum):
    INDICES = "indices"
    BRACKETS = "brackets"
    REPEAT = "repeat"


DEFAULT_FORMAT = Format.RFC3986


def _rfc1738(value: str) -> str:
    return value.replace("%20", "+")


def _rfc3986(value: str) -> str:
    return value


FORMATTERS: dict[Format, Callable[[str], str]] = {
    Format.RFC1738: _rfc1738,
    Format.RFC3986: _rfc3986,
}


# ---------------------------------------------------------------------------
# Charset sentinels
# ---------------------------------------------------------------------------

# A checkmark submitted by a utf-8 page: the percent-encoded utf-8 octets.
UTF8_SENTINEL = "utf8=%E2%9C%93"

# The same checkmark submitted by an iso-8859-1 page: the browser falls back
# to the numeric entity ``&#10003;``, then percent-encodes it.
ISO_SENTINEL = "utf8=%26%2310003%3B"

SENTINELS: dict[Charset, str] = {
    Charset.UTF8: UTF8_SENTINEL,
    Charset.LATIN1: ISO_SENTINEL,
}
