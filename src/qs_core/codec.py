"""Percent-encoding primitives with charset awareness."""

from __future__ import annotations

import re
import string
from typing import Any, Callable
from urllib.parse import quote, unquote

from .formats import Charset
from .values import to_text

Decoder = Callable[[str, Callable, str], Any]
Encoder = Callable[[Any, Callable, str], str]

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")

_ESCAPE_RE = re.compile(r"%[0-9A-Fa-f]{2}")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_NUMERIC_ENTITY_RE = re.compile(r"&#(\d+);")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode(text: str, decoder: Callable | None = None, charset: str = Charset.UTF8) -> str:
    """Decode one key or value: ``+`` → space, then percent escapes.

    Never raises. Under utf-8 a malformed escape or an invalid byte
    sequence leaves the text percent-encoded (only ``+`` is replaced).
    Under iso-8859-1 every ``%XX`` maps to the code point XX.

    *decoder* is the default-decoder slot of the custom decoder
    signature ``(text, default_decoder, charset)``; unused here.
    """
    text = text.replace("+", " ")
    if charset == Charset.LATIN1:
        return _ESCAPE_RE.sub(lambda m: chr(int(m.group(0)[1:], 16)), text)
    if _BAD_ESCAPE_RE.search(text):
        return text
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        return text


def interpret_numeric_entities(text: str) -> str:
    """Rewrite ``&#NNN;`` decimal references into their characters."""
    def _char(m: re.Match) -> str:
        code = int(m.group(1))
        if code > 0x10FFFF:
            return m.group(0)
        return chr(code)

    return _NUMERIC_ENTITY_RE.sub(_char, text)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(value: Any, encoder: Callable | None = None, charset: str = Charset.UTF8) -> str:
    """Percent-encode a scalar.

    utf-8: everything outside ``A-Z a-z 0-9 - . _ ~`` is escaped as its
    utf-8 octets. iso-8859-1: Latin-1 code points are escaped as one
    octet, anything above as the escaped entity ``%26%23<decimal>%3B``.
    """
    text = to_text(value)
    if not text:
        return text

    if charset == Charset.LATIN1:
        return "".join(_escape_latin1(ch) for ch in text)

    if _SURROGATE_RE.search(text):
        # Join explicit UTF-16 surrogate pairs into one code point.
        text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return quote(text, safe="", errors="surrogatepass")


def _escape_latin1(ch: str) -> str:
    if ch in _UNRESERVED:
        return ch
    code = ord(ch)
    if code < 0x100:
        return f"%{code:02X}"
    return f"%26%23{code}%3B"
