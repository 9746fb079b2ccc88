"""qs_core: query string codec for nested dicts and lists."""

from .codec import decode, encode
from .errors import ConfigurationError, OptionTypeError, QSCoreError
from .formats import ArrayFormat, Charset, Format
from .options import (
    DEFAULT_PARSE_OPTIONS,
    DEFAULT_STRINGIFY_OPTIONS,
    ParseOptions,
    StringifyOptions,
)
from .parser import parse
from .stringifier import stringify

__all__ = [
    "parse",
    "stringify",
    "ParseOptions",
    "StringifyOptions",
    "DEFAULT_PARSE_OPTIONS",
    "DEFAULT_STRINGIFY_OPTIONS",
    "Format",
    "Charset",
    "ArrayFormat",
    "encode",
    "decode",
    "QSCoreError",
    "ConfigurationError",
    "OptionTypeError",
]
