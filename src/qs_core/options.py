"""Resolved, immutable option sets for parse() and stringify()."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from datetime import date
from enum import Enum
from typing import Any, Callable

from . import codec
from .errors import ConfigurationError, OptionTypeError
from .formats import FORMATTERS, ArrayFormat, Charset, Format


def _coerce_enum(enum_cls: type[Enum], value: Any, name: str) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"{name} must be one of {choices}, got {value!r}") from None


def _check_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _resolve(cls, defaults, options, overrides: dict[str, Any]):
    """Build one options object from defaults, an options object or a
    mapping, and keyword overrides."""
    if isinstance(options, Mapping):
        overrides = {**options, **overrides}
        options = None
    if options is None:
        options = defaults
    elif not isinstance(options, cls):
        raise ConfigurationError(f"expected {cls.__name__} or a mapping, got {type(options).__name__}")

    if not overrides:
        return options
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"unknown {cls.__name__} option(s): {', '.join(unknown)}")
    return replace(options, **overrides)


# ---------------------------------------------------------------------------
# ParseOptions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseOptions:
    delimiter: str | re.Pattern = "&"
    depth: int = 5
    array_limit: int = 20
    parameter_limit: int | float | None = 1000   # None / math.inf = unlimited
    charset: Charset = Charset.UTF8
    parse_arrays: bool = True
    allow_dots: bool = False
    allow_prototypes: bool = False
    strict_null_handling: bool = False
    ignore_query_prefix: bool = False
    charset_sentinel: bool = False
    interpret_numeric_entities: bool = False
    decoder: Callable | None = codec.decode

    def __post_init__(self) -> None:
        if self.decoder is None:
            object.__setattr__(self, "decoder", codec.decode)
        elif not callable(self.decoder):
            raise OptionTypeError("decoder has to be callable")

        object.__setattr__(self, "charset", _coerce_enum(Charset, self.charset, "charset"))

        if not isinstance(self.delimiter, (str, re.Pattern)) or self.delimiter == "":
            raise ConfigurationError(f"delimiter must be a non-empty string or a compiled pattern, got {self.delimiter!r}")
        _check_int(self.depth, "depth")
        _check_int(self.array_limit, "array_limit")
        if self.parameter_limit is not None and self.parameter_limit != math.inf:
            _check_int(self.parameter_limit, "parameter_limit")
            if self.parameter_limit < 0:
                raise ConfigurationError("parameter_limit must not be negative")

    @property
    def unlimited(self) -> bool:
        return self.parameter_limit is None or self.parameter_limit == math.inf

    @classmethod
    def resolve(cls, options: ParseOptions | Mapping | None = None, overrides: dict[str, Any] | None = None) -> ParseOptions:
        return _resolve(cls, DEFAULT_PARSE_OPTIONS, options, overrides or {})


DEFAULT_PARSE_OPTIONS = ParseOptions()


# ---------------------------------------------------------------------------
# StringifyOptions
# ---------------------------------------------------------------------------

def serialize_date(value: date) -> str:
    """Default date serializer: ISO-8601."""
    return value.isoformat()


@dataclass(frozen=True, slots=True)
class StringifyOptions:
    allow_dots: bool = False
    skip_nulls: bool = False
    serialize_date: Callable[[date], str] = serialize_date
    encode: bool = True
    encoder: Callable | None = codec.encode
    delimiter: str = "&"
    encode_values_only: bool = False
    strict_null_handling: bool = False
    charset_sentinel: bool = False
    format: Format = Format.RFC3986
    array_format: ArrayFormat | None = None
    indices: bool | None = None     # legacy: False means "repeat"
    filter: Callable | list | tuple | None = None
    sort: Callable[[Any, Any], int] | None = None
    add_query_prefix: bool = False
    charset: Charset = Charset.UTF8

    def __post_init__(self) -> None:
        if self.encoder is None:
            object.__setattr__(self, "encoder", codec.encode)
        elif not callable(self.encoder):
            raise OptionTypeError("encoder has to be callable")
        if not callable(self.serialize_date):
            raise OptionTypeError("serialize_date has to be callable")
        if self.sort is not None and not callable(self.sort):
            raise OptionTypeError("sort has to be a comparator function")
        if self.filter is not None and not (callable(self.filter) or isinstance(self.filter, (list, tuple))):
            raise OptionTypeError("filter has to be a function or a list of keys")

        object.__setattr__(self, "charset", _coerce_enum(Charset, self.charset, "charset"))
        object.__setattr__(self, "format", _coerce_enum(Format, self.format, "format"))
        if self.array_format is not None:
            object.__setattr__(self, "array_format", _coerce_enum(ArrayFormat, self.array_format, "array_format"))
        if not isinstance(self.delimiter, str):
            raise ConfigurationError(f"delimiter must be a string, got {self.delimiter!r}")

    @property
    def list_format(self) -> ArrayFormat:
        """The array format in effect, honouring the legacy ``indices`` switch."""
        if self.array_format is not None:
            return self.array_format
        if self.indices is False:
            return ArrayFormat.REPEAT
        return ArrayFormat.INDICES

    @property
    def formatter(self) -> Callable[[str], str]:
        return FORMATTERS[self.format]

    @classmethod
    def resolve(cls, options: StringifyOptions | Mapping | None = None, overrides: dict[str, Any] | None = None) -> StringifyOptions:
        return _resolve(cls, DEFAULT_STRINGIFY_OPTIONS, options, overrides or {})


DEFAULT_STRINGIFY_OPTIONS = StringifyOptions()
