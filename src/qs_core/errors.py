"""Exception hierarchy for qs_core."""

from __future__ import annotations


class QSCoreError(Exception):
    """Base class for every error raised by qs_core."""


class ConfigurationError(QSCoreError, ValueError):
    """An option has an unsupported value (charset, format, limit...)."""


class OptionTypeError(QSCoreError, TypeError):
    """A callable option (decoder, encoder...) is not callable."""
