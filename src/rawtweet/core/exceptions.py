"""
Custom exception classes for rawtweet.

Every fatal condition of a run maps to one of these, so the CLI can report it
and exit non-zero without a traceback. ``OverrideParseError`` is the only
recoverable one: the parameter normalizer catches it and skips the override.
"""

from typing import Optional


class RawTweetException(Exception):
    """Base exception class for all rawtweet exceptions."""

    pass


class ConfigError(RawTweetException):
    """Raised when credentials or other settings are missing or malformed.

    Always raised before any network activity.
    """

    pass


class TemplateParseError(RawTweetException):
    """Raised when a request template cannot be read or is not a valid template."""

    pass


class UnsupportedValueType(TemplateParseError):
    """
    Raised when a request parameter value is not a string, number or boolean.

    Example:
        >>> raise UnsupportedValueType(key="ids", value=[1, 2])
    """

    def __init__(self, key: str, value: object):
        self.key = key
        self.value = value
        super().__init__(
            f"Unsupported value type for parameter {key!r}: {type(value).__name__}"
        )


class OverrideParseError(RawTweetException):
    """Raised for a ``key=value`` override with an empty key or without ``=``."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid parameter override: {raw!r}")


class ClockError(RawTweetException):
    """Raised when the system clock reads before the Unix epoch."""

    pass


class SigningKeyError(RawTweetException):
    """Raised when the consumer or token secret cannot form a signing key."""

    pass


class NetworkError(RawTweetException):
    """Raised when the HTTP request fails at the transport level.

    The underlying transport error is kept on ``cause``.
    """

    def __init__(self, reason: str, cause: Optional[BaseException] = None):
        self.reason = reason
        self.cause = cause
        message = reason
        if cause is not None:
            message += f" - {cause}"
        super().__init__(message)
