from __future__ import annotations

from urllib.parse import quote, unquote


def percent_encode(value: str) -> str:
    """RFC 3986 percent encoding for OAuth 1.0.

    Only ``A-Z a-z 0-9 - . _ ~`` pass through; every other UTF-8 byte
    becomes ``%XX`` with uppercase hex. This also escapes ``/``, ``:``, ``=``,
    ``&`` and the rest of the characters that are legal inside URLs.
    """
    return quote(value, safe="")


def percent_decode(value: str) -> str:
    return unquote(value, errors="strict")
