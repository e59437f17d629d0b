from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from rawtweet.core.exceptions import OverrideParseError, TemplateParseError, UnsupportedValueType
from rawtweet.core.logger import get_logger
from rawtweet.oauth.encoding import percent_encode
from rawtweet.oauth.types import ScalarValue

logger = get_logger(__name__)


def is_utf8_text(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def ensure_scalar(key: str, value: Any) -> ScalarValue:
    if not is_utf8_text(key):
        raise TemplateParseError(f"Parameter name {key!r} is not valid UTF-8 text")
    if isinstance(value, str):
        if not is_utf8_text(value):
            raise TemplateParseError(f"Value of parameter {key!r} is not valid UTF-8 text")
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise UnsupportedValueType(key=key, value=value)
    if isinstance(value, (bool, int, float)):
        return value
    raise UnsupportedValueType(key=key, value=value)


def parse_override(raw: str) -> Tuple[str, str]:
    """Split a ``key=value`` override on the first ``=``.

    The value may be empty (``key=``); the key may not. Both must be
    encodable as UTF-8; non-UTF-8 argv bytes arrive as lone surrogates.
    """
    key, sep, value = raw.partition("=")
    if not sep or not key or not is_utf8_text(raw):
        raise OverrideParseError(raw)
    return key, value


def normalize_parameters(
    template_params: Mapping[str, Any],
    overrides: Optional[Iterable[str]] = None,
) -> Dict[str, ScalarValue]:
    """
    Merge template parameters with CLI overrides into the request parameters.

    Overrides are applied in order and win over template values for the same
    key. Malformed overrides are skipped with a warning; the remaining ones
    are still applied.

    Returns:
        The merged parameters, keyed and ordered by parameter name.

    Raises:
        UnsupportedValueType: If a template value is not a string, number or boolean.
    """
    merged: Dict[str, ScalarValue] = {
        key: ensure_scalar(key, value) for key, value in template_params.items()
    }

    for raw in overrides or ():
        try:
            key, value = parse_override(raw)
        except OverrideParseError as e:
            logger.warning(f"{e}, skipping...")
            continue
        if key in merged:
            logger.debug(f"Override replaces template parameter {key!r}")
        merged[key] = value

    return dict(sorted(merged.items()))


def parameter_text(value: ScalarValue) -> str:
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def encode_pair(key: str, value: ScalarValue) -> str:
    """Render one ``key=value`` pair of the OAuth parameter string.

    Keys and values are percent-encoded; numbers and booleans are first
    rendered as their literal text. The same text goes into the query string,
    so a float printed as ``1e+20`` travels as ``1e%2B20``.
    """
    return f"{percent_encode(key)}={percent_encode(parameter_text(value))}"


def encoded_pairs(params: Mapping[str, ScalarValue]) -> List[str]:
    return [encode_pair(key, params[key]) for key in sorted(params)]


def query_string(params: Mapping[str, ScalarValue]) -> str:
    return "&".join(encoded_pairs(params))
