from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

ScalarValue = Union[str, int, float, bool]


class Method(str, Enum):
    """HTTP method of a request.

    The value is used verbatim both as the HTTP verb sent and as the verb in
    the signature base string.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Credentials:
    consumer_key: str
    consumer_secret: str = field(repr=False)
    access_token: str
    access_token_secret: str = field(repr=False)


@dataclass(frozen=True)
class SignedRequest:
    """A request bound to its OAuth signature.

    The dispatcher sends exactly ``parameters``; any change to them after
    signing would invalidate ``authorization``.
    """

    method: Method
    url: str
    parameters: Dict[str, ScalarValue]
    oauth_parameters: Dict[str, str]
    base_string: str
    authorization: str

    @property
    def signature(self) -> str:
        return self.oauth_parameters["oauth_signature"]
