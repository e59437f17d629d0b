from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from rawtweet.core.exceptions import NetworkError
from rawtweet.core.logger import get_logger
from rawtweet.oauth.params import query_string
from rawtweet.oauth.types import SignedRequest

logger = get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def request_url(signed: SignedRequest) -> str:
    """Signed URL plus the query string, encoded the same way as for signing.

    Parameters travel in the query string for every method.
    """
    if not signed.parameters:
        return signed.url
    return f"{signed.url}?{query_string(signed.parameters)}"


class RequestDispatcher:
    def __init__(
        self,
        timeout_seconds: float = 30.0,
        *,
        client: Optional[httpx.Client] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def dispatch(self, signed: SignedRequest) -> DispatchResult:
        url = request_url(signed)
        logger.info(f"{signed.method.value} {signed.url}")

        try:
            resp = self._client.request(
                signed.method.value,
                url,
                headers={"Authorization": signed.authorization},
            )
            body = resp.text
        except httpx.HTTPError as e:
            raise NetworkError(f"{signed.method.value} {signed.url} failed", cause=e) from e

        result = DispatchResult(status_code=resp.status_code, body=body)
        if not result.ok:
            logger.warning(f"Server answered with HTTP {resp.status_code}")
        else:
            logger.debug(f"Server answered with HTTP {resp.status_code}")
        return result

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RequestDispatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
