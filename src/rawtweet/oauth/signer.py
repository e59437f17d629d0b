"""
OAuth 1.0a signature generation (RFC 5849) with HMAC-SHA1.

The functions in this module are pure: given the same method, URL, parameters,
OAuth parameters and credentials they produce the same signature. Randomness
(the nonce) and the clock (the timestamp) only enter through ``OAuth1Signer``,
whose ``nonce_factory`` and ``clock`` can be replaced in tests.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Dict, Literal, Mapping, Optional, Sequence

from rawtweet.core.exceptions import ClockError, SigningKeyError
from rawtweet.core.logger import get_logger
from rawtweet.oauth.encoding import percent_encode
from rawtweet.oauth.params import encode_pair
from rawtweet.oauth.types import Credentials, Method, ScalarValue, SignedRequest

logger = get_logger(__name__)

SigningKeyMode = Literal["rfc5849", "raw"]

NONCE_CHARS = "0123456789abcdef"
NONCE_LENGTH = 32

OAUTH_VERSION = "1.0"
OAUTH_SIGNATURE_METHOD = "HMAC-SHA1"


def generate_nonce(choice: Callable[[Sequence[str]], str] = secrets.choice) -> str:
    """Draw 32 lowercase hex characters, with replacement, from a CSPRNG."""
    return "".join(choice(NONCE_CHARS) for _ in range(NONCE_LENGTH))


def generate_timestamp(clock: Callable[[], float] = time.time) -> str:
    now = clock()
    if now < 0:
        raise ClockError(f"System clock is before the Unix epoch: {now}")
    return str(int(now))


def oauth_parameters(credentials: Credentials, nonce: str, timestamp: str) -> Dict[str, str]:
    return {
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": nonce,
        "oauth_signature_method": OAUTH_SIGNATURE_METHOD,
        "oauth_timestamp": timestamp,
        "oauth_token": credentials.access_token,
        "oauth_version": OAUTH_VERSION,
    }


def normalized_parameter_string(
    request_params: Mapping[str, ScalarValue],
    oauth_params: Mapping[str, str],
) -> str:
    """Build the normalized parameter string.

    Request and OAuth parameters are rendered as encoded ``key=value`` pairs,
    sorted by the byte order of those encoded strings and joined with ``&``.
    ``oauth_signature`` is never part of it.
    """
    pairs = [encode_pair(k, v) for k, v in request_params.items()]
    pairs.extend(
        encode_pair(k, v) for k, v in oauth_params.items() if k != "oauth_signature"
    )
    return "&".join(sorted(pairs, key=lambda p: p.encode("utf-8")))


def signature_base_string(method: Method, url: str, normalized_params: str) -> str:
    return "&".join(
        [Method(method).value, percent_encode(url), percent_encode(normalized_params)]
    )


def _check_secret(name: str, secret: str) -> None:
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in secret):
        raise SigningKeyError(f"{name} contains control characters")
    if not secret:
        logger.warning(f"{name} is empty; the signing key is weak")


def signing_key(
    consumer_secret: str,
    token_secret: str,
    mode: SigningKeyMode = "rfc5849",
) -> str:
    """
    Build the HMAC signing key ``consumer_secret&token_secret``.

    Args:
        consumer_secret: OAuth consumer secret.
        token_secret: OAuth access token secret.
        mode: ``rfc5849`` percent-encodes both secrets before joining them.
              ``raw`` joins them unencoded, which some verifiers expect.

    Raises:
        SigningKeyError: If a secret contains control characters, if a raw-mode
                         secret contains ``&``, or if the mode is unknown.
    """
    _check_secret("consumer secret", consumer_secret)
    _check_secret("access token secret", token_secret)

    if mode == "rfc5849":
        return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"

    if mode == "raw":
        if "&" in consumer_secret or "&" in token_secret:
            raise SigningKeyError("raw signing key is ambiguous: a secret contains '&'")
        return f"{consumer_secret}&{token_secret}"

    raise SigningKeyError(f"Unsupported signing key mode: {mode!r}")


def hmac_sha1_signature(key: str, base_string: str) -> str:
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(oauth_params: Mapping[str, str]) -> str:
    pairs = [f'{k}="{percent_encode(oauth_params[k])}"' for k in sorted(oauth_params)]
    return "OAuth " + ", ".join(pairs)


def compute_signature(
    method: Method,
    url: str,
    request_params: Mapping[str, ScalarValue],
    oauth_params: Mapping[str, str],
    credentials: Credentials,
    *,
    signing_key_mode: SigningKeyMode = "rfc5849",
) -> str:
    normalized = normalized_parameter_string(request_params, oauth_params)
    base_string = signature_base_string(method, url, normalized)
    key = signing_key(
        credentials.consumer_secret,
        credentials.access_token_secret,
        signing_key_mode,
    )
    return hmac_sha1_signature(key, base_string)


class OAuth1Signer:
    """Signs requests with a fixed set of credentials.

    Example:
        >>> signer = OAuth1Signer(credentials)
        >>> signed = signer.sign(Method.GET, "https://api.twitter.com/1.1/test.json", {"q": "a b"})
        >>> signed.authorization
        'OAuth oauth_consumer_key="...", ...'
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], float] = time.time,
        signing_key_mode: SigningKeyMode = "rfc5849",
    ):
        self.credentials = credentials
        self.nonce_factory = nonce_factory
        self.clock = clock
        self.signing_key_mode = signing_key_mode

    def sign(
        self,
        method: Method,
        url: str,
        parameters: Mapping[str, ScalarValue],
        *,
        nonce: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> SignedRequest:
        method = Method(method)
        nonce = nonce if nonce is not None else self.nonce_factory()
        timestamp = timestamp if timestamp is not None else generate_timestamp(self.clock)

        params = dict(parameters)
        oauth_params = oauth_parameters(self.credentials, nonce, timestamp)

        normalized = normalized_parameter_string(params, oauth_params)
        base_string = signature_base_string(method, url, normalized)
        logger.debug(f"Signature base string: {base_string}")
        logger.debug(f"Signing key mode: {self.signing_key_mode}")

        key = signing_key(
            self.credentials.consumer_secret,
            self.credentials.access_token_secret,
            self.signing_key_mode,
        )
        oauth_params["oauth_signature"] = hmac_sha1_signature(key, base_string)

        return SignedRequest(
            method=method,
            url=url,
            parameters=params,
            oauth_parameters=oauth_params,
            base_string=base_string,
            authorization=authorization_header(oauth_params),
        )
