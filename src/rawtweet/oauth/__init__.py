"""OAuth 1.0a request signing (RFC 5849, HMAC-SHA1)."""

from rawtweet.oauth.encoding import percent_decode, percent_encode
from rawtweet.oauth.params import normalize_parameters
from rawtweet.oauth.signer import OAuth1Signer
from rawtweet.oauth.types import Credentials, Method, SignedRequest

__all__ = [
    "Credentials",
    "Method",
    "OAuth1Signer",
    "SignedRequest",
    "normalize_parameters",
    "percent_decode",
    "percent_encode",
]
