from __future__ import annotations

from typing import Iterable, Optional

from rawtweet.connectors.dispatcher import DispatchResult, RequestDispatcher
from rawtweet.core.logger import get_logger
from rawtweet.models.settings import Settings
from rawtweet.models.template import RequestTemplate
from rawtweet.oauth.params import normalize_parameters
from rawtweet.oauth.signer import OAuth1Signer

logger = get_logger(__name__)


def _mask(value: str) -> str:
    if len(value) <= 4:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 4)


def run_request(
    template: RequestTemplate,
    overrides: Optional[Iterable[str]],
    settings: Settings,
    *,
    signer: Optional[OAuth1Signer] = None,
    dispatcher: Optional[RequestDispatcher] = None,
) -> DispatchResult:
    """
    Normalize parameters, sign and send one request.

    Args:
        template: Loaded request template.
        overrides: Raw ``key=value`` strings from the command line.
        settings: Credentials and HTTP settings.
        signer: Optional pre-built signer (tests inject fixed nonce/clock here).
        dispatcher: Optional pre-built dispatcher. When omitted one is created
                    and closed after the request.

    Returns:
        Status code and raw body of the response.

    Raises:
        UnsupportedValueType, ClockError, SigningKeyError, NetworkError
    """
    credentials = settings.credentials()
    logger.debug(f"Consumer Key: {credentials.consumer_key}")
    logger.debug(f"Consumer Secret: {_mask(credentials.consumer_secret)}")
    logger.debug(f"Access Token: {credentials.access_token}")
    logger.debug(f"Access Token Secret: {_mask(credentials.access_token_secret)}")

    parameters = normalize_parameters(template.parameters, overrides)

    signer = signer or OAuth1Signer(credentials, signing_key_mode=settings.signing_key_mode)
    signed = signer.sign(
        template.method,
        template.endpoint_url(settings.api_base_url),
        parameters,
    )

    logger.debug("OAuth parameters")
    for key, value in signed.oauth_parameters.items():
        logger.debug(f"{key}: {value}")
    logger.debug("General parameters")
    for key, value in signed.parameters.items():
        logger.debug(f"{key}: {value}")

    if dispatcher is not None:
        return dispatcher.dispatch(signed)

    with RequestDispatcher(settings.timeout_seconds) as owned:
        return owned.dispatch(signed)
