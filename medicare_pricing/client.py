"""
HTTP client for the pricing API.

Usage:
    from medicare_pricing import Client, PriceConfig

    with Client.default("my-api-key") as client:
        response = client.price(PriceConfig(include_edits=True), claim)
        pricing, error = response.unwrap()
        if error is not None:
            print(f"Pricing failed: {error}")
        else:
            print(f"Medicare amount: ${pricing.medicare_amount:.2f}")
"""

import logging
from http import HTTPStatus
from typing import Dict, List, Optional, Protocol, Sequence, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import PriceConfig, get_headers
from .errors import ResponseError
from .models import Claim, RateSheet
from .pricing import Pricing
from .response import Response, Responses

logger = logging.getLogger(__name__)

PRODUCTION_URL = "https://api.myprice.health"
TEST_URL = "https://api-test.myprice.health"

API_KEY_HEADER = "x-api-key"
JSON_CONTENT_TYPE = "application/json"

PRICE_CLAIM_PATH = "/v1/medicare/price/claim"
PRICE_CLAIMS_PATH = "/v1/medicare/price/claims"
ESTIMATE_CLAIMS_PATH = "/v1/medicare/estimate/claims"
ESTIMATE_RATE_SHEET_PATH = "/v1/medicare/estimate/rate-sheet"

# Status reported when the request failed before any response arrived.
NO_RESPONSE_STATUS = int(HTTPStatus.INTERNAL_SERVER_ERROR)

PricingResponse = Response[Pricing]
PricingResponses = Responses[Pricing]

_CLAIMS = TypeAdapter(List[Claim])
_RATE_SHEETS = TypeAdapter(List[RateSheet])

EnvelopeT = TypeVar("EnvelopeT", PricingResponse, PricingResponses)


class Pricer(Protocol):
    """Anything that can price and estimate claims like ``Client``."""

    def price(self, config: PriceConfig, claim: Claim) -> PricingResponse: ...

    def price_batch(self, config: PriceConfig, *claims: Claim) -> PricingResponses: ...

    def estimate_claims(self, *claims: Claim) -> PricingResponses: ...

    def estimate_rate_sheet(self, *rate_sheets: RateSheet) -> PricingResponses: ...


class Client:
    """
    Client for the Medicare pricing API.

    Every call is a single blocking POST. Failures are never raised: a
    transport error or an undecodable body comes back as an envelope whose
    error is titled "fatal error calling <path>".

    Args:
        http_client: httpx client used to send requests. Timeouts, proxies and
                     transports are configured there. A new client is created
                     (and closed by ``close()``) when not provided.
        is_test: Send requests to the test environment instead of production
        api_key: Key sent in the x-api-key header
    """

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        is_test: bool = False,
        api_key: str = "",
    ):
        self.base_url = TEST_URL if is_test else PRODUCTION_URL
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()
        self._headers = {API_KEY_HEADER: api_key, "Content-Type": JSON_CONTENT_TYPE}

    @classmethod
    def default(cls, api_key: str) -> "Client":
        """Production client with a default httpx client."""
        return cls(api_key=api_key)

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def price(self, config: PriceConfig, claim: Claim) -> PricingResponse:
        """Get the Medicare reimbursement of a single claim."""
        return self._receive(
            PricingResponse,
            PRICE_CLAIM_PATH,
            claim.to_json().encode(),
            headers=get_headers(config),
        )

    def price_batch(self, config: PriceConfig, *claims: Claim) -> PricingResponses:
        """Get the Medicare reimbursement of several claims, results in input order."""
        return self._receive(
            PricingResponses,
            PRICE_CLAIMS_PATH,
            _dump(_CLAIMS, claims),
            headers=get_headers(config),
            count=len(claims),
        )

    def estimate_claims(self, *claims: Claim) -> PricingResponses:
        """Get the estimated Medicare reimbursement of several claims."""
        return self._receive(PricingResponses, ESTIMATE_CLAIMS_PATH, _dump(_CLAIMS, claims), count=len(claims))

    def estimate_rate_sheet(self, *rate_sheets: RateSheet) -> PricingResponses:
        """Get the estimated Medicare reimbursement of the codes on each rate sheet."""
        return self._receive(
            PricingResponses,
            ESTIMATE_RATE_SHEET_PATH,
            _dump(_RATE_SHEETS, rate_sheets),
            count=len(rate_sheets),
        )

    def _receive(
        self,
        envelope: Type[EnvelopeT],
        path: str,
        body: bytes,
        headers: Optional[Dict[str, str]] = None,
        count: Optional[int] = None,
    ) -> EnvelopeT:
        logger.debug("POST %s%s", self.base_url, path)
        try:
            response = self._http.post(
                self.base_url + path,
                content=body,
                headers={**self._headers, **(headers or {})},
            )
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", path, exc)
            return _fatal(envelope, path, exc, NO_RESPONSE_STATUS, count)

        if not response.content:
            return envelope(status_code=response.status_code)

        try:
            return envelope.from_json(response.content)
        except ValidationError as exc:
            logger.warning("Undecodable response from %s (status %d)", path, response.status_code)
            return _fatal(envelope, path, exc, response.status_code, count)


def _dump(adapter: TypeAdapter, items: Sequence[Union[Claim, RateSheet]]) -> bytes:
    return adapter.dump_json(list(items), by_alias=True, exclude_none=True)


def _fatal(
    envelope: Type[EnvelopeT],
    path: str,
    exc: Exception,
    status_code: int,
    count: Optional[int],
) -> EnvelopeT:
    fields = {
        "error": ResponseError(title=f"fatal error calling {path}", detail=str(exc)),
        "status_code": status_code,
    }
    if count is not None:
        fields["error_count"] = count
    return envelope(**fields)
