"""
Medicare Pricing Client

A typed client for a remote Medicare claim pricing API: claim models, pricing
configuration headers, and decoding of the API's response envelopes.
"""

from .client import Client, Pricer, PricingResponse, PricingResponses
from .config import PriceConfig, get_headers, parse_headers
from .errors import PriceConfigError, PricingError, ResponseError, parse_response_error
from .models import Claim, Diagnosis, FormType, Provider, RateSheet, RateSheetService, Service, ValueCode
from .ordered_set import OrderedSet
from .pricing import ClaimEdits, LineEdits, PricedService, Pricing
from .response import ErrorAndResult, ErrorAndResultResponses, Response, Responses

__version__ = "1.0.0"
__all__ = [
    "Client",
    "Pricer",
    "PricingResponse",
    "PricingResponses",
    "PriceConfig",
    "get_headers",
    "parse_headers",
    "PriceConfigError",
    "PricingError",
    "ResponseError",
    "parse_response_error",
    "Claim",
    "Diagnosis",
    "FormType",
    "Provider",
    "RateSheet",
    "RateSheetService",
    "Service",
    "ValueCode",
    "OrderedSet",
    "ClaimEdits",
    "LineEdits",
    "PricedService",
    "Pricing",
    "ErrorAndResult",
    "ErrorAndResultResponses",
    "Response",
    "Responses",
]
