"""
Pricing configuration and its HTTP header encoding.

The pricing API takes its per-request options as HTTP headers. ``get_headers``
renders a ``PriceConfig`` into those headers and ``parse_headers`` reads them
back, rejecting combinations the API does not allow.
"""

import re
from decimal import Decimal
from typing import Dict, Mapping, Optional, Tuple, Union

import httpx
from pydantic import ConfigDict, Field

from .errors import PriceConfigError
from .models import ApiModel

TRUE_VALUE = "true"

OVERRIDE_THRESHOLD_HEADER = "override-threshold"
CONTRACT_RULESET_HEADER = "contract-ruleset"

# plain decimal or exponent notation; no padding, underscores, inf or nan
_THRESHOLD_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

# (header name, PriceConfig attribute) for every boolean option
BOOLEAN_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("price-zero-billed", "price_zero_billed"),
    ("is-commercial", "is_commercial"),
    ("disable-cost-based-reimbursement", "disable_cost_based_reimbursement"),
    ("use-commercial-synthetic-for-not-allowed", "use_commercial_synthetic_for_not_allowed"),
    ("include-edits", "include_edits"),
    ("continue-on-edit-fail", "continue_on_edit_fail"),
    ("continue-on-provider-match-fail", "continue_on_provider_match_fail"),
    ("use-drg-from-grouper", "use_drg_from_grouper"),
    ("use-best-drg-price", "use_best_drg_price"),
    ("assume-impossible-anesthesia-units-are-minutes", "assume_impossible_anesthesia_units_are_minutes"),
    ("fallback-to-max-anesthesia-units-per-day", "fallback_to_max_anesthesia_units_per_day"),
    ("disable-machine-learning-estimates", "disable_machine_learning_estimates"),
    ("allow-partial-results", "allow_partial_results"),
)


class PriceConfig(ApiModel):
    """
    Options controlling how the pricing API prices a claim.

    Every option defaults to off. ``use_drg_from_grouper`` and
    ``use_best_drg_price`` are mutually exclusive; the API (and
    ``parse_headers``) rejects requests with both set.
    """

    model_config = ConfigDict(frozen=True)

    contract_ruleset: str = Field("", description="Name of the ruleset to use for contract pricing")
    price_zero_billed: bool = Field(False, description="Price claims with zero billed amounts")
    is_commercial: bool = Field(False, description="Use commercial code crosswalks")
    disable_cost_based_reimbursement: bool = Field(
        False,
        description="Do not use cost-based reimbursement for MAC priced line items",
    )
    use_commercial_synthetic_for_not_allowed: bool = Field(
        False,
        description="Use a synthetic Medicare price for line items Medicare does not allow",
    )
    use_drg_from_grouper: bool = Field(
        False,
        alias="useDRGFromGrouper",
        description="Always use the DRG from the inpatient grouper",
    )
    use_best_drg_price: bool = Field(
        False,
        alias="useBestDRGPrice",
        description="Use the better of the claim DRG price and the grouper DRG price",
    )
    override_threshold: float = Field(
        0.0,
        description="When greater than 0, override overridable edit failures up to this amount",
    )
    include_edits: bool = Field(False, description="Include edit details in the response")
    continue_on_edit_fail: bool = Field(False, description="Keep pricing when claim edits fail")
    continue_on_provider_match_fail: bool = Field(
        False,
        description="Fall back to an average provider for the area when the provider cannot be matched",
    )
    disable_machine_learning_estimates: bool = Field(
        False,
        description="Disable machine learning estimates (estimate endpoints only)",
    )
    assume_impossible_anesthesia_units_are_minutes: bool = Field(
        False,
        description="Treat impossible anesthesia unit counts as minutes",
    )
    fallback_to_max_anesthesia_units_per_day: bool = Field(
        False,
        description="Cap anesthesia units at the daily maximum instead of failing",
    )
    allow_partial_results: bool = Field(
        False,
        description="Return partially repriced claims when some line items fail",
    )


def format_threshold(value: float) -> str:
    """Shortest decimal text that parses back to ``value``, without exponent or trailing zeros."""
    return format(Decimal(repr(value)).normalize(), "f")


def get_headers(config: PriceConfig) -> Dict[str, str]:
    """
    Render a configuration as request headers.

    Only options that are switched on produce a header: true booleans, a
    threshold above zero and a non-empty contract ruleset.
    """
    headers: Dict[str, str] = {}
    for header, attribute in BOOLEAN_HEADERS:
        if getattr(config, attribute):
            headers[header] = TRUE_VALUE
    if config.override_threshold > 0:
        headers[OVERRIDE_THRESHOLD_HEADER] = format_threshold(config.override_threshold)
    if config.contract_ruleset != "":
        headers[CONTRACT_RULESET_HEADER] = config.contract_ruleset
    return headers


def _parse_threshold(value: Optional[str]) -> float:
    if value is None or not _THRESHOLD_PATTERN.fullmatch(value):
        return 0.0
    return float(value)


def parse_headers(headers: Union[Mapping[str, str], httpx.Headers]) -> PriceConfig:
    """
    Read a configuration back from request headers.

    Header names are matched case-insensitively and unknown headers are
    ignored. A missing or unparsable threshold reads as 0.

    Raises:
        PriceConfigError: If both use-drg-from-grouper and use-best-drg-price are set
    """
    lookup = httpx.Headers(headers)
    values = {attribute: lookup.get(header) == TRUE_VALUE for header, attribute in BOOLEAN_HEADERS}

    if values["use_drg_from_grouper"] and values["use_best_drg_price"]:
        raise PriceConfigError("use-drg-from-grouper and use-best-drg-price are mutually exclusive")

    return PriceConfig(
        override_threshold=_parse_threshold(lookup.get(OVERRIDE_THRESHOLD_HEADER)),
        contract_ruleset=lookup.get(CONTRACT_RULESET_HEADER, ""),
        **values,
    )
