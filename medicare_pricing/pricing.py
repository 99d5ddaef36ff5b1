"""
Pricing results returned by the pricing API.

The models here mirror what the server sends back. Apart from decoding, the
only logic is assembling human-readable notes from a result's edit errors,
edit reasons and repricing notes.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_validator

from .config import PriceConfig
from .errors import EDIT_ERROR_DETAIL, EDIT_ERROR_TITLE, FATAL_EDIT_ERROR_TITLE, ResponseError
from .models import ApiModel
from .ordered_set import OrderedSet

PRICE_ERROR_TITLE = "pricing not available"
SYNTHETIC_PRICER_RESULT = "Processed via synthetic Medicare"

ERROR_EDIT_SEE_DETAIL = ResponseError(title=EDIT_ERROR_TITLE, detail=EDIT_ERROR_DETAIL)
ERROR_EDIT_FATAL = ResponseError(
    title=FATAL_EDIT_ERROR_TITLE,
    detail="claim must be returned to provider for resolution",
)

NOTE_SEPARATOR = ". "
EDIT_SEPARATOR = "|"


class ClaimRepricingCode(str, Enum):
    """Methodology used for a claim-level amount."""

    MEDICARE = "MED"
    CONTRACT_PRICING = "CON"
    RBP_PRICING = "RBP"
    CORAL_RBP_PRICING = "CRBP"
    SINGLE_CASE_AGREEMENT = "SCA"
    NEEDS_MORE_INFO = "IFO"
    OUT_OF_NETWORK = "OON"


class LineRepricingCode(str, Enum):
    """Methodology used for a line-level amount, or why it is zero."""

    MEDICARE = "MED"
    MEDICARE_PERCENT = "MPT"
    MEDICARE_NO_OUTLIER = "MNO"
    SYNTHETIC_MEDICARE = "SYN"
    BILLED_PERCENT = "BIL"
    FEE_SCHEDULE = "FSC"
    PER_DIEM = "PDM"
    FLAT_RATE = "FLT"
    COST_PERCENT = "CST"
    LIMITED_TO_BILLED = "LTB"

    # zero dollar explanations
    NOT_REPRICED_PER_REQUEST = "NRP"
    NOT_ALLOWED_BY_MEDICARE = "NAM"
    PACKAGED = "PKG"
    NEEDS_MORE_INFO = "IFO"
    PROCEDURE_CODE_PROBLEM = "CPB"
    OUT_OF_NETWORK = "OON"


class HospitalType(str, Enum):
    ACUTE_CARE = "Acute Care Hospitals"
    CRITICAL_ACCESS = "Critical Access Hospitals"
    CHILDRENS = "Childrens"
    PSYCHIATRIC = "Psychiatric"
    ACUTE_CARE_DOD = "Acute Care - Department of Defense"


class MedicareSource(str, Enum):
    """Fee schedule or pricer that produced the Medicare amount."""

    AMBULANCE = "AmbulanceFS"
    ANESTHESIA = "AnesthesiaFS"
    ASC = "ASC pricer"
    CRITICAL_ACCESS_HOSPITAL = "CAH pricer"
    DME = "DMEFS"
    DRUGS = "DrugsFS"
    EDIT_ERROR = "Claim editor"
    ESTIMATE_BY_CODE_ONLY = "CodeOnly"
    ESTIMATE_BY_LOCALITY_ONLY = "LocalityOnly"
    ESTIMATE_BY_NATIONAL = "National"
    ESTIMATE_BY_STATE_CODE = "StateCode"
    ESTIMATE_BY_STATE_ONLY = "StateOnly"
    ESTIMATE_BY_UNKNOWN = "Unknown"
    INPATIENT = "IPPS"
    LABS = "LabsFS"
    MPFS = "MPFS"
    OUTPATIENT = "Outpatient pricer"
    MANUAL_PRICING = "Manual Pricing"
    SNF = "SNF PPS"
    SYNTHETIC = "Synthetic Medicare"


class RuralIndicator(str, Enum):
    RURAL = "R"
    SUPER_RURAL = "B"
    URBAN = ""


# Older servers sent the character code of the indicator as an integer.
_LEGACY_RURAL_INDICATORS = {0: RuralIndicator.URBAN, 66: RuralIndicator.SUPER_RURAL, 82: RuralIndicator.RURAL}


def _is_empty_value(value: Any) -> bool:
    if isinstance(value, DetailModel):
        return value.is_empty()
    if isinstance(value, ApiModel):
        return value == type(value)()
    return not value


def join_notes(*notes: Optional[str]) -> str:
    """Join the non-empty notes with ". "."""
    return NOTE_SEPARATOR.join(note for note in notes if note)


class DetailModel(ApiModel):
    """A result record that may come back with nothing filled in."""

    def is_empty(self) -> bool:
        return all(_is_empty_value(getattr(self, name)) for name in type(self).model_fields)


class InpatientPriceDetail(DetailModel):
    """Pricing details for an inpatient claim."""

    drg: Optional[str] = Field(None, description="DRG code used to price the claim")
    drg_amount: Optional[float] = Field(None, description="Amount Medicare would pay for the DRG")
    passthrough_amount: Optional[float] = Field(
        None,
        description="Per diem amount for capital-related costs, direct medical education and other costs",
    )
    outlier_amount: Optional[float] = Field(None, description="Additional amount paid for high cost cases")
    indirect_medical_education_amount: Optional[float] = Field(
        None,
        description="Additional amount paid for teaching hospitals",
    )
    disproportionate_share_amount: Optional[float] = Field(
        None,
        description="Additional amount paid for hospitals serving many low-income patients",
    )
    uncompensated_care_amount: Optional[float] = None
    readmission_adjustment_amount: Optional[float] = None
    value_based_purchasing_amount: Optional[float] = None
    wage_index: Optional[float] = None


class OutpatientPriceDetail(DetailModel):
    """Pricing details for an outpatient claim."""

    outlier_amount: Optional[float] = None
    first_passthrough_drug_offset_amount: Optional[float] = None
    second_passthrough_drug_offset_amount: Optional[float] = None
    third_passthrough_drug_offset_amount: Optional[float] = None
    first_device_offset_amount: Optional[float] = None
    second_device_offset_amount: Optional[float] = None
    full_or_partial_device_credit_offset_amount: Optional[float] = None
    terminated_device_procedure_offset_amount: Optional[float] = None
    wage_index: Optional[float] = None


class ProviderDetail(DetailModel):
    """
    Provider and locality information used for pricing.

    Not every field comes back with every request; the CMS Certification
    Number, for example, is only returned for facilities that have one.
    """

    ccn: Optional[str] = Field(None, description="CMS Certification Number")
    mac: int = Field(0, description="Medicare Administrative Contractor number")
    locality: int = Field(0, description="Geographic locality number")
    geographic_cbsa: Optional[int] = Field(None, alias="geographicCBSA")
    state_cbsa: Optional[int] = Field(None, alias="stateCBSA")
    rural_indicator: Optional[RuralIndicator] = None
    specialty_type: Optional[str] = None
    hospital_type: Optional[str] = None

    @field_validator("rural_indicator", mode="before")
    @classmethod
    def _legacy_rural_indicator(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            if value not in _LEGACY_RURAL_INDICATORS:
                raise ValueError(f"invalid RuralIndicator value: {value}")
            return _LEGACY_RURAL_INDICATORS[value]
        return value


class AllowedRepricingFormula(DetailModel):
    """How the allowed amount of a line was calculated."""

    medicare_percent: Optional[float] = None
    billed_percent: Optional[float] = None
    fee_schedule: Optional[float] = None
    fixed_amount: Optional[float] = None
    per_diem: Optional[float] = None


class ClaimEdits(DetailModel):
    """Reasons a claim was denied, rejected, suspended or returned to the provider."""

    hcp13_deny_code: Optional[str] = Field(
        None,
        alias="hcpDenyCode",
        description="Deny code for the HCP13 element of EDI 837 claims",
    )
    claim_overall_disposition: Optional[str] = None
    claim_rejection_disposition: Optional[str] = None
    claim_denial_disposition: Optional[str] = None
    claim_return_to_provider_disposition: Optional[str] = None
    claim_suspension_disposition: Optional[str] = None
    line_item_rejection_disposition: Optional[str] = None
    line_item_denial_disposition: Optional[str] = None
    claim_rejection_reasons: Optional[List[str]] = None
    claim_denial_reasons: Optional[List[str]] = None
    claim_return_to_provider_reasons: Optional[List[str]] = None
    claim_suspension_reasons: Optional[List[str]] = None
    line_item_rejection_reasons: Optional[List[str]] = None
    line_item_denial_reasons: Optional[List[str]] = None

    def get_reasons(self) -> List[str]:
        """All reasons across the six reason lists, first occurrence wins."""
        reasons: OrderedSet[str] = OrderedSet()
        reasons.add_iterables(
            self.claim_rejection_reasons,
            self.claim_denial_reasons,
            self.claim_return_to_provider_reasons,
            self.claim_suspension_reasons,
            self.line_item_rejection_reasons,
            self.line_item_denial_reasons,
        )
        return reasons.items()

    def get_message(self) -> str:
        return EDIT_SEPARATOR.join(self.get_reasons())


class LineEdits(DetailModel):
    """Outpatient editor errors that kept a line item from being priced."""

    procedure_edits: Optional[List[str]] = None
    modifier1_edits: Optional[List[str]] = None
    modifier2_edits: Optional[List[str]] = None
    modifier3_edits: Optional[List[str]] = None
    modifier4_edits: Optional[List[str]] = None
    modifier5_edits: Optional[List[str]] = None
    data_edits: Optional[List[str]] = None
    revenue_edits: Optional[List[str]] = None

    def get_message(self) -> str:
        edits: List[str] = []
        for group in (
            self.procedure_edits,
            self.revenue_edits,
            self.modifier1_edits,
            self.modifier2_edits,
            self.modifier3_edits,
            self.modifier4_edits,
            self.modifier5_edits,
            self.data_edits,
        ):
            edits.extend(group or [])
        return EDIT_SEPARATOR.join(edits)


class PricedService(DetailModel):
    """Pricing for a single service line."""

    line_number: Optional[str] = None
    provider_detail: Optional[ProviderDetail] = Field(
        None,
        description="Provider used for this line when it differs from the claim",
    )
    medicare_amount: Optional[float] = None
    allowed_amount: Optional[float] = None
    medicare_repricing_code: Optional[str] = None
    medicare_repricing_note: Optional[str] = None
    network_code: Optional[str] = None
    allowed_repricing_code: Optional[str] = None
    allowed_repricing_note: Optional[str] = None
    allowed_repricing_formula: Optional[AllowedRepricingFormula] = None
    technical_component_amount: Optional[float] = Field(None, alias="tcAmount")
    professional_component_amount: Optional[float] = Field(None, alias="pcAmount")
    medicare_std_dev: Optional[float] = None
    medicare_source: Optional[str] = None
    pricer_result: Optional[str] = None
    status_indicator: Optional[str] = None
    payment_indicator: Optional[str] = None
    discount_formula: Optional[str] = None
    line_item_denial_or_rejection_flag: Optional[str] = None
    packaging_flag: Optional[str] = None
    payment_adjustment_flag: Optional[str] = None
    payment_adjustment_flag2: Optional[str] = None
    payment_method_flag: Optional[str] = None
    composite_adjustment_flag: Optional[str] = None
    hcpcs_apc: Optional[str] = Field(None, alias="hcpcsAPC")
    payment_apc: Optional[str] = Field(None, alias="paymentAPC")
    edit_detail: Optional[LineEdits] = None

    def get_repricing_note(self) -> str:
        """Line edit messages followed by the allowed (or else Medicare) repricing note."""
        edits = self.edit_detail.get_message() if self.edit_detail is not None else ""
        return join_notes(edits, self.allowed_repricing_note or self.medicare_repricing_note)


class Pricing(DetailModel):
    """
    The result of pricing a claim.

    Example:
        >>> pricing = Pricing(medicare_amount=1234.5, medicare_repricing_note="priced by IPPS")
        >>> pricing.get_repricing_note()
        'priced by IPPS'
    """

    claim_id: Optional[str] = Field(None, alias="claimID")
    medicare_amount: Optional[float] = Field(None, description="Amount Medicare would pay")
    allowed_amount: Optional[float] = Field(None, description="Allowed amount from contract or RBP pricing")
    medicare_repricing_code: Optional[str] = None
    medicare_repricing_note: Optional[str] = None
    network_code: Optional[str] = None
    allowed_repricing_code: Optional[str] = None
    allowed_repricing_note: Optional[str] = None
    medicare_std_dev: Optional[float] = Field(None, description="Standard deviation of an estimated amount")
    medicare_source: Optional[str] = None
    inpatient_price_detail: Optional[InpatientPriceDetail] = None
    outpatient_price_detail: Optional[OutpatientPriceDetail] = None
    provider_detail: Optional[ProviderDetail] = None
    edit_detail: Optional[ClaimEdits] = None
    pricer_result: Optional[str] = None
    price_config: Optional[PriceConfig] = Field(None, description="Configuration used to price the claim")
    services: Optional[List[PricedService]] = None
    edit_error: Optional[ResponseError] = Field(
        None,
        description="Error from some step of the pricing process",
    )

    def get_repricing_note(self) -> str:
        """
        Summarize why and how the claim was priced.

        Joins, with ". ", the edit error detail (unless the error is a generic
        edit failure), the deduplicated edit reasons separated by "|", and the
        allowed repricing note or, failing that, the Medicare repricing note.
        """
        error_detail = ""
        if self.edit_error is not None and self.edit_error.has_specific_message():
            error_detail = self.edit_error.detail
        edits = self.edit_detail.get_message() if self.edit_detail is not None else ""
        return join_notes(error_detail, edits, self.allowed_repricing_note or self.medicare_repricing_note)

    def get_edit_messages(self) -> List[str]:
        if self.edit_detail is None:
            return []
        return self.edit_detail.get_reasons()

    def has_fatal_error(self) -> bool:
        return self.edit_error is not None and self.edit_error.title == FATAL_EDIT_ERROR_TITLE
