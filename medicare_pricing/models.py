"""
Data models for claims and rate sheets sent to the pricing API.

These models carry no pricing logic. They exist so that claims can be built
in Python and serialized into the JSON the API accepts.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

DATE_FORMAT = "%Y%m%d"


class ApiModel(BaseModel):
    """
    Base for every record that travels over the wire.

    Attributes are snake_case in Python and camelCase in JSON. Fields whose
    JSON name is not plain camelCase declare an explicit alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json(self) -> str:
        """Serialize using wire names, leaving out unset optional fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        if len(value) != len("YYYYMMDD") or not value.isdigit():
            raise ValueError(f"date must be formatted as YYYYMMDD, got {value!r}")
        return datetime.strptime(value, DATE_FORMAT).date()
    return value


def _format_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


# Dates travel as "YYYYMMDD"; null and "" both mean no date.
PricingDate = Annotated[
    Optional[date],
    BeforeValidator(_parse_date),
    PlainSerializer(_format_date, when_used="json"),
]


class FormType(str, Enum):
    UB04 = "UB-04"
    HCFA = "HCFA"


class BillTypeSequence(str, Enum):
    """Third digit of the institutional bill type."""

    NON_PAY = "0"
    ADMIT_THROUGH_DISCHARGE = "1"
    FIRST_INTERIM = "2"
    CONTINUING_INTERIM = "3"
    LAST_INTERIM = "4"
    LATE_CHARGE = "5"
    FIRST_INTERIM_DEPRECATED = "6"
    REPLACEMENT = "7"
    VOID_OR_CANCEL = "8"
    FINAL_CLAIM = "9"
    CWF_ADJUSTMENT = "G"
    CMS_ADJUSTMENT = "H"
    INTERMEDIARY_ADJUSTMENT = "I"
    OTHER_ADJUSTMENT = "J"
    OIG_ADJUSTMENT = "K"
    MSP_ADJUSTMENT = "M"
    QIO_ADJUSTMENT = "P"
    PROVIDER_ADJUSTMENT = "Q"


class SexType(IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


class Provider(ApiModel):
    """Billing or rendering provider identification."""

    npi: Optional[str] = Field(None, description="National Provider Identifier")
    provider_tax_id: Optional[str] = Field(None, alias="providerTaxID")
    provider_phones: Optional[List[str]] = None
    provider_faxes: Optional[List[str]] = None
    provider_emails: Optional[List[str]] = None
    provider_license_number: Optional[str] = None
    provider_commercial_number: Optional[str] = None
    provider_taxonomy: Optional[str] = None
    provider_first_name: Optional[str] = None
    provider_last_name: Optional[str] = None
    provider_org_name: Optional[str] = None
    provider_address1: Optional[str] = None
    provider_address2: Optional[str] = None
    provider_city: Optional[str] = None
    provider_state: Optional[str] = None
    provider_zip: Optional[str] = Field(None, alias="providerZIP")


class Diagnosis(ApiModel):
    """Principal, other, admitting or external cause of injury diagnosis."""

    code: Optional[str] = Field(None, description="ICD-10-CM diagnosis code")
    present_on_admission: Optional[str] = Field(None, description="Present on admission indicator")


class ValueCode(ApiModel):
    code: Optional[str] = None
    amount: Optional[Decimal] = None


class Service(Provider):
    """A single service line on a claim."""

    line_number: Optional[str] = None
    rev_code: Optional[str] = Field(None, description="Revenue code (institutional claims)")
    procedure_code: Optional[str] = Field(None, description="CPT or HCPCS procedure code")
    procedure_modifiers: Optional[List[str]] = None
    drug_code: Optional[str] = Field(None, description="National Drug Code")
    date_from: PricingDate = None
    date_through: PricingDate = None
    billed_amount: Optional[float] = None
    allowed_amount: Optional[float] = None
    paid_amount: Optional[float] = None
    quantity: float = Field(0.0, description="Service units; always sent, even when zero")
    units: Optional[str] = None
    place_of_service: Optional[str] = None
    diagnosis_pointers: Optional[List[int]] = None
    ambulance_pickup_zip: Optional[str] = Field(
        None,
        alias="ambulancePickupZIP",
        description="Overrides the claim-level pickup ZIP for this line",
    )


class Claim(Provider):
    """
    A medical claim submitted for pricing.

    Institutional (UB-04) and professional (HCFA) claims share this model;
    which fields are required depends on the form type.
    """

    claim_id: Optional[str] = Field(None, alias="claimID")
    plan_code: Optional[str] = None
    patient_sex: Optional[SexType] = None
    patient_date_of_birth: PricingDate = None
    patient_height_in_cm: Optional[float] = Field(None, alias="patientHeightInCM")
    patient_weight_in_kg: Optional[float] = Field(None, alias="patientWeightInKG")
    ambulance_pickup_zip: Optional[str] = Field(None, alias="ambulancePickupZIP")
    form_type: Optional[FormType] = None
    bill_type_or_pos: Optional[str] = Field(
        None,
        alias="billTypeOrPOS",
        description="Bill type for UB-04 claims, place of service for HCFA claims",
    )
    bill_type_sequence: Optional[BillTypeSequence] = None
    billed_amount: Optional[float] = None
    allowed_amount: Optional[float] = Field(None, description="Plan allowed amount")
    paid_amount: Optional[float] = Field(None, description="Plan paid amount")
    date_from: PricingDate = Field(None, description="Earliest service date on the claim")
    date_through: PricingDate = Field(None, description="Latest service date on the claim")
    discharge_status: Optional[str] = None
    admit_diagnosis: Optional[str] = None
    principal_diagnosis: Optional[Diagnosis] = None
    other_diagnoses: Optional[List[Diagnosis]] = None
    principal_procedure: Optional[str] = None
    other_procedures: Optional[List[str]] = None
    condition_codes: Optional[List[str]] = None
    value_codes: Optional[List[ValueCode]] = None
    occurrence_codes: Optional[List[str]] = None
    drg: Optional[str] = None
    services: Optional[List[Service]] = None


class RateSheetService(ApiModel):
    """One code on a rate sheet to be estimated."""

    procedure_code: Optional[str] = None
    procedure_modifiers: Optional[List[str]] = None
    rev_code: Optional[str] = None
    place_of_service: Optional[str] = None
    billed_amount: Optional[float] = None
    quantity: float = 0.0


class RateSheet(Provider):
    """A provider and the list of codes whose Medicare rates should be estimated."""

    form_type: Optional[FormType] = None
    bill_type_or_pos: Optional[str] = Field(None, alias="billTypeOrPOS")
    drg: Optional[str] = None
    services: Optional[List[RateSheetService]] = None
