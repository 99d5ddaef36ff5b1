"""
Example usage of the Medicare Pricing Client.

The first examples run offline and show how configuration headers and
response envelopes behave. The last one calls the API and needs an API key
in the MPH_API_KEY environment variable.
"""

import os
from datetime import date

from medicare_pricing import (
    Claim,
    Client,
    Diagnosis,
    FormType,
    PriceConfig,
    Pricing,
    Response,
    Responses,
    Service,
    get_headers,
)


# fake inpatient claim for demonstration purposes
INPATIENT_CLAIM = Claim(
    claim_id="CLM001",
    npi="1962999664",
    provider_zip="35960",
    drg="461",
    patient_date_of_birth=date(1988, 1, 2),
    form_type=FormType.UB04,
    bill_type_or_pos="111",
    billed_amount=47224,
    date_from=date(2020, 2, 27),
    date_through=date(2020, 2, 28),
    principal_diagnosis=Diagnosis(code="N186"),
    other_diagnoses=[
        Diagnosis(code="Z992"),
        Diagnosis(code="I120"),
        Diagnosis(code="E6601"),
        Diagnosis(code="E785"),
        Diagnosis(code="Z6832"),
    ],
    services=[
        Service(line_number="1", rev_code="320", billed_amount=2126, date_from=date(2020, 2, 27),
                date_through=date(2020, 2, 27), procedure_code="76000", quantity=1),
        Service(line_number="2", rev_code="360", billed_amount=28684, date_from=date(2020, 2, 27),
                date_through=date(2020, 2, 27), procedure_code="36821", quantity=1),
        Service(line_number="3", rev_code="370", billed_amount=16414, date_from=date(2020, 2, 27),
                date_through=date(2020, 2, 27), quantity=48),
    ],
)

CONFIG = PriceConfig(
    is_commercial=True,  # use commercial code crosswalks
    use_commercial_synthetic_for_not_allowed=True,  # synthetic Medicare for lines Medicare does not allow
    use_best_drg_price=True,  # price with the claim DRG and the grouper DRG, keep the best
    override_threshold=300,  # override edit failures up to this amount
    include_edits=True,  # explain why a claim failed editing
)


def example_1_config_headers():
    """Example 1: Headers sent for a pricing configuration."""
    print("=" * 80)
    print("Example 1: Configuration Headers")
    print("=" * 80)

    for name, value in sorted(get_headers(CONFIG).items()):
        print(f"  {name}: {value}")
    print()


def example_2_decode_single_response():
    """Example 2: Decoding modern and legacy single-result responses."""
    print("=" * 80)
    print("Example 2: Single Result Responses")
    print("=" * 80)

    payloads = [
        '{"result": {"claimID": "CLM001", "medicareAmount": 12345.67, "medicareRepricingCode": "MED"}, "status": 200}',
        '{"error": {"title": "invalid claim", "detail": "billTypeOrPOS is required"}, "status": 400}',
        '{"message": "bad input", "code": 400}',
    ]

    for payload in payloads:
        pricing, error = Response[Pricing].from_json(payload).unwrap()
        if error is not None:
            kind = "fatal" if error.is_fatal else "client"
            print(f"  {kind} error ({error.error_code}): {error}")
        else:
            print(f"  {pricing.claim_id}: ${pricing.medicare_amount:,.2f} ({pricing.medicare_repricing_code})")
    print()


def example_3_repricing_note():
    """Example 3: Building a repricing note from edit details."""
    print("=" * 80)
    print("Example 3: Repricing Notes")
    print("=" * 80)

    payload = """
    {
        "results": [
            {
                "claimID": "CLM002",
                "editError": {"title": "claim edits failed", "detail": "see editDetail for more information"},
                "editDetail": {
                    "claimRejectionReasons": ["invalid diagnosis code", "missing discharge status"],
                    "claimDenialReasons": ["missing discharge status"]
                },
                "medicareRepricingNote": "not priced"
            }
        ],
        "status": 200,
        "successCount": 0,
        "errorCount": 1
    }
    """
    results, error = Responses[Pricing].from_json(payload).unwrap()
    for pricing in results:
        print(f"  {pricing.claim_id}: {pricing.get_repricing_note()}")
    print()


def example_4_price_claim():
    """Example 4: Pricing a claim against the API."""
    print("=" * 80)
    print("Example 4: Price a Claim")
    print("=" * 80)

    api_key = os.environ.get("MPH_API_KEY")
    if not api_key:
        print("  skipped: set MPH_API_KEY to call the API")
        print()
        return

    with Client.default(api_key) as client:
        pricing, error = client.price(CONFIG, INPATIENT_CLAIM).unwrap()

    if error is not None:
        print(f"  ERROR: {error}")
    else:
        print(f"  Medicare amount: ${pricing.medicare_amount:,.2f}")
        print(f"  Notes: {pricing.get_repricing_note()}")
    print()


def main():
    """Run all examples."""
    print("\n")
    print("=" * 80)
    print("MEDICARE PRICING CLIENT - EXAMPLE USAGE")
    print("=" * 80)
    print()

    example_1_config_headers()
    example_2_decode_single_response()
    example_3_repricing_note()
    example_4_price_claim()

    print("=" * 80)
    print("All examples completed successfully!")
    print("=" * 80)
    print()


if __name__ == "__main__":
    main()
