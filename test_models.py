"""
Tests for claim and rate sheet models.

Run with: pytest test_models.py -v
"""

import json
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from medicare_pricing import Claim, Diagnosis, FormType, RateSheet, RateSheetService, Service, ValueCode
from medicare_pricing.models import SexType


@pytest.fixture
def claim():
    """Create a small outpatient claim."""
    return Claim(
        claim_id="CLM100",
        npi="1234567890",
        provider_zip="35960",
        provider_tax_id="12-3456789",
        patient_sex=SexType.FEMALE,
        patient_date_of_birth=date(1988, 1, 2),
        patient_height_in_cm=170.5,
        form_type=FormType.UB04,
        bill_type_or_pos="131",
        billed_amount=500.0,
        date_from=date(2024, 3, 1),
        date_through=date(2024, 3, 1),
        principal_diagnosis=Diagnosis(code="R0789"),
        services=[
            Service(line_number="1", rev_code="0450", procedure_code="99284", date_from=date(2024, 3, 1),
                    billed_amount=500.0, quantity=1),
        ],
    )


class TestClaimSerialization:
    """Test the JSON written for a claim."""

    def test_wire_names(self, claim):
        """Test that attributes are written with their JSON names."""
        data = json.loads(claim.to_json())
        assert data["claimID"] == "CLM100"
        assert data["providerZIP"] == "35960"
        assert data["providerTaxID"] == "12-3456789"
        assert data["patientHeightInCM"] == 170.5
        assert data["billTypeOrPOS"] == "131"
        assert data["formType"] == "UB-04"
        assert data["patientSex"] == 2
        assert data["principalDiagnosis"] == {"code": "R0789"}

    def test_dates(self, claim):
        """Test that dates are written as YYYYMMDD."""
        data = json.loads(claim.to_json())
        assert data["patientDateOfBirth"] == "19880102"
        assert data["dateFrom"] == "20240301"
        assert data["services"][0]["dateFrom"] == "20240301"

    def test_unset_fields_omitted(self, claim):
        """Test that optional fields left unset are not written."""
        data = json.loads(claim.to_json())
        assert "drg" not in data
        assert "dischargeStatus" not in data
        assert "dateThrough" not in data["services"][0]

    def test_quantity_always_written(self):
        """Test that a zero quantity is still sent."""
        data = json.loads(Service(procedure_code="99213").to_json())
        assert data == {"procedureCode": "99213", "quantity": 0.0}

    def test_value_code_amount(self):
        """Test that value code amounts keep their exact decimal value."""
        data = json.loads(ValueCode(code="80", amount=Decimal("3.10")).to_json())
        assert data == {"code": "80", "amount": "3.10"}

    def test_python_dump_keeps_dates(self, claim):
        """Test that Python dumps keep date objects."""
        assert claim.model_dump()["patient_date_of_birth"] == date(1988, 1, 2)


class TestClaimParsing:
    """Test reading a claim from JSON."""

    def test_wire_names(self):
        claim = Claim.model_validate_json(
            '{"claimID": "A1", "providerZIP": "10001", "billTypeOrPOS": "11", "formType": "HCFA",'
            ' "ambulancePickupZIP": "10002", "patientWeightInKG": 80}'
        )
        assert claim.claim_id == "A1"
        assert claim.provider_zip == "10001"
        assert claim.bill_type_or_pos == "11"
        assert claim.form_type == FormType.HCFA
        assert claim.ambulance_pickup_zip == "10002"
        assert claim.patient_weight_in_kg == 80

    def test_attribute_names_accepted(self):
        """Test that Python attribute names also populate the model."""
        claim = Claim.model_validate({"claim_id": "A1", "bill_type_or_pos": "11"})
        assert claim.claim_id == "A1"
        assert claim.bill_type_or_pos == "11"

    def test_date(self):
        claim = Claim.model_validate_json('{"dateFrom": "20240229"}')
        assert claim.date_from == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ['""', "null"])
    def test_empty_date(self, value):
        """Test that null and empty dates mean no date."""
        assert Claim.model_validate_json(f'{{"dateFrom": {value}}}').date_from is None

    @pytest.mark.parametrize("value", ['"2024-02-29"', '"20240230"', '"2024022"', '"abcdefgh"'])
    def test_invalid_date(self, value):
        with pytest.raises(ValidationError):
            Claim.model_validate_json(f'{{"dateFrom": {value}}}')

    def test_invalid_form_type(self):
        with pytest.raises(ValidationError):
            Claim.model_validate_json('{"formType": "CMS-1500"}')

    def test_round_trip(self, claim):
        """Test that a serialized claim reads back unchanged."""
        assert Claim.model_validate_json(claim.to_json()) == claim


class TestRateSheet:
    """Test rate sheet serialization."""

    def test_wire_names(self):
        sheet = RateSheet(
            npi="1234567890",
            provider_zip="35960",
            form_type=FormType.HCFA,
            bill_type_or_pos="11",
            services=[RateSheetService(procedure_code="99213", procedure_modifiers=["25"])],
        )
        assert json.loads(sheet.to_json()) == {
            "npi": "1234567890",
            "providerZIP": "35960",
            "formType": "HCFA",
            "billTypeOrPOS": "11",
            "services": [{"procedureCode": "99213", "procedureModifiers": ["25"], "quantity": 0.0}],
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
