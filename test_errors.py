"""
Tests for error types and their conversions.

Run with: pytest test_errors.py -v
"""

import json

import pytest

from medicare_pricing import PricingError, ResponseError, parse_response_error
from medicare_pricing.errors import (
    EDIT_ERROR_DETAIL,
    EDIT_ERROR_TITLE,
    FATAL_EDIT_ERROR_TITLE,
    client_error,
    forbidden_error,
    internal_error,
    new_error,
    new_response_error,
)


class TestPricingError:
    """Test the classified error returned by unwrap()."""

    def test_str(self):
        """Test the title and detail text form."""
        assert str(PricingError("foo", "bar", 500)) == "foo: bar"

    def test_str_without_detail(self):
        """Test the text form when the detail is unknown."""
        assert str(PricingError("foo")) == "foo: "

    @pytest.mark.parametrize("code,fatal", [
        (0, False),
        (200, False),
        (400, False),
        (499, False),
        (500, True),
        (503, True),
        (599, True),
        (600, False),
    ])
    def test_is_fatal(self, code, fatal):
        """Test that only 5xx status codes are fatal."""
        assert PricingError("t", "d", code).is_fatal is fatal

    def test_is_exception(self):
        """Test that the error can be raised and caught."""
        with pytest.raises(PricingError, match="foo: bar"):
            raise PricingError("foo", "bar", 400)

    def test_to_json_fatal(self):
        """Test that fatal errors serialize title and code only."""
        assert PricingError("title", "detail", 500).to_json() == '{"title":"title","errorCode":500}'

    def test_to_json_without_detail(self):
        """Test that an error with no detail serializes to null."""
        assert PricingError("title", None, 400).to_json() == "null"

    def test_to_json_not_fatal(self):
        """Test that non-fatal errors refuse to serialize."""
        with pytest.raises(RuntimeError, match="non-fatal"):
            PricingError("title", "detail", 400).to_json()

    def test_from_json(self):
        """Test reading the wire form back."""
        error = PricingError.from_json('{"title": "title", "errorCode": 503}')
        assert error.title == "title"
        assert error.detail is None
        assert error.error_code == 503
        assert error.is_fatal

    def test_from_json_missing_fields(self):
        """Test that absent fields take their zero values."""
        error = PricingError.from_json("{}")
        assert error.title == ""
        assert error.error_code == 0

    def test_to_response_error(self):
        """Test converting a client error to its wire form."""
        assert PricingError("t", "d", 400).to_response_error() == ResponseError(title="t", detail="d")

    def test_to_response_error_empty(self):
        """Test that empty errors have no wire form."""
        assert PricingError("t", None, 400).to_response_error() is None
        assert PricingError("", "", 400).to_response_error() is None

    def test_to_response_error_fatal(self):
        """Test that fatal errors cannot become a ResponseError."""
        with pytest.raises(RuntimeError):
            PricingError("t", "d", 500).to_response_error()


class TestResponseError:
    """Test the wire form of an error."""

    def test_str(self):
        """Test the canonical text form."""
        assert str(ResponseError(title="foo", detail="bar")) == "foo: bar"

    def test_str_empty(self):
        """Test that an empty error has no text."""
        assert str(ResponseError()) == ""

    def test_empty_fields_omitted(self):
        """Test that empty fields are left off the wire."""
        assert json.loads(ResponseError(title="foo").to_json()) == {"title": "foo"}
        assert json.loads(ResponseError(detail="bar").to_json()) == {"detail": "bar"}
        assert json.loads(ResponseError().to_json()) == {}

    def test_decode_missing_fields(self):
        """Test that absent fields decode as empty strings."""
        error = ResponseError.model_validate_json('{"title": "foo"}')
        assert error.title == "foo"
        assert error.detail == ""

    def test_to_client_error(self):
        """Test promoting a wire error to a client error."""
        error = ResponseError(title="foo", detail="bar").to_client_error()
        assert error.error_code == 400
        assert not error.is_fatal
        assert str(error) == "foo: bar"

    @pytest.mark.parametrize("error,specific", [
        (ResponseError(title="invalid claim", detail="missing NPI"), True),
        (ResponseError(title=EDIT_ERROR_TITLE, detail="something specific"), False),
        (ResponseError(title=FATAL_EDIT_ERROR_TITLE, detail="something specific"), False),
        (ResponseError(title="some title", detail=EDIT_ERROR_DETAIL), False),
        (ResponseError(title=EDIT_ERROR_TITLE, detail=EDIT_ERROR_DETAIL), False),
    ])
    def test_has_specific_message(self, error, specific):
        """Test that generic edit failures are not treated as specific messages."""
        assert error.has_specific_message() is specific


class TestParseResponseError:
    """Test rebuilding a ResponseError from its text form."""

    @pytest.mark.parametrize("text,expected", [
        ("title: detail", ResponseError(title="title", detail="detail")),
        ("a: b: c", ResponseError(title="a", detail="b: c")),
        ("no separator", ResponseError(title="Error", detail="no separator")),
        ("colon:without space", ResponseError(title="Error", detail="colon:without space")),
        (": detail", ResponseError(title="", detail="detail")),
        ("title: ", ResponseError(title="title", detail="")),
    ])
    def test_parse(self, text, expected):
        """Test splitting at the first separator."""
        assert parse_response_error(text) == expected

    def test_empty(self):
        """Test that empty text is no error."""
        assert parse_response_error("") is None

    def test_round_trip(self):
        """Test that parsing the text form gives back the error."""
        error = ResponseError(title="invalid claim", detail="date: out of range")
        assert parse_response_error(str(error)) == error


class TestFactories:
    """Test the error constructors."""

    def test_new_error_without_detail(self):
        """Test that no detail means no error."""
        assert new_error("t", None, 500) is None
        assert client_error("t", None) is None
        assert forbidden_error(None) is None
        assert internal_error("t", None) is None

    def test_new_error_from_exception(self):
        """Test that an exception detail is kept as the cause."""
        cause = ValueError("boom")
        error = new_error("t", cause, 502)
        assert error.detail == "boom"
        assert error.error_code == 502
        assert error.__cause__ is cause

    def test_client_error(self):
        error = client_error("bad claim", "missing NPI")
        assert (error.title, error.detail, error.error_code) == ("bad claim", "missing NPI", 400)

    def test_client_error_from_fatal_error(self):
        """Test that a fatal error cannot be downgraded to a client error."""
        with pytest.raises(RuntimeError):
            client_error("t", PricingError("t", "d", 500))

    def test_client_error_from_client_error(self):
        error = client_error("outer", PricingError("inner", "d", 400))
        assert error.detail == "inner: d"
        assert error.error_code == 400

    def test_forbidden_error(self):
        error = forbidden_error("no access")
        assert (error.title, error.detail, error.error_code) == ("Forbidden", "no access", 403)

    def test_internal_error(self):
        error = internal_error("oops", "database unavailable")
        assert error.error_code == 500
        assert error.is_fatal

    def test_new_response_error(self):
        assert new_response_error("t", None) is None
        assert new_response_error("t", "") is None
        assert new_response_error("t", ValueError("d")) == ResponseError(title="t", detail="d")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
