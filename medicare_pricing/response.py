"""
Response envelopes returned by the pricing API.

Every endpoint wraps its payload in an envelope loosely based on IETF RFC 7807
problem details. An error response looks like::

    {
        "error": {
            "title": "Incorrect username or password.",
            "detail": "Authentication failed due to incorrect username or password."
        },
        "status": 401
    }

a single result like::

    {"result": {"procedureCode": "ABC", "billedAverage": 15.23}, "status": 200}

and a batch like::

    {
        "results": [{"procedureCode": "ABC"}, {"procedureCode": "DEF"}],
        "status": 200,
        "successCount": 2,
        "errorCount": 0
    }

Older servers report errors as ``{"message": "...", "code": 400}``. When
``code`` is non-zero it takes precedence over any ``error``/``status`` in the
same payload: the message becomes the error title and the code becomes the
status.

Use ``unwrap()`` rather than reading envelope fields directly.
"""

from typing import Any, Generic, List, Optional, Tuple, TypeVar, Union

from pydantic import ConfigDict, Field, field_validator, model_validator

from .errors import PricingError, ResponseError
from .models import ApiModel

ResultT = TypeVar("ResultT")


class _LegacyFields(ApiModel):
    """
    The message/code pair used by the older envelope shape.

    The modern fields a legacy error replaces are read here as well, so that
    a malformed ``error`` or ``status`` is rejected even when it is discarded.
    """

    model_config = ConfigDict(strict=True)

    message: Optional[str] = None
    code: Optional[int] = None
    error: Optional[ResponseError] = None
    status_code: Optional[int] = Field(None, alias="status")


class _Envelope(ApiModel):
    # no numeric strings or booleans standing in for numbers
    model_config = ConfigDict(frozen=True, strict=True)

    error: Optional[ResponseError] = None
    status_code: int = Field(0, alias="status")

    @model_validator(mode="before")
    @classmethod
    def _apply_legacy_shape(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        legacy = _LegacyFields.model_validate(data)
        if not legacy.code:
            return data

        normalized = {key: value for key, value in data.items() if key != "status_code"}
        normalized["error"] = ResponseError(title=legacy.message or "")
        normalized["status"] = legacy.code
        return normalized

    @classmethod
    def from_json(cls, data: Union[str, bytes]):
        """
        Decode an envelope from JSON.

        Raises:
            pydantic.ValidationError: On malformed JSON or mismatched field types
        """
        return cls.model_validate_json(data)

    def get_error(self) -> Optional[PricingError]:
        """The envelope's error classified by its status code, or None."""
        if self.error is None:
            return None
        return PricingError(self.error.title, self.error.detail, self.status_code)


class Response(_Envelope, Generic[ResultT]):
    """Envelope for an endpoint that returns a single result."""

    result: Optional[ResultT] = None

    def unwrap(self) -> Tuple[Optional[ResultT], Optional[PricingError]]:
        """
        Split the envelope into ``(result, error)``.

        When an error is present the result is None, even if the server sent
        one alongside the error.
        """
        error = self.get_error()
        if error is not None:
            return None, error
        return self.result, None


class _BatchEnvelope(_Envelope):
    """
    Shared behavior of batch envelopes.

    Results are in the same order as the submitted inputs. The counts are
    informational; they are not required to add up to ``len(results)``.
    """

    success_count: int = 0
    error_count: int = 0

    @field_validator("results", mode="before", check_fields=False)
    @classmethod
    def _null_results(cls, value: Any) -> Any:
        return [] if value is None else value

    def unwrap(self) -> Tuple[List[Any], Optional[PricingError]]:
        """
        Split the envelope into ``(results, error)``.

        When the whole request failed the results are not surfaced and an
        empty list is returned with the error.
        """
        error = self.get_error()
        if error is not None:
            return [], error
        return self.results, None


class Responses(_BatchEnvelope, Generic[ResultT]):
    """Envelope for an endpoint that returns a batch of results."""

    results: List[ResultT] = Field(default_factory=list)


class ErrorAndResult(ApiModel, Generic[ResultT]):
    """
    One item of a batch that may carry an error, a result, or both.

    Both values are kept as received. The error wins when classifying the item.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    error: Optional[ResponseError] = None
    result: Optional[ResultT] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Tuple[Optional[ResultT], Optional[ResponseError]]:
        return self.result, self.error


class ErrorAndResultResponses(_BatchEnvelope, Generic[ResultT]):
    """Batch envelope whose items each pair an optional error with an optional result."""

    results: List[ErrorAndResult[ResultT]] = Field(default_factory=list)
