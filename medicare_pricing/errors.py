"""
Error types shared by the pricing client.

Two representations exist:

- ``ResponseError`` is the wire form found inside response envelopes and
  pricing results: a title and a human-readable detail.
- ``PricingError`` is what callers receive from ``unwrap()``. It carries the
  envelope's status code, which decides whether the error is fatal (5xx) or
  a client-correctable problem.
"""

from http import HTTPStatus
from typing import Any, Optional, Union

from pydantic import ConfigDict, model_serializer

from .models import ApiModel

EDIT_ERROR_TITLE = "claim edits failed"
FATAL_EDIT_ERROR_TITLE = "fatal edit error"
EDIT_ERROR_DETAIL = "see editDetail for more information"

# Titles of edit errors that say nothing beyond "look at the edit detail".
GENERIC_EDIT_ERROR_TITLES = frozenset({EDIT_ERROR_TITLE, FATAL_EDIT_ERROR_TITLE})


class PriceConfigError(ValueError):
    """Raised when pricing configuration headers describe an invalid combination."""


class ResponseError(ApiModel):
    """
    Title and detail of an error reported by the API.

    The canonical text form is ``"Title: Detail"``; ``parse_response_error``
    reverses it.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    detail: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: Any) -> Any:
        data = handler(self)
        return {key: value for key, value in data.items() if value != ""}

    def __str__(self) -> str:
        if self.is_empty():
            return ""
        return f"{self.title}: {self.detail}"

    def is_empty(self) -> bool:
        return self.title == "" and self.detail == ""

    def has_specific_message(self) -> bool:
        """
        Check whether the error says something more useful than "see the edits".

        Generic edit failures only point at the claim's edit detail, so callers
        building a message should use the edit reasons instead.
        """
        return self.title not in GENERIC_EDIT_ERROR_TITLES and self.detail != EDIT_ERROR_DETAIL

    def to_client_error(self) -> Optional["PricingError"]:
        return client_error(self.title, self.detail)


def parse_response_error(text: str) -> Optional[ResponseError]:
    """
    Rebuild a ResponseError from its ``"Title: Detail"`` text form.

    Splits at the first ``": "``. Text without a separator becomes the detail
    of an error titled ``"Error"``. Empty text yields ``None``.
    """
    if text == "":
        return None

    title, separator, detail = text.partition(": ")
    if not separator:
        return ResponseError(title="Error", detail=text)
    return ResponseError(title=title, detail=detail)


def new_response_error(title: str, detail: Union[str, BaseException, None]) -> Optional[ResponseError]:
    if detail is None or str(detail) == "":
        return None
    return ResponseError(title=title, detail=str(detail))


class _ErrorJSON(ApiModel):
    title: Optional[str] = None
    error_code: Optional[int] = None


class PricingError(Exception):
    """
    An error returned by the pricing API, classified by its status code.

    Attributes:
        title: Short summary of the error
        detail: Human-readable explanation, or None when unknown
        error_code: HTTP-style status code of the response carrying the error
    """

    def __init__(self, title: str, detail: Optional[str] = None, error_code: int = 0):
        super().__init__(title, detail, error_code)
        self.title = title
        self.detail = detail
        self.error_code = int(error_code)

    @property
    def is_fatal(self) -> bool:
        """Fatal errors are server-side failures (status 500-599)."""
        return 500 <= self.error_code <= 599

    def __str__(self) -> str:
        return f"{self.title}: {self.detail if self.detail is not None else ''}"

    def __repr__(self) -> str:
        return f"PricingError(title={self.title!r}, detail={self.detail!r}, error_code={self.error_code})"

    def to_json(self) -> str:
        """
        Serialize a fatal error as ``{"title": ..., "errorCode": ...}``.

        The detail is never written. Non-fatal errors must travel as a
        ResponseError instead, so serializing one raises RuntimeError.
        """
        if self.detail is None:
            return "null"
        if not self.is_fatal:
            raise RuntimeError("cannot marshal non-fatal errors to JSON, use ResponseError instead")
        wire = _ErrorJSON(title=self.title or None, error_code=self.error_code or None)
        return wire.to_json()

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "PricingError":
        wire = _ErrorJSON.model_validate_json(data)
        return cls(wire.title or "", None, wire.error_code or 0)

    def to_response_error(self) -> Optional[ResponseError]:
        if self.detail is None or (self.title == "" and self.detail == ""):
            return None
        if self.is_fatal:
            raise RuntimeError("fatal errors cannot be converted to ResponseError")
        return ResponseError(title=self.title, detail=self.detail)


def new_error(
    title: str,
    detail: Union[str, BaseException, None],
    error_code: int,
) -> Optional[PricingError]:
    """Build a PricingError, or return None when there is no detail."""
    if detail is None:
        return None
    error = PricingError(title, str(detail), error_code)
    if isinstance(detail, BaseException):
        error.__cause__ = detail
    return error


def client_error(title: str, detail: Union[str, BaseException, None]) -> Optional[PricingError]:
    if isinstance(detail, PricingError) and detail.is_fatal:
        raise RuntimeError("cannot create client error from fatal error")
    return new_error(title, detail, int(HTTPStatus.BAD_REQUEST))


def forbidden_error(detail: Union[str, BaseException, None]) -> Optional[PricingError]:
    return new_error("Forbidden", detail, int(HTTPStatus.FORBIDDEN))


def internal_error(title: str, detail: Union[str, BaseException, None]) -> Optional[PricingError]:
    return new_error(title, detail, int(HTTPStatus.INTERNAL_SERVER_ERROR))
