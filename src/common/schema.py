"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import StringConstraints, field_validator

from .documents import normalize_cpf, only_digits

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToOneFiftyString = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]
OneToTwoFiftyFiveString = t.Annotated[str, StringConstraints(min_length=1, max_length=255, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str
    demo: bool = False


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ResponseMessage(Schema):
    message: str


class ValidationErrorResponse(Schema):
    errors: dict[str, str | list[str]]


class CPFMixin(Schema):
    """Accepts a CPF in any format and exposes it normalised to 11 digits.

    Check digits are not verified here: imported registries carry CPFs that fail them and
    those people still have to be found and credentialed.
    """

    cpf: str

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value: str) -> str:
        digits = only_digits(value)
        if len(digits) > 11 or not digits.strip("0"):
            raise ValueError("Invalid CPF.")
        return normalize_cpf(value)
