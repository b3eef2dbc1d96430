from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import field_validator

from common.documents import normalize_cnpj, only_digits
from common.schema import OneToTwoFiftyFiveString, StrippedString
from events.models import Company


class CompanySchema(ModelSchema):
    class Meta:
        model = Company
        fields = ["id", "cnpj", "razao_social", "nome_fantasia", "telefone", "email", "endereco", "ativo"]


class CompanyEditSchema(Schema):
    """Company data sent along with a participant. Matched by CNPJ when given."""

    cnpj: str | None = None
    razao_social: OneToTwoFiftyFiveString
    nome_fantasia: StrippedString = ""
    telefone: StrippedString = ""
    email: StrippedString = ""
    endereco: StrippedString = ""

    @field_validator("cnpj")
    @classmethod
    def check_cnpj(cls, value: str | None) -> str | None:
        if not value or not only_digits(value):
            return None
        if len(only_digits(value)) != 14:
            raise ValueError("CNPJ deve conter 14 dígitos.")
        return normalize_cnpj(value)


class CompanySearchSchema(Schema):
    cnpj: str

    @field_validator("cnpj")
    @classmethod
    def check_cnpj(cls, value: str) -> str:
        if len(only_digits(value)) != 14:
            raise ValueError("CNPJ deve conter 14 dígitos.")
        return only_digits(value)


class CompanySearchResponse(Schema):
    cnpj: str
    razao_social: str
    nome_fantasia: str = ""


class MinimalCompanySchema(Schema):
    id: UUID
    cnpj: str | None = None
    razao_social: str
    nome_fantasia: str = ""
