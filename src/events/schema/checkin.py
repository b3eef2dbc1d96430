"""Schemas of the attendant check-in flow."""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field, model_validator

from common.documents import validate_cpf
from common.schema import CPFMixin, OneToTwoFiftyFiveString, StrippedString
from registries.schema import CompanyData, LookupSource


class CheckinSearchSchema(CPFMixin):
    event_id: str | None = Field(None, description="Event UUID or SAS event code")


class CheckinEventSearchSchema(CPFMixin):
    event_id: str = Field(..., description="Event UUID or SAS event code")


class ExistingCheckinResponse(Schema):
    already_checked_in: bool
    registration_id: UUID | None = None
    status: str | None = None
    data_check_in: datetime | None = None
    responsavel_credenciamento: str | None = None


class CheckinParticipantSchema(CPFMixin):
    nome: OneToTwoFiftyFiveString
    email: StrippedString = ""
    telefone: StrippedString = ""
    cargo: StrippedString = ""
    source: LookupSource | None = Field(None, description="Where the lookup found this participant")
    company: CompanyData | None = None

    @model_validator(mode="after")
    def check_typed_cpf(self) -> "CheckinParticipantSchema":
        """A CPF typed at the desk, not found by any lookup, must carry valid check digits."""
        if self.source is None and not validate_cpf(self.cpf):
            raise ValueError("Invalid CPF.")
        return self


class CheckinRegisterSchema(Schema):
    participant: CheckinParticipantSchema
    event_id: str = Field(..., description="Event UUID or SAS event code")
    attendant_name: StrippedString | None = None
    ticket_category: StrippedString | None = None


class CheckinRegisterResponse(Schema):
    participant_id: UUID
    registration_id: UUID
    checkin_id: UUID
    codigo_inscricao: str | None = None
    data_check_in: datetime
    responsavel_credenciamento: str
    already_checked_in: bool


class SASEventItemSchema(Schema):
    id: str
    nome: str


class FourEventsCheckSchema(CPFMixin):
    event_id: str


class FourEventsCheckResponse(Schema):
    registered: bool


class FourEventsRegisterSchema(CPFMixin):
    event_id: str
    name: OneToTwoFiftyFiveString
    email: StrippedString
    phone: StrippedString | None = None
    ticket_category: StrippedString | None = None


class FourEventsRegisterResponse(Schema):
    success: bool = True
    data: dict = Field(default_factory=dict)


class WebhookCallbackSchema(Schema):
    retorno: str | None = None
    message: str | None = None
    correlation_id: str | None = None
    payload: dict | None = None


class WebhookCallbackResponse(Schema):
    ok: bool = True
