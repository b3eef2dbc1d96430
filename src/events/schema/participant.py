"""Participant-related schemas."""

from datetime import date, datetime
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import Field, field_validator

from common.documents import only_digits
from common.schema import OneToTwoFiftyFiveString, StrippedString
from events.models import Participant, Registration

from .company import CompanyEditSchema, CompanySchema


class ParticipantEditSchema(Schema):
    nome: OneToTwoFiftyFiveString | None = None
    email: StrippedString | None = None
    telefone: StrippedString | None = None
    data_nascimento: date | None = None
    genero: StrippedString | None = None
    escolaridade: StrippedString | None = None
    profissao: StrippedString | None = None
    cargo: StrippedString | None = None
    endereco: StrippedString | None = None
    observacoes: StrippedString | None = None
    company_id: UUID | None = None


class ParticipantCreateSchema(ParticipantEditSchema):
    cpf: str
    nome: OneToTwoFiftyFiveString
    fonte: Participant.Fonte = Participant.Fonte.MANUAL
    company: CompanyEditSchema | None = Field(None, description="Used when company_id is not given")

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value: str) -> str:
        """Only the length is checked: imported registries carry CPFs with bad check digits."""
        digits = only_digits(value)
        if len(digits) != 11:
            raise ValueError("CPF deve conter 11 dígitos.")
        return digits


class ParticipantSchema(ModelSchema):
    company: CompanySchema | None = None

    class Meta:
        model = Participant
        fields = [
            "id",
            "cpf",
            "nome",
            "email",
            "telefone",
            "data_nascimento",
            "genero",
            "escolaridade",
            "profissao",
            "cargo",
            "endereco",
            "fonte",
            "observacoes",
            "ativo",
            "created_at",
            "updated_at",
        ]


class CredentialedParticipantSchema(ParticipantSchema):
    events_count: int = 0
    last_check_in: datetime | None = None


class CheckInSchema(Schema):
    id: UUID
    data_check_in: datetime
    responsavel_credenciamento: str = ""
    observacoes: str = ""


class RegistrationSchema(ModelSchema):
    event_id: UUID
    participant_id: UUID
    checkin: CheckInSchema | None = None

    class Meta:
        model = Registration
        fields = [
            "id",
            "ticket_category",
            "data_inscricao",
            "status",
            "forma_pagamento",
            "valor_pago",
            "codigo_inscricao",
            "observacoes",
        ]

    @staticmethod
    def resolve_checkin(obj: Registration) -> CheckInSchema | None:
        checkin = getattr(obj, "checkin", None)
        return CheckInSchema.model_validate(checkin, from_attributes=True) if checkin else None


class CredenciarSchema(Schema):
    event_id: UUID | None = Field(None, description="Defaults to the latest registration")
    observacoes: StrippedString = ""


class ParticipantEventEntrySchema(Schema):
    registration_id: UUID
    event_id: UUID
    event_nome: str
    data_inicio: datetime
    status: str
    data_inscricao: datetime
    data_check_in: datetime | None = None
    responsavel_credenciamento: str | None = None


class ParticipantReportSchema(Schema):
    participant: ParticipantSchema
    total_events: int
    total_check_ins: int
    attendance_rate: float
    events: list[ParticipantEventEntrySchema]
