"""Event-related schemas."""

from datetime import datetime
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field

from common.schema import OneToTwoFiftyFiveString, StrippedString
from events.models import Event


class EventEditSchema(Schema):
    nome: OneToTwoFiftyFiveString | None = None
    descricao: StrippedString | None = None
    data_inicio: AwareDatetime | None = None
    data_fim: AwareDatetime | None = None
    local: StrippedString | None = None
    endereco: StrippedString | None = None
    capacidade: int | None = Field(None, ge=0)
    modalidade: Event.Modalidade | None = None
    tipo_evento: StrippedString | None = None
    publico_alvo: StrippedString | None = None
    gerente: StrippedString | None = None
    coordenador: StrippedString | None = None
    solucao: StrippedString | None = None
    unidade: StrippedString | None = None
    tipo_acao: StrippedString | None = None
    status: Event.Status | None = None
    meta_participantes: int | None = Field(None, ge=0)
    observacoes: StrippedString | None = None
    codevento_sas: StrippedString | None = Field(None, description="Event code in SAS")
    fourevents_id: StrippedString | None = Field(None, description="Event id in the ticketing platform")


class EventCreateSchema(EventEditSchema):
    nome: OneToTwoFiftyFiveString
    data_inicio: AwareDatetime
    data_fim: AwareDatetime
    modalidade: Event.Modalidade = Event.Modalidade.PRESENCIAL
    status: Event.Status = Event.Status.DRAFT


class EventSchema(ModelSchema):
    class Meta:
        model = Event
        fields = [
            "id",
            "nome",
            "descricao",
            "data_inicio",
            "data_fim",
            "local",
            "endereco",
            "capacidade",
            "modalidade",
            "tipo_evento",
            "publico_alvo",
            "gerente",
            "coordenador",
            "solucao",
            "unidade",
            "tipo_acao",
            "status",
            "meta_participantes",
            "observacoes",
            "ativo",
            "codevento_sas",
            "fourevents_id",
            "created_at",
            "updated_at",
        ]


class MinimalEventSchema(Schema):
    id: UUID
    nome: str
    data_inicio: datetime
    status: str
    codevento_sas: str | None = None


class EventStatsSchema(Schema):
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    cancelled: int = 0
    checked_in: int = 0
    credential_rate: float = Field(0, description="Confirmed registrations, in percent")
    attendance_rate: float = Field(0, description="Checked-in registrations, in percent")


class EventReportParticipantSchema(Schema):
    participant_id: UUID
    registration_id: UUID
    cpf: str
    nome: str
    email: str = ""
    telefone: str = ""
    empresa: str = ""
    fonte: str
    status: str
    data_inscricao: datetime
    data_check_in: datetime | None = None
    in_sas: bool = False
    ui_status: str


class EventReportSchema(Schema):
    event: EventSchema
    stats: EventStatsSchema | None = None
    participants: list[EventReportParticipantSchema] | None = None
    sas_checked: bool = Field(False, description="Whether SAS presence could be verified")
