import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field

LookupSource = t.Literal["local", "sas", "cpe", "4events"]


class CompanyData(Schema):
    cnpj: str = ""
    razao_social: str = ""
    nome_fantasia: str = ""
    cargo: str = ""


class RegistrationInfo(Schema):
    """Local enrollment of a participant in a given event."""

    registration_id: UUID
    status: str
    codigo_inscricao: str | None = None
    already_checked_in: bool = False
    data_check_in: datetime | None = None


class LookupResult(Schema):
    source: LookupSource
    cpf: str
    nome: str = ""
    email: str = ""
    telefone: str = ""
    situacao: str | None = None
    cargo: str = ""
    company: CompanyData | None = None
    participant_id: UUID | None = None
    registration: RegistrationInfo | None = None
    raw_data: dict[str, t.Any] | None = Field(default=None, description="Record as returned by the registry.")


class SASEvent(Schema):
    """An SAS event mapped to our vocabulary."""

    codevento: str
    nome: str
    descricao: str = ""
    data_inicio: datetime
    data_fim: datetime
    local: str = ""
    modalidade: t.Literal["presencial", "online", "hibrido"] = "presencial"
    status: t.Literal["active", "draft"] = "draft"
    tipo_evento: str = ""
    publico_alvo: str = ""
    capacidade: int | None = None
    solucao: str = ""
    unidade: str = ""
    tipo_acao: str = ""


class SASParticipant(Schema):
    cpf: str
    nome: str
    email: str = ""
    telefone: str = ""
    empresa: str = ""
    cnpj: str = ""
    vinculo: str = ""
    status: str = ""


class TicketCategory(Schema):
    id: str
    name: str
