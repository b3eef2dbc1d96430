"""Schemas of the admin panel: dashboard, reports, bulk operations and SAS tools."""

import typing as t
from datetime import date, datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field

from common.schema import CPFMixin, StrippedString

DashboardPeriod = t.Literal["day", "week", "month", "year"]
ReportType = t.Literal["event_report", "participant_report"]
ReportFormat = t.Literal["json", "csv"]
ExportFormat = t.Literal["csv", "xlsx"]


# Dashboard


class DashboardSummarySchema(Schema):
    total_events: int
    active_events: int
    upcoming_events: int
    completed_events: int
    total_participants: int
    total_registrations: int
    confirmed_registrations: int
    cancelled_registrations: int
    checked_in_registrations: int
    attendance_rate: float


class RecentCheckInSchema(Schema):
    id: UUID
    participant_nome: str
    participant_cpf: str
    event_nome: str
    data_check_in: datetime
    responsavel_credenciamento: str = ""


class TopEventSchema(Schema):
    id: UUID
    nome: str
    total_registrations: int
    checked_in: int
    capacidade: int | None = None
    occupancy_rate: float
    attendance_rate: float


class DailyCheckInsSchema(Schema):
    day: date
    count: int


class TopCompanySchema(Schema):
    id: UUID
    nome: str
    participants: int


class DashboardSchema(Schema):
    period: DashboardPeriod
    generated_at: datetime
    summary: DashboardSummarySchema
    recent_check_ins: list[RecentCheckInSchema]
    top_events: list[TopEventSchema]
    chart_data: list[DailyCheckInsSchema]
    top_companies: list[TopCompanySchema]


# Reports


class ReportFilterSchema(Schema):
    type: ReportType = "event_report"
    format: ReportFormat = "json"
    start_date: date | None = None
    end_date: date | None = None


class EventExportFilterSchema(Schema):
    format: ExportFormat = "xlsx"
    anonymize: bool = False


class EventReportRowSchema(Schema):
    event_id: UUID
    nome: str
    data_inicio: datetime
    local: str
    status: str
    total_registrations: int
    total_check_ins: int


class ParticipantReportRowSchema(Schema):
    participant_id: UUID
    nome: str
    cpf: str
    email: str
    events: list[str]
    total_events: int
    last_check_in: datetime | None = None


class ReportSchema(Schema):
    type: ReportType
    start_date: date | None = None
    end_date: date | None = None
    summary: dict[str, t.Any]
    data: list[EventReportRowSchema] | list[ParticipantReportRowSchema]


# Bulk import


class ImportRowSchema(Schema):
    """One already-parsed spreadsheet row. Validation happens per row during the import."""

    cpf: str | int | None = None
    nome: str | None = None
    email: str | None = None
    empresa: str | None = None
    origem: str | None = None
    data: str | None = None
    evento_nome: str | None = None
    cod_evento: str | int | None = None


class ImportSchema(Schema):
    rows: list[ImportRowSchema] = Field(..., min_length=1)


class ImportResultSchema(Schema):
    total: int
    imported: int
    failed: int
    errors: list[str]
    warnings: list[str]


# Enrichment


class EnrichSchema(Schema):
    event_id: UUID | None = None
    limit: int = Field(50, ge=1, le=500)
    run_async: bool = Field(False, description="Queue the batch on the task worker")


class EnrichDetailSchema(Schema):
    participant_id: UUID
    cpf: str
    nome: str
    status: t.Literal["success", "failed", "error"]
    message: str
    updated_fields: list[str] = Field(default_factory=list)


class EnrichResultSchema(Schema):
    processed: int
    enriched: int
    failed: int
    details: list[EnrichDetailSchema]


class TaskQueuedSchema(Schema):
    task_id: str


# SAS


class SASSyncSchema(Schema):
    cod_evento: StrippedString
    overwrite: bool = False
    run_async: bool = False


class SASSyncResultSchema(Schema):
    event_id: UUID
    cod_evento: str
    event_created: bool
    inserted: int
    updated: int
    skipped: int


class SASVerifySchema(CPFMixin):
    force_resend: bool = False


class SASVerifyParticipantSchema(Schema):
    cpf: str
    nome: str
    email: str = ""


class SASVerifyResultSchema(Schema):
    exists_in_sas: bool
    was_sent: bool
    participant: SASVerifyParticipantSchema
    sas_response: dict[str, t.Any] | None = None
