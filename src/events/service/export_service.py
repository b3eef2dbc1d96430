"""Participant lists of a single event, as CSV or XLSX.

With ``anonymize`` names, CPFs, emails and phones are masked so the file can be
shared outside the team.
"""

import csv
import io
import re
import typing as t
from dataclasses import dataclass
from datetime import datetime

import structlog
from django.utils import timezone
from openpyxl import Workbook

from common.documents import format_cpf, format_phone, normalize_cpf, only_digits
from events.models import Event, Registration

from .event_service import get_event_stats

logger = structlog.get_logger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_CONTENT_TYPE = "text/csv"

EXPORT_HEADERS = [
    "Nome",
    "CPF",
    "Email",
    "Telefone",
    "Empresa",
    "Fonte",
    "Status",
    "Data Check-in",
    "Data Inscrição",
]

EMPTY = "N/A"
NOT_CHECKED_IN = "Não credenciado"

_MASKED_DIGIT = re.compile(r"\d(?=\d{4})")


@dataclass
class ExportFile:
    content: bytes
    content_type: str
    filename: str


def mask_name(value: str) -> str:
    """``Maria da Silva`` becomes ``Maria S***``."""
    words = value.split()
    if not words:
        return EMPTY
    if len(words) == 1:
        return f"{words[0][0]}***"
    return f"{words[0]} {words[-1][0]}***"


def mask_cpf(value: str) -> str:
    """Every digit but the last four is hidden: ``***.***.*47-25``."""
    if not value:
        return EMPTY
    digits = _MASKED_DIGIT.sub("*", normalize_cpf(value))
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def mask_email(value: str) -> str:
    if not value:
        return EMPTY
    user, _, domain = value.partition("@")
    if not domain:
        return "***"
    return f"{user[:1]}***@{domain}"


def mask_phone(value: str) -> str:
    if not value:
        return EMPTY
    return _MASKED_DIGIT.sub("*", only_digits(value))


def _format_datetime(value: datetime | None) -> str:
    return timezone.localtime(value).strftime("%d/%m/%Y %H:%M") if value else ""


def export_rows(event: Event, anonymize: bool = False) -> list[list[str]]:
    """One row per registration of the event, ordered by participant name."""
    registrations = (
        Registration.objects.filter(event=event)
        .select_related("participant__company", "checkin")
        .order_by("participant__nome")
    )
    rows = []
    for registration in registrations:
        participant = registration.participant
        checkin = getattr(registration, "checkin", None)
        if anonymize:
            identity = [
                mask_name(participant.nome),
                mask_cpf(participant.cpf),
                mask_email(participant.email),
                mask_phone(participant.telefone),
            ]
        else:
            identity = [
                participant.nome or EMPTY,
                format_cpf(participant.cpf),
                participant.email or EMPTY,
                format_phone(participant.telefone) or EMPTY,
            ]
        rows.append(
            identity
            + [
                participant.company.razao_social if participant.company else EMPTY,
                participant.get_fonte_display(),  # type: ignore[attr-defined]
                registration.get_status_display(),  # type: ignore[attr-defined]
                _format_datetime(checkin.data_check_in) if checkin else NOT_CHECKED_IN,
                _format_datetime(registration.data_inscricao),
            ]
        )
    return rows


def to_csv(headers: list[str], rows: list[list[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def _overview(event: Event) -> list[tuple[str, t.Any]]:
    stats = get_event_stats(event)
    return [
        ("Evento", event.nome),
        ("Código SAS", event.codevento_sas or EMPTY),
        ("Início", _format_datetime(event.data_inicio)),
        ("Fim", _format_datetime(event.data_fim)),
        ("Local", event.local or EMPTY),
        ("Status", event.get_status_display()),  # type: ignore[attr-defined]
        ("Total de Inscrições", stats["total"]),
        ("Confirmados", stats["confirmed"]),
        ("Pendentes", stats["pending"]),
        ("Cancelados", stats["cancelled"]),
        ("Check-ins", stats["checked_in"]),
        ("Taxa de Credenciamento (%)", stats["credential_rate"]),
        ("Taxa de Presença (%)", stats["attendance_rate"]),
    ]


def to_xlsx(event: Event, headers: list[str], rows: list[list[str]]) -> bytes:
    """Workbook with an overview sheet and a participants sheet."""
    wb = Workbook()
    overview = wb.active
    overview.title = "Visão Geral"
    for line in _overview(event):
        overview.append(list(line))

    ws = wb.create_sheet(title="Participantes")
    ws.append(headers)
    for row in rows:
        ws.append(row)

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def export_event(event: Event, export_format: str = "xlsx", anonymize: bool = False) -> ExportFile:
    rows = export_rows(event, anonymize=anonymize)
    stamp = timezone.localdate().isoformat()
    basename = f"evento-{event.codevento_sas or event.id}-{stamp}"
    logger.info("event_exported", event_id=str(event.id), format=export_format, anonymize=anonymize, rows=len(rows))
    if export_format == "csv":
        return ExportFile(to_csv(EXPORT_HEADERS, rows), CSV_CONTENT_TYPE, f"{basename}.csv")
    return ExportFile(to_xlsx(event, EXPORT_HEADERS, rows), XLSX_CONTENT_TYPE, f"{basename}.xlsx")
