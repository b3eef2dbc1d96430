"""Bulk import of participants from already-parsed spreadsheet rows.

Each row is imported in its own transaction: a bad row is reported and skipped,
the others go through. Existing participants are never overwritten, so data
enriched from the registries survives a re-import.
"""

import typing as t
from dataclasses import dataclass, field
from datetime import datetime

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from common.documents import only_digits
from common.utils import sanitize_text
from events.models import TEMPORARY_EMAIL_DOMAIN, Company, Event, Participant, Registration
from events.schema import ImportRowSchema
from registries.sas import parse_sas_datetime

logger = structlog.get_logger(__name__)

ORIGIN_TO_FONTE = {
    "SAS": Participant.Fonte.SAS,
    "CPE": Participant.Fonte.CPE,
    "4EVENTS": Participant.Fonte.FOUR_EVENTS,
}


class RowError(Exception):
    pass


@dataclass
class ImportResult:
    total: int = 0
    imported: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _parse_date(value: str | None) -> datetime | None:
    """ISO dates and datetimes, or ``DD/MM/YYYY``."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return parse_sas_datetime(value)
    return parsed if timezone.is_aware(parsed) else timezone.make_aware(parsed)


def _find_or_create_event(
    row: ImportRowSchema, line: int, data_inscricao: datetime, warnings: list[str]
) -> Event:
    nome = (row.evento_nome or "").strip()
    cod_evento = str(row.cod_evento or "").strip()
    if not nome and not cod_evento:
        raise RowError(f"Linha {line}: Nome do evento ou código do evento ausente")

    event = Event.objects.filter(codevento_sas=cod_evento).first() if cod_evento else None
    if event is None and nome:
        event = Event.objects.filter(nome__iexact=nome).first()
        if event is None:
            event = Event.objects.create(
                nome=sanitize_text(nome),
                codevento_sas=cod_evento or None,
                data_inicio=data_inscricao,
                data_fim=data_inscricao,
                status=Event.Status.ACTIVE,
            )
            warnings.append(f'Linha {line}: Evento "{nome}" criado automaticamente')
    if event is None:
        raise RowError(f"Linha {line}: Evento {cod_evento} não encontrado")
    return event


def _import_row(row: ImportRowSchema, line: int, result: ImportResult) -> None:
    cpf = only_digits(row.cpf)
    if len(cpf) != 11:
        raise RowError(f"Linha {line}: CPF inválido ou ausente")
    nome = (row.nome or "").strip()
    if not nome:
        raise RowError(f"Linha {line}: Nome ausente")

    company = None
    empresa = (row.empresa or "").strip()
    if empresa:
        company = Company.objects.matching_name(empresa).first()
        if company is None:
            result.warnings.append(
                f'Linha {line}: Empresa "{empresa}" não encontrada, participante será criado sem empresa'
            )

    data_inscricao = timezone.now()
    if row.data:
        parsed = _parse_date(row.data)
        if parsed is None:
            result.warnings.append(f"Linha {line}: Data inválida, usando data atual")
        else:
            data_inscricao = parsed

    event = _find_or_create_event(row, line, data_inscricao, result.warnings)

    participant = Participant.objects.filter(cpf=cpf).first()
    if participant is None:
        participant = Participant.objects.create(
            cpf=cpf,
            nome=sanitize_text(nome),
            email=sanitize_text(row.email or "") or f"{cpf}{TEMPORARY_EMAIL_DOMAIN}",
            company=company,
            fonte=ORIGIN_TO_FONTE.get((row.origem or "SAS").strip().upper(), Participant.Fonte.IMPORT),
        )

    if Registration.objects.filter(event=event, participant=participant).exists():
        result.warnings.append(f"Linha {line}: Participante já inscrito no evento")
        return
    Registration.objects.create(
        event=event,
        participant=participant,
        data_inscricao=data_inscricao,
        status=Registration.Status.CONFIRMED,
    )


def import_participants(rows: t.Iterable[ImportRowSchema]) -> ImportResult:
    """Import rows; line numbers in messages start at 2, the first data row under the header."""
    result = ImportResult()
    for index, row in enumerate(rows):
        line = index + 2
        result.total += 1
        try:
            with transaction.atomic():
                _import_row(row, line, result)
        except RowError as e:
            result.failed += 1
            result.errors.append(str(e))
        except (ValidationError, DatabaseError) as e:
            result.failed += 1
            result.errors.append(f"Linha {line}: {e}")
            logger.warning("import_row_failed", line=line, error=str(e))
        else:
            result.imported += 1
    logger.info("participants_imported", total=result.total, imported=result.imported, failed=result.failed)
    return result
