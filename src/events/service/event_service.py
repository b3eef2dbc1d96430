"""Event management: CRUD, statistics and the per-event report."""

import typing as t

import structlog
from django.db.models import Count, Q

from common.utils import sanitize_text
from events.models import Event, Registration
from events.schema import EventCreateSchema, EventEditSchema
from registries.exceptions import RegistryError
from registries.sas import SASClient

from . import update_db_instance

logger = structlog.get_logger(__name__)

UI_STATUS_INTEGRATED = "integrado"
UI_STATUS_PENDING_SYNC = "credenciado/Pendente de sincronização"
UI_STATUS_PENDING_CHECKIN = "Pendente de Checkin"


def create_event(payload: EventCreateSchema) -> Event:
    data = {key: sanitize_text(value) for key, value in payload.model_dump(exclude_none=True).items()}
    event = Event.objects.create(**data)
    logger.info("event_created", event_id=str(event.id), codevento_sas=event.codevento_sas)
    return event


def update_event(event: Event, payload: EventEditSchema) -> Event:
    event = update_db_instance(event, payload)
    logger.info("event_updated", event_id=str(event.id))
    return event


def delete_event(event: Event) -> None:
    """Soft delete: the event is hidden, its registrations are kept."""
    update_db_instance(event, ativo=False)
    logger.info("event_deleted", event_id=str(event.id))


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 2) if total else 0.0


def get_event_stats(event: Event) -> dict[str, t.Any]:
    counts = Registration.objects.filter(event=event).aggregate(
        total=Count("id"),
        confirmed=Count("id", filter=Q(status=Registration.Status.CONFIRMED)),
        pending=Count("id", filter=Q(status=Registration.Status.REGISTERED)),
        cancelled=Count("id", filter=Q(status=Registration.Status.CANCELLED)),
        checked_in=Count("checkin"),
    )
    return counts | {
        "credential_rate": _rate(counts["confirmed"], counts["total"]),
        "attendance_rate": _rate(counts["checked_in"], counts["total"]),
    }


def ui_status(credentialed: bool, in_sas: bool, status: str) -> str:
    """Status shown in the event report, combining local check-in and SAS presence."""
    if credentialed and in_sas:
        return UI_STATUS_INTEGRATED
    if credentialed:
        return UI_STATUS_PENDING_SYNC
    if in_sas:
        return UI_STATUS_PENDING_CHECKIN
    return status


def _sas_cpfs(event: Event) -> set[str] | None:
    """CPFs enrolled in the SAS event, ``None`` when SAS cannot tell."""
    if not event.codevento_sas:
        return None
    try:
        with SASClient() as sas:
            return {p.cpf for p in sas.list_event_participants(event.codevento_sas)}
    except RegistryError as e:
        logger.warning("event_report_sas_unavailable", event_id=str(event.id), error=str(e))
        return None


def build_event_report(
    event: Event, *, include_participants: bool = False, include_stats: bool = True
) -> dict[str, t.Any]:
    """Event with stats and, optionally, its participants with SAS presence."""
    report: dict[str, t.Any] = {
        "event": event,
        "stats": get_event_stats(event) if include_stats else None,
        "participants": None,
        "sas_checked": False,
    }
    if not include_participants:
        return report

    registrations = Registration.objects.with_details().filter(event=event).order_by("participant__nome")
    sas_cpfs = _sas_cpfs(event)
    report["sas_checked"] = sas_cpfs is not None
    participants = []
    for registration in registrations:
        participant = registration.participant
        checkin = getattr(registration, "checkin", None)
        in_sas = participant.cpf in sas_cpfs if sas_cpfs is not None else False
        participants.append(
            {
                "participant_id": participant.id,
                "registration_id": registration.id,
                "cpf": participant.cpf,
                "nome": participant.nome,
                "email": participant.email,
                "telefone": participant.telefone,
                "empresa": str(participant.company) if participant.company else "",
                "fonte": participant.fonte,
                "status": registration.status,
                "data_inscricao": registration.data_inscricao,
                "data_check_in": checkin.data_check_in if checkin else None,
                "in_sas": in_sas,
                "ui_status": ui_status(checkin is not None, in_sas, registration.status),
            }
        )
    report["participants"] = participants
    return report
