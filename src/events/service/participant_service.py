"""Participant management for the admin panel."""

import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import Count, Max, Q, QuerySet
from ninja.errors import HttpError

from common.utils import sanitize_text
from events.models import CheckIn, Participant, Registration
from events.schema import CredenciarSchema, ParticipantCreateSchema, ParticipantEditSchema

from . import update_db_instance
from .company_service import resolve_company

logger = structlog.get_logger(__name__)


def list_credentialed(event_id: UUID | None = None) -> QuerySet[Participant]:
    """Active participants with at least one confirmed registration.

    Each participant appears once, however many events they were confirmed in.
    """
    confirmed = Q(registrations__status=Registration.Status.CONFIRMED)
    if event_id:
        confirmed &= Q(registrations__event_id=event_id)
    return (
        Participant.objects.active()
        .filter(confirmed)
        .select_related("company")
        .annotate(
            events_count=Count("registrations", filter=confirmed, distinct=True),
            last_check_in=Max("registrations__checkin__data_check_in", filter=confirmed),
        )
        .distinct()
        .order_by("nome")
    )


def create_participant(payload: ParticipantCreateSchema) -> Participant:
    """Create a participant. The CPF must not be taken.

    Raises:
        HttpError: duplicate CPF or unknown company.
    """
    if Participant.objects.filter(cpf=payload.cpf).exists():
        raise HttpError(400, "Já existe um participante com este CPF.")
    with transaction.atomic():
        company = resolve_company(payload.company_id, payload.company)
        data = payload.model_dump(exclude={"company", "company_id"}, exclude_none=True)
        participant = Participant.objects.create(
            company=company, **{key: sanitize_text(value) for key, value in data.items()}
        )
    logger.info("participant_created", participant_id=str(participant.id), fonte=participant.fonte)
    return participant


def update_participant(participant: Participant, payload: ParticipantEditSchema) -> Participant:
    if "company_id" in payload.model_fields_set:
        resolve_company(payload.company_id, None)
    participant = update_db_instance(participant, payload)
    logger.info("participant_updated", participant_id=str(participant.id))
    return participant


def delete_participant(participant: Participant) -> None:
    """Soft delete: registrations and check-ins are kept for the reports."""
    update_db_instance(participant, ativo=False)
    logger.info("participant_deleted", participant_id=str(participant.id))


@transaction.atomic
def credenciar(participant: Participant, attendant_name: str, payload: CredenciarSchema) -> Registration:
    """Confirm the participant's latest registration (or the one in the given event) and check them in.

    Raises:
        HttpError: the participant has no matching registration.
    """
    registrations = Registration.objects.select_for_update().filter(participant=participant)
    if payload.event_id:
        registrations = registrations.filter(event_id=payload.event_id)
    registration = registrations.order_by("-data_inscricao").first()
    if registration is None:
        raise HttpError(404, "Participante não possui inscrição.")

    if registration.status != Registration.Status.CONFIRMED:
        registration.status = Registration.Status.CONFIRMED
        registration.save(update_fields=["status", "updated_at"])
    checkin, created = CheckIn.objects.get_or_create(
        registration=registration,
        defaults={
            "responsavel_credenciamento": sanitize_text(attendant_name),
            "observacoes": sanitize_text(payload.observacoes),
        },
    )
    logger.info(
        "participant_credenciado",
        participant_id=str(participant.id),
        registration_id=str(registration.id),
        already_checked_in=not created,
    )
    return Registration.objects.with_details().get(pk=registration.pk)


def build_participant_report(participant: Participant) -> dict[str, t.Any]:
    """Registrations and check-ins of a participant across events."""
    registrations = list(
        Registration.objects.with_details().filter(participant=participant).order_by("-event__data_inicio")
    )
    events = []
    for registration in registrations:
        checkin = getattr(registration, "checkin", None)
        events.append(
            {
                "registration_id": registration.id,
                "event_id": registration.event_id,
                "event_nome": registration.event.nome,
                "data_inicio": registration.event.data_inicio,
                "status": registration.status,
                "data_inscricao": registration.data_inscricao,
                "data_check_in": checkin.data_check_in if checkin else None,
                "responsavel_credenciamento": checkin.responsavel_credenciamento if checkin else None,
            }
        )
    check_ins = sum(1 for entry in events if entry["data_check_in"])
    return {
        "participant": participant,
        "total_events": len(events),
        "total_check_ins": check_ins,
        "attendance_rate": round(check_ins / len(events) * 100, 2) if events else 0.0,
        "events": events,
    }
