"""The attendant check-in flow.

An attendant looks a CPF up, confirms the data, and credentials the person in an
event. Credentialing upserts the participant (and company), confirms the
registration and records a single check-in.
"""

import typing as t
from dataclasses import dataclass

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import Q

from common.documents import normalize_cpf
from common.utils import get_or_create_with_race_protection, sanitize_text
from events.exceptions import EventNotFound, ParticipantNotFound
from events.models import CheckIn, Event, Participant, Registration
from events.schema import CheckinParticipantSchema, CheckinRegisterSchema, ExistingCheckinResponse
from registries.lookup import ParticipantLookup, local_result
from registries.schema import LookupResult

from .company_service import upsert_company

logger = structlog.get_logger(__name__)

SOURCE_TO_FONTE: dict[str, Participant.Fonte] = {
    "local": Participant.Fonte.LOCAL,
    "sas": Participant.Fonte.SAS,
    "cpe": Participant.Fonte.CPE,
    "4events": Participant.Fonte.FOUR_EVENTS,
}


@dataclass
class CredentialingResult:
    participant: Participant
    registration: Registration
    checkin: CheckIn
    already_checked_in: bool


def get_event(reference: str) -> Event:
    """Active event by UUID or SAS code.

    Raises:
        EventNotFound: no active event matches.
    """
    event = Event.objects.active().by_reference(reference)
    if event is None:
        raise EventNotFound(reference)
    return event


def registration_code(event: Event, cpf: str) -> str:
    """``SAS-{codevento}-{cpf}`` for SAS events, ``LOCAL-{event id}-{cpf}`` otherwise."""
    if event.codevento_sas:
        return f"SAS-{event.codevento_sas}-{cpf}"
    return f"LOCAL-{event.id}-{cpf}"


def search(cpf: str, event_reference: str | None = None) -> LookupResult:
    """Resolve a CPF through the lookup chain.

    Raises:
        EventNotFound: the event reference is unknown.
        ParticipantNotFound: nobody knows this CPF.
        RegistryError: CPE failed and SAS had no record.
    """
    event = get_event(event_reference) if event_reference else None
    with ParticipantLookup() as lookup:
        result = lookup.resolve(cpf, event=event)
    if result is None:
        raise ParticipantNotFound(cpf, fallback_url=settings.LOOKUP_FALLBACK_URL)
    return result


def search_local(cpf: str, event_reference: str) -> LookupResult:
    """Local participant enrolled in the event.

    Raises:
        EventNotFound: the event reference is unknown.
        ParticipantNotFound: the CPF is not enrolled in the event.
    """
    event = get_event(event_reference)
    participant = Participant.objects.select_related("company").filter(cpf=normalize_cpf(cpf)).first()
    result = local_result(participant, event) if participant else None
    if result is None or result.registration is None:
        raise ParticipantNotFound(cpf, fallback_url=settings.LOOKUP_FALLBACK_URL)
    return result


def existing_checkin(cpf: str, event_reference: str) -> ExistingCheckinResponse:
    event = get_event(event_reference)
    registration = (
        Registration.objects.select_related("checkin")
        .filter(event=event, participant__cpf=normalize_cpf(cpf))
        .first()
    )
    if registration is None:
        return ExistingCheckinResponse(already_checked_in=False)
    checkin: CheckIn | None = getattr(registration, "checkin", None)
    return ExistingCheckinResponse(
        already_checked_in=checkin is not None,
        registration_id=registration.id,
        status=registration.status,
        data_check_in=checkin.data_check_in if checkin else None,
        responsavel_credenciamento=checkin.responsavel_credenciamento if checkin else None,
    )


def _upsert_participant(data: CheckinParticipantSchema) -> Participant:
    """Create the participant, or refresh the fields the attendant just confirmed."""
    company = upsert_company(data.company) if data.company else None
    values: dict[str, t.Any] = {
        "nome": sanitize_text(data.nome),
        "email": sanitize_text(data.email),
        "telefone": data.telefone,
        "cargo": sanitize_text(data.cargo or (data.company.cargo if data.company else "")),
    }
    participant = Participant.objects.select_for_update().filter(cpf=data.cpf).first()
    if participant is None:
        participant = Participant.objects.create(
            cpf=data.cpf,
            fonte=SOURCE_TO_FONTE.get(data.source or "", Participant.Fonte.MANUAL),
            company=company,
            **values,
        )
        logger.info("participant_created", participant_id=str(participant.id), fonte=participant.fonte)
        return participant

    for field, value in values.items():
        if value:
            setattr(participant, field, value)
    if company is not None:
        participant.company = company
    participant.ativo = True
    participant.save()
    return participant


@transaction.atomic
def register_local_credentialing(payload: CheckinRegisterSchema, attendant_name: str) -> CredentialingResult:
    """Credential a participant in an event.

    Checking in twice is idempotent: the existing check-in is reported back.

    Raises:
        EventNotFound: the event reference is unknown.
    """
    event = get_event(payload.event_id)
    participant = _upsert_participant(payload.participant)

    registration, created = get_or_create_with_race_protection(
        Registration,
        Q(event=event, participant=participant),
        {
            "event": event,
            "participant": participant,
            "status": Registration.Status.CONFIRMED,
            "codigo_inscricao": registration_code(event, participant.cpf),
            "ticket_category": payload.ticket_category or "",
        },
    )
    if not created and registration.status != Registration.Status.CONFIRMED:
        registration.status = Registration.Status.CONFIRMED
        registration.save(update_fields=["status", "updated_at"])

    checkin, checkin_created = get_or_create_with_race_protection(
        CheckIn,
        Q(registration=registration),
        {"registration": registration, "responsavel_credenciamento": sanitize_text(attendant_name)},
    )
    logger.info(
        "participant_credentialed",
        event_id=str(event.id),
        participant_id=str(participant.id),
        registration_id=str(registration.id),
        already_checked_in=not checkin_created,
    )
    return CredentialingResult(
        participant=participant,
        registration=registration,
        checkin=checkin,
        already_checked_in=not checkin_created,
    )
