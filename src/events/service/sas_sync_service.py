"""Synchronisation between local events and SAS."""

import typing as t

import structlog
from django.db import transaction
from ninja.errors import HttpError

from common.documents import normalize_cnpj, normalize_cpf
from common.utils import sanitize_text
from events.models import CheckIn, Company, Event, Participant, Registration
from registries.exceptions import RegistryError
from registries.sas import SASClient
from registries.schema import SASEvent, SASParticipant

logger = structlog.get_logger(__name__)

SAS_EVENT_FIELDS = (
    "nome",
    "descricao",
    "data_inicio",
    "data_fim",
    "local",
    "modalidade",
    "status",
    "tipo_evento",
    "publico_alvo",
    "capacidade",
    "solucao",
    "unidade",
    "tipo_acao",
)


def _upsert_event(sas_event: SASEvent, overwrite: bool) -> tuple[Event, bool]:
    """Existing events are only updated when ``overwrite`` is set."""
    values = {name: sanitize_text(getattr(sas_event, name)) for name in SAS_EVENT_FIELDS}
    event = Event.objects.filter(codevento_sas=sas_event.codevento).first()
    if event is None:
        return Event.objects.create(codevento_sas=sas_event.codevento, **values), True
    if overwrite:
        for name, value in values.items():
            setattr(event, name, value)
        event.ativo = True
        event.save()
    return event, False


def _sas_company(sas_participant: SASParticipant) -> Company | None:
    if not sas_participant.cnpj:
        return None
    company = Company.objects.filter(cnpj=normalize_cnpj(sas_participant.cnpj)).first()
    if company is None and sas_participant.empresa:
        company = Company.objects.create(cnpj=sas_participant.cnpj, razao_social=sanitize_text(sas_participant.empresa))
    return company


def _upsert_participant(sas_participant: SASParticipant, overwrite: bool) -> Participant:
    """New participants are created; existing ones are refreshed when ``overwrite`` is set.

    A participant without a company always picks up the one SAS reports.
    """
    participant = Participant.objects.filter(cpf=sas_participant.cpf).first()
    values = {
        "nome": sanitize_text(sas_participant.nome),
        "email": sanitize_text(sas_participant.email),
        "telefone": sas_participant.telefone,
    }
    if participant is None:
        return Participant.objects.create(
            cpf=sas_participant.cpf, fonte=Participant.Fonte.SAS, company=_sas_company(sas_participant), **values
        )
    changed = False
    if participant.company_id is None:
        participant.company = _sas_company(sas_participant)
        changed = participant.company is not None
    if overwrite:
        for name, value in values.items():
            if value:
                setattr(participant, name, value)
        changed = True
    if changed:
        participant.save()
    return participant


def _registration_status(sas_participant: SASParticipant) -> Registration.Status:
    if sas_participant.status.lower() == "confirmed":
        return Registration.Status.CONFIRMED
    return Registration.Status.REGISTERED


def _is_downgrade(registration: Registration, status: Registration.Status) -> bool:
    """A confirmed or checked-in registration never goes back to a weaker status."""
    if status == Registration.Status.CONFIRMED:
        return False
    if registration.status == Registration.Status.CONFIRMED:
        return True
    return CheckIn.objects.filter(registration=registration).exists()


def sync_sas_event(cod_evento: str, overwrite: bool = False) -> dict[str, t.Any]:
    """Bring an SAS event and its participants into the local database.

    New registrations count as inserted; existing ones are updated when
    ``overwrite`` is set and skipped otherwise. A confirmed or checked-in
    registration is skipped rather than set back to registered.

    Raises:
        RegistryNotFound: the event is not in SAS.
        RegistryError: SAS failed.
    """
    with SASClient() as sas:
        sas_event = sas.find_event(cod_evento)
        sas_participants = sas.list_event_participants(cod_evento)

    counts = {"inserted": 0, "updated": 0, "skipped": 0}
    with transaction.atomic():
        event, event_created = _upsert_event(sas_event, overwrite)
        for sas_participant in sas_participants:
            if not sas_participant.cpf.strip("0") or not sas_participant.nome:
                counts["skipped"] += 1
                continue
            participant = _upsert_participant(sas_participant, overwrite)
            status = _registration_status(sas_participant)
            registration = Registration.objects.filter(event=event, participant=participant).first()
            if registration is None:
                Registration.objects.create(
                    event=event,
                    participant=participant,
                    status=status,
                    codigo_inscricao=f"SAS-{cod_evento}-{participant.cpf}",
                )
                counts["inserted"] += 1
            elif overwrite and not _is_downgrade(registration, status):
                registration.status = status
                registration.save(update_fields=["status", "updated_at"])
                counts["updated"] += 1
            else:
                counts["skipped"] += 1

    logger.info("sas_event_synced", cod_evento=cod_evento, event_id=str(event.id), created=event_created, **counts)
    return {"event_id": event.id, "cod_evento": cod_evento, "event_created": event_created, **counts}


def verify_participant(event: Event, cpf: str, force_resend: bool = False) -> dict[str, t.Any]:
    """Check a local participant's enrollment in SAS, and send it when missing or when forced.

    An SAS failure while checking counts as "not enrolled".

    Raises:
        HttpError: the event has no SAS code (400) or the CPF is not registered in it (404).
        RegistryError: SAS refused the enrollment.
    """
    if not event.codevento_sas:
        raise HttpError(400, "Evento não possui código SAS.")
    registration = (
        Registration.objects.select_related("participant")
        .filter(event=event, participant__cpf=normalize_cpf(cpf))
        .first()
    )
    if registration is None:
        raise HttpError(404, "Participante não inscrito neste evento.")
    participant = registration.participant

    with SASClient() as sas:
        try:
            exists = sas.is_enrolled(participant.cpf, event.codevento_sas)
        except RegistryError as e:
            logger.warning("sas_enrollment_check_failed", event_id=str(event.id), error=str(e))
            exists = False
        sas_response = None
        if not exists or force_resend:
            sas_response = sas.enroll(participant, event.codevento_sas)

    logger.info(
        "sas_participant_verified",
        event_id=str(event.id),
        participant_id=str(participant.id),
        exists_in_sas=exists,
        was_sent=sas_response is not None,
    )
    return {
        "exists_in_sas": exists,
        "was_sent": sas_response is not None,
        "participant": {"cpf": participant.cpf, "nome": participant.nome, "email": participant.email},
        "sas_response": sas_response,
    }
