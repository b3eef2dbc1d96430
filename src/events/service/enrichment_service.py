"""Fill in missing participant data from SAS."""

import typing as t
from uuid import UUID

import structlog

from events.models import TEMPORARY_EMAIL_DOMAIN, Participant
from registries.exceptions import RegistryError
from registries.sas import SASClient
from registries.schema import LookupResult

from . import update_db_instance
from .company_service import upsert_company

logger = structlog.get_logger(__name__)

DEFAULT_LIMIT = 50


def participants_to_enrich(event_id: UUID | None = None, limit: int = DEFAULT_LIMIT) -> list[Participant]:
    """Participants with a temporary email, no phone or no company, newest first."""
    qs = Participant.objects.active().needing_enrichment()
    if event_id:
        qs = qs.filter(registrations__event_id=event_id)
    return list(qs.distinct().order_by("-created_at")[:limit])


def enrich_participant(participant: Participant, result: LookupResult) -> list[str]:
    """Copy registry data into fields that are missing or temporary. Returns the updated field names."""
    updates: dict[str, t.Any] = {}
    if result.email and participant.has_temporary_email and not result.email.lower().endswith(TEMPORARY_EMAIL_DOMAIN):
        updates["email"] = result.email
    if result.telefone and not participant.telefone:
        updates["telefone"] = result.telefone
    if result.cargo and not participant.cargo:
        updates["cargo"] = result.cargo
    if result.company and participant.company_id is None:
        company = upsert_company(result.company)
        if company is not None:
            updates["company"] = company
    if updates:
        update_db_instance(participant, **updates)
    return list(updates)


def enrich_participants(event_id: UUID | None = None, limit: int = DEFAULT_LIMIT) -> dict[str, t.Any]:
    """Re-query SAS for each candidate, one at a time. A failure only affects its own participant."""
    results: dict[str, t.Any] = {"processed": 0, "enriched": 0, "failed": 0, "details": []}
    participants = participants_to_enrich(event_id, limit)
    with SASClient() as sas:
        for participant in participants:
            results["processed"] += 1
            detail: dict[str, t.Any] = {
                "participant_id": participant.id,
                "cpf": participant.cpf,
                "nome": participant.nome,
            }
            try:
                record = sas.find_person(participant.cpf)
            except RegistryError as e:
                results["failed"] += 1
                results["details"].append(detail | {"status": "error", "message": str(e)})
                continue
            if record is None:
                results["failed"] += 1
                results["details"].append(
                    detail | {"status": "failed", "message": "Participante não encontrado no SAS"}
                )
                continue
            updated_fields = enrich_participant(participant, sas.person_to_result(record, cpf=participant.cpf))
            if updated_fields:
                results["enriched"] += 1
                results["details"].append(
                    detail
                    | {
                        "status": "success",
                        "message": "Dados enriquecidos com sucesso",
                        "updated_fields": updated_fields,
                    }
                )
            else:
                results["failed"] += 1
                results["details"].append(detail | {"status": "failed", "message": "Nenhum dado novo no SAS"})
    logger.info(
        "participants_enriched",
        event_id=str(event_id) if event_id else None,
        processed=results["processed"],
        enriched=results["enriched"],
    )
    return results
