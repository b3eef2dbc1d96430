"""Celery tasks for the registry batch jobs.

- Synchronising an SAS event and its participants
- Enriching participants with SAS data
"""

import typing as t
from uuid import UUID

import structlog
from celery import shared_task

from .service import enrichment_service, sas_sync_service

logger = structlog.get_logger(__name__)


@shared_task
def sync_sas_event_task(cod_evento: str, overwrite: bool = False) -> dict[str, t.Any]:
    """Import an SAS event with its participants."""
    result = sas_sync_service.sync_sas_event(cod_evento, overwrite=overwrite)
    return result | {"event_id": str(result["event_id"])}


@shared_task
def enrich_participants_task(
    event_id: str | None = None, limit: int = enrichment_service.DEFAULT_LIMIT
) -> dict[str, t.Any]:
    """Enrich a batch of participants. Returns the counters only."""
    result = enrichment_service.enrich_participants(UUID(event_id) if event_id else None, limit=limit)
    logger.info("enrich_participants_task_done", event_id=event_id, enriched=result["enriched"])
    return {key: result[key] for key in ("processed", "enriched", "failed")}
