"""Bulk operations on participants: spreadsheet import and registry enrichment."""

import typing as t

from ninja_extra import api_controller, route, status

from accounts.models import Role
from accounts.permissions import HasRole
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import schema
from events.service import enrichment_service, import_service
from events.tasks import enrich_participants_task


@api_controller(
    "/admin/participants",
    auth=StructlogJWTAuth(),
    permissions=[HasRole(Role.Name.ADMIN, Role.Name.MANAGER)],
    tags=["Admin Participants"],
    throttle=WriteThrottle(),
)
class ParticipantBulkController(UserAwareController):
    @route.post("/import", url_name="import_participants", response=schema.ImportResultSchema)
    def import_participants(self, payload: schema.ImportSchema) -> import_service.ImportResult:
        """Import already-parsed spreadsheet rows.

        Each row is validated and stored on its own. Events are matched by
        `cod_evento`, then by name, and created when missing. Existing participants
        are not overwritten. The result lists the errors and warnings per line.
        """
        return import_service.import_participants(payload.rows)

    @route.post(
        "/enrich",
        url_name="enrich_participants",
        response={200: schema.EnrichResultSchema, 202: schema.TaskQueuedSchema},
        permissions=[HasRole(Role.Name.ADMIN)],
    )
    def enrich_participants(self, payload: schema.EnrichSchema) -> tuple[int, t.Any]:
        """Fill in missing emails, phones and companies from SAS. Administrators only.

        Candidates have a temporary email, no phone or no company. With `run_async`
        the batch is queued and the task id is returned.
        """
        event_id = str(payload.event_id) if payload.event_id else None
        if payload.run_async:
            task = enrich_participants_task.delay(event_id, limit=payload.limit)
            return status.HTTP_202_ACCEPTED, schema.TaskQueuedSchema(task_id=task.id)
        return status.HTTP_200_OK, enrichment_service.enrich_participants(payload.event_id, limit=payload.limit)
