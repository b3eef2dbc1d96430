"""Event management for the admin panel."""

import typing as t
from uuid import UUID

from django.db.models import QuerySet
from django.http import HttpResponse
from ninja import Query
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from accounts.models import Role
from accounts.permissions import EXPORT_EVENTS, MANAGE_EVENTS, VIEW_EVENTS, HasPermission, HasRole
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import filters, models, schema
from events.service import event_service, export_service, sas_sync_service
from events.tasks import sync_sas_event_task


@api_controller(
    "/admin/events",
    auth=StructlogJWTAuth(),
    permissions=[HasPermission(VIEW_EVENTS)],
    tags=["Admin Events"],
)
class EventAdminController(UserAwareController):
    def get_queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.all()

    def get_one(self, event_id: UUID) -> models.Event:
        return t.cast(models.Event, self.get_object_or_exception(models.Event.objects.active(), pk=event_id))

    @route.get("/", url_name="list_events", response=PaginatedResponseSchema[schema.EventSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["nome", "codevento_sas", "local", "unidade"])
    def list_events(
        self,
        params: filters.EventFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> QuerySet[models.Event]:
        """List events, newest first. Soft-deleted events are hidden unless `include_inactive` is set."""
        return params.filter(self.get_queryset())

    @route.post(
        "/",
        url_name="create_event",
        response={201: schema.EventSchema, 400: ValidationErrorResponse},
        permissions=[HasPermission(MANAGE_EVENTS)],
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        return status.HTTP_201_CREATED, event_service.create_event(payload)

    @route.post(
        "/sync-sas",
        url_name="sync_sas_event",
        response={200: schema.SASSyncResultSchema, 202: schema.TaskQueuedSchema},
        permissions=[HasPermission(MANAGE_EVENTS)],
        throttle=WriteThrottle(),
    )
    def sync_sas(self, payload: schema.SASSyncSchema) -> tuple[int, t.Any]:
        """Import an SAS event and its participants.

        Existing events and registrations are only changed when `overwrite` is set.
        With `run_async` the import is queued and the task id is returned.
        """
        if payload.run_async:
            task = sync_sas_event_task.delay(payload.cod_evento, overwrite=payload.overwrite)
            return status.HTTP_202_ACCEPTED, schema.TaskQueuedSchema(task_id=task.id)
        return status.HTTP_200_OK, sas_sync_service.sync_sas_event(payload.cod_evento, overwrite=payload.overwrite)

    @route.get("/{event_id}", url_name="get_event", response=schema.EventSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        return self.get_one(event_id)

    @route.patch(
        "/{event_id}",
        url_name="update_event",
        response={200: schema.EventSchema, 400: ValidationErrorResponse},
        permissions=[HasPermission(MANAGE_EVENTS)],
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: UUID, payload: schema.EventEditSchema) -> models.Event:
        """Update the provided fields of an event."""
        return event_service.update_event(self.get_one(event_id), payload)

    @route.delete(
        "/{event_id}",
        url_name="delete_event",
        response={204: None},
        permissions=[HasPermission(MANAGE_EVENTS)],
    )
    def delete_event(self, event_id: UUID) -> tuple[int, None]:
        """Deactivate an event. Its registrations and check-ins are kept."""
        event_service.delete_event(self.get_one(event_id))
        return status.HTTP_204_NO_CONTENT, None

    @route.get("/{event_id}/stats", url_name="event_stats", response=schema.EventStatsSchema)
    def event_stats(self, event_id: UUID) -> dict[str, t.Any]:
        """Registration counters and credential/attendance rates (percent)."""
        return event_service.get_event_stats(self.get_one(event_id))

    @route.get(
        "/{event_id}/report",
        url_name="event_report",
        response=schema.EventReportSchema,
        permissions=[HasRole(Role.Name.ADMIN, Role.Name.MANAGER)],
    )
    def event_report(
        self, event_id: UUID, include_participants: bool = False, include_stats: bool = True
    ) -> dict[str, t.Any]:
        """Event report.

        With `include_participants`, each participant carries `in_sas` (enrolled in the SAS
        event) and `ui_status`:
        - `integrado`: checked in here and enrolled in SAS
        - `credenciado/Pendente de sincronização`: checked in here, missing in SAS
        - `Pendente de Checkin`: enrolled in SAS, not checked in yet
        - otherwise the registration status
        """
        return event_service.build_event_report(
            self.get_one(event_id), include_participants=include_participants, include_stats=include_stats
        )

    @route.get("/{event_id}/export", url_name="export_event", permissions=[HasPermission(EXPORT_EVENTS)])
    def export_event(
        self,
        event_id: UUID,
        params: schema.EventExportFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> t.Any:
        """Download the participants of the event as `xlsx` (default) or `csv`.

        With `anonymize`, names, CPFs, emails and phones are masked.
        """
        export = export_service.export_event(self.get_one(event_id), params.format, anonymize=params.anonymize)
        response = HttpResponse(export.content, content_type=export.content_type)
        response["Content-Disposition"] = f"attachment; filename={export.filename}"
        return response

    @route.post(
        "/{event_id}/sas-verify",
        url_name="sas_verify_participant",
        response=schema.SASVerifyResultSchema,
        permissions=[HasPermission(MANAGE_EVENTS)],
        throttle=WriteThrottle(),
    )
    def sas_verify(self, event_id: UUID, payload: schema.SASVerifySchema) -> dict[str, t.Any]:
        """Check that a participant of the event is enrolled in SAS, and send them when missing.

        `force_resend` sends them even when SAS already has them.
        """
        return sas_sync_service.verify_participant(self.get_one(event_id), payload.cpf, payload.force_resend)
