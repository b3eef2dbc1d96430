"""Participant management for the admin panel."""

import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from accounts.permissions import MANAGE_PARTICIPANTS, VIEW_PARTICIPANTS, VIEW_REPORTS, HasPermission
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.service import participant_service


@api_controller(
    "/admin/participants",
    auth=StructlogJWTAuth(),
    permissions=[HasPermission(VIEW_PARTICIPANTS)],
    tags=["Admin Participants"],
)
class ParticipantAdminController(UserAwareController):
    def get_one(self, participant_id: UUID) -> models.Participant:
        return t.cast(
            models.Participant,
            self.get_object_or_exception(
                models.Participant.objects.active().select_related("company"), pk=participant_id
            ),
        )

    @route.get(
        "/",
        url_name="list_participants",
        response=PaginatedResponseSchema[schema.CredentialedParticipantSchema],
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["nome", "cpf", "email"])
    def list_participants(self, event_id: UUID | None = None) -> QuerySet[models.Participant]:
        """List credentialed participants (with a confirmed registration), sorted by name.

        Each CPF appears once. Filter by `event_id`, search by name, CPF or email.
        """
        return participant_service.list_credentialed(event_id)

    @route.post(
        "/",
        url_name="create_participant",
        response={201: schema.ParticipantSchema, 400: ValidationErrorResponse},
        permissions=[HasPermission(MANAGE_PARTICIPANTS)],
        throttle=WriteThrottle(),
    )
    def create_participant(self, payload: schema.ParticipantCreateSchema) -> tuple[int, models.Participant]:
        """Create a participant.

        The CPF must have 11 digits and be unused. The company is taken from
        `company_id`, or found/created from the `company` data (matched by CNPJ).
        """
        return status.HTTP_201_CREATED, participant_service.create_participant(payload)

    @route.get("/{participant_id}", url_name="get_participant", response=schema.ParticipantSchema)
    def get_participant(self, participant_id: UUID) -> models.Participant:
        return self.get_one(participant_id)

    @route.patch(
        "/{participant_id}",
        url_name="update_participant",
        response={200: schema.ParticipantSchema, 400: ValidationErrorResponse},
        permissions=[HasPermission(MANAGE_PARTICIPANTS)],
        throttle=WriteThrottle(),
    )
    def update_participant(self, participant_id: UUID, payload: schema.ParticipantEditSchema) -> models.Participant:
        return participant_service.update_participant(self.get_one(participant_id), payload)

    @route.delete(
        "/{participant_id}",
        url_name="delete_participant",
        response={204: None},
        permissions=[HasPermission(MANAGE_PARTICIPANTS)],
    )
    def delete_participant(self, participant_id: UUID) -> tuple[int, None]:
        """Deactivate a participant. Their history is kept."""
        participant_service.delete_participant(self.get_one(participant_id))
        return status.HTTP_204_NO_CONTENT, None

    @route.post(
        "/{participant_id}/credenciar",
        url_name="credenciar_participant",
        response=schema.RegistrationSchema,
        permissions=[HasPermission(MANAGE_PARTICIPANTS)],
        throttle=WriteThrottle(),
    )
    def credenciar(self, participant_id: UUID, payload: schema.CredenciarSchema) -> models.Registration:
        """Confirm the participant's latest registration and check them in as the current user."""
        return participant_service.credenciar(self.get_one(participant_id), self.attendant_name(), payload)

    @route.get(
        "/{participant_id}/report",
        url_name="participant_report",
        response=schema.ParticipantReportSchema,
        permissions=[HasPermission(VIEW_REPORTS)],
    )
    def participant_report(self, participant_id: UUID) -> dict[str, t.Any]:
        """Registrations and check-ins of the participant across events."""
        return participant_service.build_participant_report(self.get_one(participant_id))
