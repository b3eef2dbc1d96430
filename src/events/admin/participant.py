# src/events/admin/participant.py
"""Admin classes for participants, registrations and check-ins."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from common.documents import format_cpf
from events import models
from events.admin.base import CheckInInline, EventLinkMixin, ParticipantLinkMixin, ParticipantRegistrationInline


@admin.register(models.Participant)
class ParticipantAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["nome", "formatted_cpf", "email", "telefone", "company", "fonte", "ativo"]
    list_filter = ["fonte", "ativo", "created_at"]
    list_select_related = ["company"]
    search_fields = ["nome", "cpf", "email"]
    autocomplete_fields = ["company"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [ParticipantRegistrationInline]

    @admin.display(description="CPF", ordering="cpf")
    def formatted_cpf(self, obj: models.Participant) -> str:
        return format_cpf(obj.cpf)


@admin.register(models.Registration)
class RegistrationAdmin(ModelAdmin, EventLinkMixin, ParticipantLinkMixin):  # type: ignore[misc]
    list_display = ["participant_link", "event_link", "status", "codigo_inscricao", "data_inscricao", "checked_in"]
    list_filter = ["status", "data_inscricao"]
    list_select_related = ["participant", "event", "checkin"]
    search_fields = ["participant__nome", "participant__cpf", "event__nome", "codigo_inscricao"]
    autocomplete_fields = ["participant", "event"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [CheckInInline]

    @admin.display(description="Check-in", boolean=True)
    def checked_in(self, obj: models.Registration) -> bool:
        return hasattr(obj, "checkin")


@admin.register(models.CheckIn)
class CheckInAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["registration", "data_check_in", "responsavel_credenciamento"]
    list_filter = ["data_check_in"]
    list_select_related = ["registration__participant", "registration__event"]
    search_fields = ["registration__participant__nome", "registration__participant__cpf", "responsavel_credenciamento"]
    date_hierarchy = "data_check_in"
    autocomplete_fields = ["registration"]
    readonly_fields = ["id", "created_at", "updated_at"]
