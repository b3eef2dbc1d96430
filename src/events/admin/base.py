# src/events/admin/base.py
"""Base admin components: mixins and inlines."""

import typing as t

from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import StackedInline, TabularInline

from common.documents import format_cpf
from events import models


# --- Helper Mixins for Reusable Link Fields ---
class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not hasattr(obj, "event") or not obj.event:
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.nome)

    event_link.short_description = "Evento"  # type: ignore[attr-defined]


class ParticipantLinkMixin:
    """Mixin to add a link to a participant, labelled with the formatted CPF."""

    def participant_link(self, obj: t.Any) -> str | None:
        participant = getattr(obj, "participant", None)
        if participant is None:
            return None
        url = reverse("admin:events_participant_change", args=[participant.id])
        return format_html('<a href="{}">{} ({})</a>', url, participant.nome, format_cpf(participant.cpf))

    participant_link.short_description = "Participante"  # type: ignore[attr-defined]


# --- Inlines ---
class EventRegistrationInline(TabularInline):  # type: ignore[misc]
    model = models.Registration
    extra = 0
    fields = ["participant", "status", "codigo_inscricao", "data_inscricao"]
    autocomplete_fields = ["participant"]
    show_change_link = True


class ParticipantRegistrationInline(TabularInline):  # type: ignore[misc]
    model = models.Registration
    extra = 0
    fields = ["event", "status", "codigo_inscricao", "data_inscricao"]
    autocomplete_fields = ["event"]
    show_change_link = True


class CheckInInline(StackedInline):  # type: ignore[misc]
    model = models.CheckIn
    extra = 0
    max_num = 1
    fields = ["data_check_in", "responsavel_credenciamento", "observacoes"]
