# src/events/filters.py

from django.db.models import Q
from django.utils import timezone
from ninja import FilterSchema

from events.models import Event


class EventFilterSchema(FilterSchema):
    status: Event.Status | None = None
    modalidade: Event.Modalidade | None = None
    codevento_sas: str | None = None
    upcoming: bool | None = None
    include_inactive: bool = False

    def filter_upcoming(self, upcoming: bool | None) -> Q:
        if upcoming:
            return Q(data_inicio__gt=timezone.now())
        return Q()

    def filter_include_inactive(self, include_inactive: bool) -> Q:
        """Soft-deleted events are hidden unless asked for."""
        if include_inactive:
            return Q()
        return Q(ativo=True)
