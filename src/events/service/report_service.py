"""Event and participant reports over a date range, as rows or CSV."""

import csv
import io
import typing as t
from collections import Counter
from datetime import date

from django.db.models import Count, Max, Q
from django.utils import timezone

from common.documents import format_cpf
from events.models import Event, Participant

EVENT_REPORT_COLUMNS = [
    ("event_id", "ID"),
    ("nome", "Nome do Evento"),
    ("data_inicio", "Data"),
    ("local", "Local"),
    ("status", "Status"),
    ("total_registrations", "Total de Inscrições"),
    ("total_check_ins", "Total de Check-ins"),
]

PARTICIPANT_REPORT_COLUMNS = [
    ("participant_id", "ID"),
    ("nome", "Nome"),
    ("cpf", "CPF"),
    ("email", "Email"),
    ("events", "Eventos"),
    ("total_events", "Total de Eventos"),
    ("last_check_in", "Último Check-in"),
]


def _date_range(prefix: str, start_date: date | None, end_date: date | None) -> Q:
    q = Q()
    if start_date:
        q &= Q(**{f"{prefix}__date__gte": start_date})
    if end_date:
        q &= Q(**{f"{prefix}__date__lte": end_date})
    return q


def _within(day: date, start_date: date | None, end_date: date | None) -> bool:
    return (not start_date or day >= start_date) and (not end_date or day <= end_date)


def event_report(start_date: date | None = None, end_date: date | None = None) -> dict[str, t.Any]:
    events = (
        Event.objects.active()
        .filter(_date_range("data_inicio", start_date, end_date))
        .annotate(
            total_registrations=Count("registrations", distinct=True),
            total_check_ins=Count("registrations__checkin", distinct=True),
        )
        .order_by("data_inicio")
    )
    rows = [
        {
            "event_id": event.id,
            "nome": event.nome,
            "data_inicio": event.data_inicio,
            "local": event.local,
            "status": event.status,
            "total_registrations": event.total_registrations,
            "total_check_ins": event.total_check_ins,
        }
        for event in events
    ]
    total_participants = sum(row["total_registrations"] for row in rows)
    return {
        "data": rows,
        "summary": {
            "total_events": len(rows),
            "total_participants": total_participants,
            "average_participants_per_event": round(total_participants / len(rows), 2) if rows else 0,
        },
    }


def participant_report(start_date: date | None = None, end_date: date | None = None) -> dict[str, t.Any]:
    in_range = _date_range("registrations__event__data_inicio", start_date, end_date)
    participants = (
        Participant.objects.active()
        .filter(in_range, registrations__isnull=False)
        .annotate(last_check_in=Max("registrations__checkin__data_check_in", filter=in_range))
        .prefetch_related("registrations__event")
        .distinct()
        .order_by("nome")
    )
    rows = []
    popularity: Counter[str] = Counter()
    for participant in participants:
        names = [
            registration.event.nome
            for registration in participant.registrations.all()  # type: ignore[attr-defined]
            if _within(timezone.localtime(registration.event.data_inicio).date(), start_date, end_date)
        ]
        popularity.update(names)
        rows.append(
            {
                "participant_id": participant.id,
                "nome": participant.nome,
                "cpf": format_cpf(participant.cpf),
                "email": participant.email,
                "events": names,
                "total_events": len(names),
                "last_check_in": participant.last_check_in,  # type: ignore[attr-defined]
            }
        )
    total_events = sum(row["total_events"] for row in rows)
    return {
        "data": rows,
        "summary": {
            "total_participants": len(rows),
            "average_events_per_participant": round(total_events / len(rows), 2) if rows else 0,
            "most_popular_event": popularity.most_common(1)[0][0] if popularity else None,
        },
    }


def to_csv(rows: list[dict[str, t.Any]], columns: list[tuple[str, str]]) -> str:
    """Serialize report rows. List values are joined with ``; ``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for _, header in columns])
    for row in rows:
        values = []
        for key, _ in columns:
            value = row.get(key)
            if isinstance(value, list):
                value = "; ".join(value)
            elif value is None:
                value = ""
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            values.append(value)
        writer.writerow(values)
    return buffer.getvalue()


def build_report(
    report_type: str, start_date: date | None = None, end_date: date | None = None
) -> tuple[dict[str, t.Any], list[tuple[str, str]]]:
    if report_type == "participant_report":
        return participant_report(start_date, end_date), PARTICIPANT_REPORT_COLUMNS
    return event_report(start_date, end_date), EVENT_REPORT_COLUMNS
