import typing as t
from datetime import datetime, timedelta

from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from events.models import CheckIn, Company, Event, Participant, Registration

PERIOD_DELTAS = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}


def period_start(period: str, now: datetime | None = None) -> datetime:
    """Start of the dashboard window. ``day`` means since local midnight."""
    now = now or timezone.now()
    if period == "day":
        return timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return now - PERIOD_DELTAS.get(period, PERIOD_DELTAS["month"])


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 2) if total else 0.0


def build_dashboard(period: str = "month") -> dict[str, t.Any]:
    now = timezone.now()
    start = period_start(period, now)

    events = Event.objects.active().filter(created_at__gte=start)
    event_totals = events.aggregate(
        total=Count("id"),
        active=Count("id", filter=Q(status=Event.Status.ACTIVE)),
        upcoming=Count("id", filter=Q(data_inicio__gt=now)),
        completed=Count("id", filter=Q(status=Event.Status.COMPLETED)),
    )

    registrations = Registration.objects.filter(data_inscricao__gte=start)
    registration_totals = registrations.aggregate(
        total=Count("id"),
        confirmed=Count("id", filter=Q(status=Registration.Status.CONFIRMED)),
        cancelled=Count("id", filter=Q(status=Registration.Status.CANCELLED)),
        checked_in=Count("checkin"),
    )

    recent_check_ins = [
        {
            "id": checkin.id,
            "participant_nome": checkin.registration.participant.nome,
            "participant_cpf": checkin.registration.participant.cpf,
            "event_nome": checkin.registration.event.nome,
            "data_check_in": checkin.data_check_in,
            "responsavel_credenciamento": checkin.responsavel_credenciamento,
        }
        for checkin in CheckIn.objects.select_related("registration__participant", "registration__event")
        .filter(data_check_in__gte=start)
        .order_by("-data_check_in")[:10]
    ]

    top_events = [
        {
            "id": event.id,
            "nome": event.nome,
            "total_registrations": event.total_registrations,
            "checked_in": event.checked_in,
            "capacidade": event.capacidade,
            "occupancy_rate": _rate(event.total_registrations, event.capacidade or 0),
            "attendance_rate": _rate(event.checked_in, event.total_registrations),
        }
        for event in Event.objects.active()
        .annotate(
            total_registrations=Count("registrations", distinct=True),
            checked_in=Count("registrations__checkin", distinct=True),
        )
        .filter(total_registrations__gt=0)
        .order_by("-total_registrations", "nome")[:5]
    ]

    today = timezone.localdate()
    first_day = today - timedelta(days=6)
    per_day = dict(
        CheckIn.objects.filter(data_check_in__date__gte=first_day)
        .annotate(day=TruncDate("data_check_in"))
        .values("day")
        .annotate(count=Count("id"))
        .values_list("day", "count")
    )
    chart_data = [
        {"day": first_day + timedelta(days=offset), "count": per_day.get(first_day + timedelta(days=offset), 0)}
        for offset in range(7)
    ]

    top_companies = [
        {"id": company.id, "nome": str(company), "participants": company.participant_count}
        for company in Company.objects.active()
        .annotate(participant_count=Count("participants", filter=Q(participants__ativo=True)))
        .filter(participant_count__gt=0)
        .order_by("-participant_count", "razao_social")[:5]
    ]

    return {
        "period": period,
        "generated_at": now,
        "summary": {
            "total_events": event_totals["total"],
            "active_events": event_totals["active"],
            "upcoming_events": event_totals["upcoming"],
            "completed_events": event_totals["completed"],
            "total_participants": Participant.objects.active().count(),
            "total_registrations": registration_totals["total"],
            "confirmed_registrations": registration_totals["confirmed"],
            "cancelled_registrations": registration_totals["cancelled"],
            "checked_in_registrations": registration_totals["checked_in"],
            "attendance_rate": _rate(registration_totals["checked_in"], registration_totals["total"]),
        },
        "recent_check_ins": recent_check_ins,
        "top_events": top_events,
        "chart_data": chart_data,
        "top_companies": top_companies,
    }
