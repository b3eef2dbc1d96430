import csv
import io
from datetime import timedelta

import pytest
from django.utils import timezone

from events.models import CheckIn, Event, Participant, Registration
from events.service import report_service

pytestmark = pytest.mark.django_db


@pytest.fixture
def past_event(db: None) -> Event:
    start = timezone.now() - timedelta(days=60)
    return Event.objects.create(nome="Evento Antigo", data_inicio=start, data_fim=start, status=Event.Status.COMPLETED)


class TestEventReport:
    def test_rows_and_summary(self, checked_in_registration: Registration, other_participant: Participant) -> None:
        Registration.objects.create(event=checked_in_registration.event, participant=other_participant)

        report = report_service.event_report()

        [row] = report["data"]
        assert row["nome"] == "Feira do Empreendedor"
        assert row["total_registrations"] == 2
        assert row["total_check_ins"] == 1
        assert report["summary"] == {"total_events": 1, "total_participants": 2, "average_participants_per_event": 2.0}

    def test_date_range(self, event: Event, past_event: Event) -> None:
        start = timezone.localdate() - timedelta(days=90)
        end = timezone.localdate()

        report = report_service.event_report(start, end)

        assert [row["nome"] for row in report["data"]] == ["Evento Antigo"]

    def test_empty(self, db: None) -> None:
        assert report_service.event_report()["summary"]["average_participants_per_event"] == 0


class TestParticipantReport:
    def test_rows_and_summary(
        self, checked_in_registration: Registration, participant: Participant, past_event: Event
    ) -> None:
        Registration.objects.create(event=past_event, participant=participant)

        report = report_service.participant_report()

        [row] = report["data"]
        assert row["cpf"] == "529.982.247-25"
        assert sorted(row["events"]) == ["Evento Antigo", "Feira do Empreendedor"]
        assert row["total_events"] == 2
        assert row["last_check_in"] == CheckIn.objects.get().data_check_in
        assert report["summary"]["total_participants"] == 1
        assert report["summary"]["average_events_per_participant"] == 2.0

    def test_range_limits_events(
        self, registration: Registration, participant: Participant, past_event: Event, other_participant: Participant
    ) -> None:
        Registration.objects.create(event=past_event, participant=participant)
        Registration.objects.create(event=past_event, participant=other_participant)
        start = timezone.localdate() - timedelta(days=90)

        report = report_service.participant_report(start, timezone.localdate())

        assert {row["nome"]: row["events"] for row in report["data"]} == {
            "João Pereira": ["Evento Antigo"],
            "Maria da Silva": ["Evento Antigo"],
        }
        assert report["summary"]["most_popular_event"] == "Evento Antigo"

    def test_participants_without_registrations_are_left_out(self, participant: Participant) -> None:
        assert report_service.participant_report()["data"] == []


def test_to_csv() -> None:
    rows = [{"nome": "Maria", "events": ["A", "B"], "last_check_in": None}]
    columns = [("nome", "Nome"), ("events", "Eventos"), ("last_check_in", "Último Check-in")]

    content = report_service.to_csv(rows, columns)

    assert list(csv.reader(io.StringIO(content))) == [["Nome", "Eventos", "Último Check-in"], ["Maria", "A; B", ""]]


def test_build_report_columns(db: None) -> None:
    _, columns = report_service.build_report("participant_report")
    assert columns == report_service.PARTICIPANT_REPORT_COLUMNS

    _, columns = report_service.build_report("event_report")
    assert columns == report_service.EVENT_REPORT_COLUMNS
