from datetime import timedelta

import pytest
from django.utils import timezone

from events.models import CheckIn, Event, Participant, Registration
from events.schema import EventCreateSchema, EventEditSchema
from events.service import event_service
from registries.testing import RegistryStub

pytestmark = pytest.mark.django_db

PARTICIPANTS_URL = "https://sas.test/api/Evento/ConsultarParticipante"


def test_create_event_strips_markup(db: None) -> None:
    start = timezone.now() + timedelta(days=3)
    payload = EventCreateSchema(
        nome="Palestra <b>Vendas</b> & Cia", data_inicio=start, data_fim=start + timedelta(hours=2)
    )

    event = event_service.create_event(payload)

    assert event.nome == "Palestra Vendas & Cia"
    assert event.codevento_sas is None


def test_update_event_only_touches_sent_fields(event: Event) -> None:
    updated = event_service.update_event(event, EventEditSchema(local="Sede"))

    assert updated.local == "Sede"
    assert updated.nome == "Feira do Empreendedor"


def test_delete_event_is_soft(registration: Registration) -> None:
    event_service.delete_event(registration.event)

    event = Event.objects.get(pk=registration.event_id)
    assert event.ativo is False
    assert Registration.objects.filter(pk=registration.pk).exists()


def test_event_stats(event: Event, checked_in_registration: Registration, other_participant: Participant) -> None:
    Registration.objects.create(event=event, participant=other_participant, status=Registration.Status.CANCELLED)

    stats = event_service.get_event_stats(event)

    assert stats == {
        "total": 2,
        "confirmed": 1,
        "pending": 0,
        "cancelled": 1,
        "checked_in": 1,
        "credential_rate": 50.0,
        "attendance_rate": 50.0,
    }


def test_event_stats_without_registrations(event: Event) -> None:
    stats = event_service.get_event_stats(event)

    assert stats["total"] == 0
    assert stats["credential_rate"] == 0.0


@pytest.mark.parametrize(
    "credentialed,in_sas,expected",
    [
        (True, True, "integrado"),
        (True, False, "credenciado/Pendente de sincronização"),
        (False, True, "Pendente de Checkin"),
        (False, False, "registered"),
    ],
)
def test_ui_status(credentialed: bool, in_sas: bool, expected: str) -> None:
    assert event_service.ui_status(credentialed, in_sas, "registered") == expected


class TestEventReport:
    def test_without_participants(self, event: Event) -> None:
        report = event_service.build_event_report(event)

        assert report["participants"] is None
        assert report["stats"] is not None
        assert report["sas_checked"] is False

    def test_local_event_skips_sas(
        self, event: Event, registration: Registration, registry_stub: RegistryStub
    ) -> None:
        report = event_service.build_event_report(event, include_participants=True, include_stats=False)

        assert report["stats"] is None
        assert report["sas_checked"] is False
        [row] = report["participants"]
        assert row["ui_status"] == "registered"
        assert row["empresa"] == "Padaria Boa"
        assert registry_stub.requests == []

    def test_sas_presence(
        self, sas_event: Event, participant: Participant, other_participant: Participant, registry_stub: RegistryStub
    ) -> None:
        checked_in = Registration.objects.create(event=sas_event, participant=participant)
        CheckIn.objects.create(registration=checked_in, responsavel_credenciamento="Ana")
        Registration.objects.create(event=sas_event, participant=other_participant)
        registry_stub.add("GET", PARTICIPANTS_URL, json=[{"CPF": 52998224725, "NomeRazaoSocialPF": "Maria"}])

        report = event_service.build_event_report(sas_event, include_participants=True)

        assert report["sas_checked"] is True
        statuses = {row["cpf"]: (row["in_sas"], row["ui_status"]) for row in report["participants"]}
        assert statuses == {"52998224725": (True, "integrado"), "11144477735": (False, "registered")}

    def test_sas_unavailable(self, sas_event: Event, participant: Participant, registry_stub: RegistryStub) -> None:
        registration = Registration.objects.create(event=sas_event, participant=participant)
        CheckIn.objects.create(registration=registration)
        registry_stub.add("GET", PARTICIPANTS_URL, status_code=503)

        report = event_service.build_event_report(sas_event, include_participants=True)

        assert report["sas_checked"] is False
        assert report["participants"][0]["ui_status"] == "credenciado/Pendente de sincronização"
