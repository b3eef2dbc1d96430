import pytest

from events.models import Event, Participant
from events.tasks import enrich_participants_task, sync_sas_event_task
from registries.testing import RegistryStub

pytestmark = pytest.mark.django_db


def test_sync_sas_event_task(registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", "https://sas.test/api/Evento/Consultar", json=[{"CodEvento": 77, "TituloEvento": "X"}])
    registry_stub.add("GET", "https://sas.test/api/Evento/ConsultarParticipante", json=[])

    result = sync_sas_event_task.delay("77").get()

    event = Event.objects.get(codevento_sas="77")
    assert result["event_id"] == str(event.id)
    assert result["inserted"] == 0


def test_enrich_participants_task(other_participant: Participant, event: Event) -> None:
    result = enrich_participants_task.delay(str(event.id), limit=5).get()

    assert result == {"processed": 0, "enriched": 0, "failed": 0}


def test_enrich_participants_task_without_event(other_participant: Participant) -> None:
    result = enrich_participants_task.delay().get()

    assert result == {"processed": 1, "enriched": 0, "failed": 1}
