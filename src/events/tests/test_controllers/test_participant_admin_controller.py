import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import Company, Event, Participant, Registration

pytestmark = pytest.mark.django_db


class TestListParticipants:
    def test_only_credentialed(
        self, operator_client: Client, checked_in_registration: Registration, other_participant: Participant
    ) -> None:
        Registration.objects.create(event=checked_in_registration.event, participant=other_participant)

        response = operator_client.get(reverse("api:list_participants"))

        assert response.status_code == 200
        [row] = response.json()["results"]
        assert row["cpf"] == "52998224725"
        assert row["events_count"] == 1
        assert row["last_check_in"] is not None
        assert row["company"]["razao_social"] == "Padaria Boa LTDA"

    def test_search_and_event_filter(
        self, operator_client: Client, confirmed_registration: Registration, sas_event: Event
    ) -> None:
        found = operator_client.get(reverse("api:list_participants"), {"search": "Maria"}).json()
        other_event = operator_client.get(reverse("api:list_participants"), {"event_id": str(sas_event.id)}).json()

        assert found["count"] == 1
        assert other_event["count"] == 0


class TestParticipantCrud:
    def test_create(self, operator_client: Client, company: Company) -> None:
        response = operator_client.post(
            reverse("api:create_participant"),
            data=orjson.dumps({"cpf": "123.456.789-09", "nome": "Carla Nunes", "company_id": str(company.id)}),
            content_type="application/json",
        )

        assert response.status_code == 201
        assert response.json()["company"]["id"] == str(company.id)
        assert Participant.objects.get(cpf="12345678909").fonte == Participant.Fonte.MANUAL

    def test_create_duplicate(self, operator_client: Client, participant: Participant) -> None:
        response = operator_client.post(
            reverse("api:create_participant"),
            data=orjson.dumps({"cpf": participant.cpf, "nome": "Outra"}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Já existe um participante com este CPF."

    def test_create_short_cpf(self, operator_client: Client) -> None:
        response = operator_client.post(
            reverse("api:create_participant"),
            data=orjson.dumps({"cpf": "1234", "nome": "Carla"}),
            content_type="application/json",
        )

        assert response.status_code == 422

    def test_get_update_delete(self, manager_client: Client, participant: Participant) -> None:
        url_kwargs = {"participant_id": participant.id}

        got = manager_client.get(reverse("api:get_participant", kwargs=url_kwargs))
        updated = manager_client.patch(
            reverse("api:update_participant", kwargs=url_kwargs),
            data=orjson.dumps({"cargo": "Gerente"}),
            content_type="application/json",
        )
        deleted = manager_client.delete(reverse("api:delete_participant", kwargs=url_kwargs))
        gone = manager_client.get(reverse("api:get_participant", kwargs=url_kwargs))

        assert got.status_code == 200
        assert updated.json()["cargo"] == "Gerente"
        assert deleted.status_code == 204
        assert gone.status_code == 404
        assert Participant.objects.filter(pk=participant.pk, ativo=False).exists()

    def test_patching_the_same_text_twice_keeps_it(self, manager_client: Client, participant: Participant) -> None:
        url = reverse("api:update_participant", kwargs={"participant_id": participant.id})
        body = orjson.dumps({"nome": "Ana D'Ávila & Filhos"})

        first = manager_client.patch(url, data=body, content_type="application/json")
        second = manager_client.patch(
            url, data=orjson.dumps({"nome": first.json()["nome"]}), content_type="application/json"
        )

        assert first.json()["nome"] == "Ana D'Ávila & Filhos"
        assert second.json()["nome"] == "Ana D'Ávila & Filhos"
        participant.refresh_from_db()
        assert participant.nome == "Ana D'Ávila & Filhos"


class TestCredenciar:
    def test_checks_in_as_current_user(self, operator_client: Client, registration: Registration) -> None:
        response = operator_client.post(
            reverse("api:credenciar_participant", kwargs={"participant_id": registration.participant_id}),
            data=orjson.dumps({}),
            content_type="application/json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(registration.id)
        assert data["status"] == "confirmed"
        assert data["checkin"]["responsavel_credenciamento"] == "Ana Atendente"

    def test_without_registration(self, operator_client: Client, participant: Participant) -> None:
        response = operator_client.post(
            reverse("api:credenciar_participant", kwargs={"participant_id": participant.id}),
            data=orjson.dumps({}),
            content_type="application/json",
        )

        assert response.status_code == 404


def test_participant_report(operator_client: Client, checked_in_registration: Registration) -> None:
    response = operator_client.get(
        reverse("api:participant_report", kwargs={"participant_id": checked_in_registration.participant_id})
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_events"] == 1
    assert data["total_check_ins"] == 1
    assert data["events"][0]["responsavel_credenciamento"] == "Ana Atendente"
