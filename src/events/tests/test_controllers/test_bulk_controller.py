import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import Event, Participant, Registration
from registries.testing import RegistryStub

pytestmark = pytest.mark.django_db


class TestImport:
    def test_manager_imports(self, manager_client: Client, event: Event) -> None:
        rows = [
            {"cpf": "123.456.789-09", "nome": "Carla Nunes", "evento_nome": event.nome},
            {"cpf": "", "nome": "Sem CPF", "evento_nome": event.nome},
        ]

        response = manager_client.post(
            reverse("api:import_participants"), data=orjson.dumps({"rows": rows}), content_type="application/json"
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["total"], data["imported"], data["failed"]) == (2, 1, 1)
        assert data["errors"] == ["Linha 3: CPF inválido ou ausente"]
        assert Registration.objects.filter(event=event, participant__cpf="12345678909").exists()

    def test_operator_is_refused(self, operator_client: Client) -> None:
        response = operator_client.post(
            reverse("api:import_participants"),
            data=orjson.dumps({"rows": [{"cpf": "12345678909"}]}),
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_empty_batch(self, manager_client: Client) -> None:
        response = manager_client.post(
            reverse("api:import_participants"), data=orjson.dumps({"rows": []}), content_type="application/json"
        )

        assert response.status_code == 422


class TestEnrich:
    def test_admin_only(self, manager_client: Client) -> None:
        response = manager_client.post(
            reverse("api:enrich_participants"), data=orjson.dumps({}), content_type="application/json"
        )

        assert response.status_code == 403

    def test_enrich(
        self, admin_role_client: Client, other_participant: Participant, registry_stub: RegistryStub
    ) -> None:
        registry_stub.add(
            "GET",
            "https://sas.test/pessoa/SelecionarPessoaFisica",
            json={
                "CgcCpf": other_participant.cpf,
                "Situacao": 1,
                "ListaInformacoesContato": [{"CodComunic": 25, "Numero": "joao@example.com"}],
            },
        )

        response = admin_role_client.post(
            reverse("api:enrich_participants"), data=orjson.dumps({"limit": 10}), content_type="application/json"
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["processed"], data["enriched"], data["failed"]) == (1, 1, 0)
        assert data["details"][0]["updated_fields"] == ["email"]
        other_participant.refresh_from_db()
        assert other_participant.email == "joao@example.com"

    def test_enrich_async(self, admin_role_client: Client, other_participant: Participant) -> None:
        response = admin_role_client.post(
            reverse("api:enrich_participants"),
            data=orjson.dumps({"run_async": True}),
            content_type="application/json",
        )

        assert response.status_code == 202
        assert response.json()["task_id"]
