import csv
import io

import pytest
from django.test.client import Client
from django.urls import reverse

from events.models import Registration

pytestmark = pytest.mark.django_db


class TestDashboard:
    def test_operator_sees_dashboard(self, operator_client: Client, checked_in_registration: Registration) -> None:
        response = operator_client.get(reverse("api:dashboard"), {"period": "week"})

        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "week"
        assert data["summary"]["checked_in_registrations"] == 1
        assert len(data["chart_data"]) == 7
        assert data["recent_check_ins"][0]["event_nome"] == "Feira do Empreendedor"

    def test_unknown_period(self, operator_client: Client) -> None:
        response = operator_client.get(reverse("api:dashboard"), {"period": "decade"})

        assert response.status_code == 422

    def test_no_role(self, no_role_client: Client) -> None:
        assert no_role_client.get(reverse("api:dashboard")).status_code == 403


class TestReports:
    def test_event_report_json(self, operator_client: Client, checked_in_registration: Registration) -> None:
        response = operator_client.get(reverse("api:reports"))

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "event_report"
        assert data["summary"]["total_events"] == 1
        assert data["data"][0]["total_check_ins"] == 1

    def test_participant_report_json(self, operator_client: Client, checked_in_registration: Registration) -> None:
        response = operator_client.get(reverse("api:reports"), {"type": "participant_report"})

        assert response.status_code == 200
        assert response.json()["data"][0]["cpf"] == "529.982.247-25"

    def test_csv_needs_export_permission(self, operator_client: Client) -> None:
        response = operator_client.get(reverse("api:reports"), {"format": "csv"})

        assert response.status_code == 403

    def test_csv(self, manager_client: Client, checked_in_registration: Registration) -> None:
        response = manager_client.get(reverse("api:reports"), {"type": "participant_report", "format": "csv"})

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/csv")
        assert "participant_report-" in response["Content-Disposition"]
        rows = list(csv.reader(io.StringIO(response.content.decode())))
        assert rows[0][:3] == ["ID", "Nome", "CPF"]
        assert rows[1][1:5] == ["Maria da Silva", "529.982.247-25", "maria@example.com", "Feira do Empreendedor"]
