"""Client for the 4Events ticketing platform."""

import typing as t

import httpx
import structlog
from django.conf import settings

from common.documents import normalize_cpf, only_digits

from .base import RegistryClient
from .exceptions import RegistryError
from .schema import LookupResult, TicketCategory

logger = structlog.get_logger(__name__)

ACTIVE_TICKET_LABEL = "Ativo"
VISIBLE_TICKET_LABEL = "Categoria visível"


class FourEventsClient(RegistryClient):
    name = "4events"

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self.base_url = settings.FOUR_EVENTS_BASE_URL.rstrip("/")
        super().__init__(
            headers={"Authorization": f"Bearer {settings.FOUR_EVENTS_TOKEN}", "Accept": "application/json"},
            transport=transport,
        )

    def search_attendee(self, cpf: str) -> dict[str, t.Any] | None:
        """First attendee registered with the CPF, if any."""
        response = self._request("POST", f"{self.base_url}/attendees/search", data={"cpf": only_digits(cpf)})
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise self._error(response, "4Events attendee search failed")
        data = self._json(response) or {}
        results = data.get("results") if isinstance(data, dict) else None
        return results[0] if results else None

    @staticmethod
    def attendee_to_result(record: dict[str, t.Any], cpf: str | None = None) -> LookupResult:
        return LookupResult(
            source="4events",
            cpf=normalize_cpf(record.get("attendee_cpf") or cpf),
            nome=record.get("attendee_name") or "",
            email=record.get("attendee_email") or "",
            telefone=only_digits(record.get("attendee_phone")),
            raw_data=record,
        )

    def create_attendee(self, name: str, email: str, phone: str, cpf: str) -> dict[str, t.Any]:
        """Create an attendee on the platform (not tied to any event)."""
        response = self._request(
            "POST",
            f"{self.base_url}/attendees/create",
            data={"name": name, "email": email, "phone": phone or "", "cpf": only_digits(cpf)},
        )
        if not response.is_success:
            raise self._error(response, "Falha ao cadastrar participante na 4events")
        logger.info("fourevents_attendee_created")
        return t.cast(dict[str, t.Any], self._json(response) or {})

    def register_attendee(
        self,
        event_id: str,
        name: str,
        email: str,
        cpf: str,
        phone: str | None = None,
        ticket_category: str | None = None,
    ) -> dict[str, t.Any]:
        """Register an attendee in an event. The attendee's password defaults to the CPF digits.

        Raises:
            RegistryError: with the platform's own message when it refuses the registration.
        """
        digits = only_digits(cpf)
        params = {
            "email": email,
            "name": name,
            "password": digits or "123456",
            "cpf": digits,
            "created_by": "admin",
            "payment_active": "0",
            "status": "1",
        }
        if phone:
            params["phone"] = phone
        if ticket_category:
            params["ticket_category"] = str(ticket_category)
        response = self._request("POST", f"{self.base_url}/attendees/{event_id}/new", params=params)
        data = self._json(response)
        if not response.is_success:
            message = data.get("message") if isinstance(data, dict) else None
            logger.warning("fourevents_register_refused", event_id=event_id, status=response.status_code)
            raise RegistryError(
                message or response.text or f"Erro HTTP {response.status_code}",
                registry=self.name,
                status_code=response.status_code,
            )
        logger.info("fourevents_attendee_registered", event_id=event_id)
        return data if isinstance(data, dict) else {}

    def find_registration(self, event_id: str, cpf: str) -> dict[str, t.Any] | None:
        """The attendee's registration in the event, ``None`` when not registered."""
        response = self._request(
            "POST", f"{self.base_url}/search", json={"event_id": event_id, "cpf": only_digits(cpf)}
        )
        if response.status_code >= 500:
            raise self._error(response, "4Events registration check failed")
        if not response.is_success:
            return None
        data = self._json(response)
        return data if isinstance(data, dict) else {}

    def check_registration(self, event_id: str, cpf: str) -> bool:
        return self.find_registration(event_id, cpf) is not None

    def list_ticket_categories(self, event_id: str) -> list[TicketCategory]:
        """Active, visible ticket categories of an event.

        Raises:
            RegistryError: non-2xx or an answer without the ``result`` list.
        """
        response = self._request("GET", f"{self.base_url}/tickets/{event_id}/list")
        if not response.is_success:
            raise self._error(response, "Falha ao buscar os tipos de ingresso para este evento")
        data = self._json(response)
        if not isinstance(data, dict) or not isinstance(data.get("result"), list):
            raise RegistryError("A resposta da API de ingressos não continha a lista esperada.", registry=self.name)
        return [
            TicketCategory(id=str(ticket["id"]), name=ticket.get("nome") or "")
            for ticket in data["result"]
            if ticket.get("status_label") == ACTIVE_TICKET_LABEL and ticket.get("oculta_label") == VISIBLE_TICKET_LABEL
        ]
