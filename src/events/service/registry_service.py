"""Pass-through operations on the external registries used by the check-in screens."""

import typing as t
from datetime import date

from ninja.errors import HttpError

from events.schema import FourEventsRegisterSchema, SASEventItemSchema
from registries.fourevents import FourEventsClient
from registries.sas import SAS_DATE_FORMAT, SASClient
from registries.schema import TicketCategory


def _sas_date(value: str) -> str:
    """Accept ``DD/MM/YYYY`` or ISO dates and return the SAS format."""
    try:
        return date.fromisoformat(value).strftime(SAS_DATE_FORMAT)
    except ValueError:
        pass
    try:
        day, month, year = (int(part) for part in value.split("/"))
        return date(year, month, day).strftime(SAS_DATE_FORMAT)
    except ValueError as e:
        raise HttpError(400, "Datas devem estar no formato DD/MM/AAAA.") from e


def list_sas_events(periodo_inicial: str, periodo_final: str, situacao: str = "D") -> list[SASEventItemSchema]:
    """SAS events of a period, as ``{id, nome}`` pairs for the event picker."""
    with SASClient() as sas:
        events = sas.list_events(_sas_date(periodo_inicial), _sas_date(periodo_final), situacao=situacao)
    return [SASEventItemSchema(id=event.codevento, nome=event.nome) for event in events]


def list_ticket_categories(fourevents_event_id: str) -> list[TicketCategory]:
    with FourEventsClient() as client:
        return client.list_ticket_categories(fourevents_event_id)


def check_fourevents_registration(fourevents_event_id: str, cpf: str) -> bool:
    with FourEventsClient() as client:
        return client.check_registration(fourevents_event_id, cpf)


def register_in_fourevents(payload: FourEventsRegisterSchema) -> dict[str, t.Any]:
    """Register an attendee in a ticketing-platform event.

    Raises:
        RegistryError: the platform refused the registration.
    """
    with FourEventsClient() as client:
        return client.register_attendee(
            payload.event_id,
            name=payload.name,
            email=payload.email,
            cpf=payload.cpf,
            phone=payload.phone,
            ticket_category=payload.ticket_category,
        )
