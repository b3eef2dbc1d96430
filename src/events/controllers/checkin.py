"""The attendant check-in screens."""

from ninja import Query
from ninja_extra import api_controller, route

from accounts.permissions import MANAGE_PARTICIPANTS, HasPermission
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from common.throttling import LookupThrottle, WriteThrottle
from events import schema
from events.service import company_service, credentialing_service, registry_service
from registries.schema import LookupResult, TicketCategory


@api_controller(
    "/checkin",
    auth=StructlogJWTAuth(),
    permissions=[HasPermission(MANAGE_PARTICIPANTS)],
    tags=["Check-in"],
    throttle=LookupThrottle(),
)
class CheckinController(UserAwareController):
    @route.post("/search", url_name="checkin_search", response=LookupResult)
    def search(self, payload: schema.CheckinSearchSchema) -> LookupResult:
        """Find a participant by CPF.

        Looks in the local database, then SAS, CPE and 4Events. The first registry
        that knows the CPF answers. When an event is given, a local hit also says
        whether the participant is enrolled and already checked in.

        404 carries a `fallback_url` where the person can register themselves.
        """
        return credentialing_service.search(payload.cpf, payload.event_id)

    @route.post("/search-local", url_name="checkin_search_local", response=LookupResult)
    def search_local(self, payload: schema.CheckinEventSearchSchema) -> LookupResult:
        """Find a participant enrolled in the event, without calling the registries."""
        return credentialing_service.search_local(payload.cpf, payload.event_id)

    @route.post("/existing", url_name="checkin_existing", response=schema.ExistingCheckinResponse)
    def existing(self, payload: schema.CheckinEventSearchSchema) -> schema.ExistingCheckinResponse:
        """Tell whether the CPF is already checked in to the event."""
        return credentialing_service.existing_checkin(payload.cpf, payload.event_id)

    @route.post(
        "/register",
        url_name="checkin_register",
        response=schema.CheckinRegisterResponse,
        throttle=WriteThrottle(),
    )
    def register(self, payload: schema.CheckinRegisterSchema) -> schema.CheckinRegisterResponse:
        """Credential a participant in an event.

        Creates or refreshes the participant and company, confirms the registration and
        records the check-in. Repeating the call does not create a second check-in:
        `already_checked_in` is true and the original check-in is returned.
        """
        result = credentialing_service.register_local_credentialing(
            payload, payload.attendant_name or self.attendant_name()
        )
        return schema.CheckinRegisterResponse(
            participant_id=result.participant.id,
            registration_id=result.registration.id,
            checkin_id=result.checkin.id,
            codigo_inscricao=result.registration.codigo_inscricao,
            data_check_in=result.checkin.data_check_in,
            responsavel_credenciamento=result.checkin.responsavel_credenciamento,
            already_checked_in=result.already_checked_in,
        )

    @route.post("/company", url_name="checkin_company", response=schema.CompanySearchResponse)
    def search_company(self, payload: schema.CompanySearchSchema) -> schema.CompanySearchResponse:
        """Look a CNPJ up in CPE."""
        company = company_service.search_company(payload.cnpj)
        return schema.CompanySearchResponse(
            cnpj=company.cnpj, razao_social=company.razao_social, nome_fantasia=company.nome_fantasia
        )

    @route.get("/sas-events", url_name="checkin_sas_events", response=list[schema.SASEventItemSchema])
    def sas_events(
        self,
        periodo_inicial: str = Query(..., description="DD/MM/YYYY"),  # type: ignore[type-arg]
        periodo_final: str = Query(..., description="DD/MM/YYYY"),  # type: ignore[type-arg]
        situacao: str = "D",
    ) -> list[schema.SASEventItemSchema]:
        """SAS events of a period, for the event picker."""
        return registry_service.list_sas_events(periodo_inicial, periodo_final, situacao)

    @route.get(
        "/ticket-categories/{event_id}",
        url_name="checkin_ticket_categories",
        response=list[TicketCategory],
    )
    def ticket_categories(self, event_id: str) -> list[TicketCategory]:
        """Active and visible ticket categories of a 4Events event."""
        return registry_service.list_ticket_categories(event_id)

    @route.post(
        "/fourevents/check",
        url_name="checkin_fourevents_check",
        response=schema.FourEventsCheckResponse,
    )
    def fourevents_check(self, payload: schema.FourEventsCheckSchema) -> schema.FourEventsCheckResponse:
        return schema.FourEventsCheckResponse(
            registered=registry_service.check_fourevents_registration(payload.event_id, payload.cpf)
        )

    @route.post(
        "/fourevents/register",
        url_name="checkin_fourevents_register",
        response=schema.FourEventsRegisterResponse,
        throttle=WriteThrottle(),
    )
    def fourevents_register(self, payload: schema.FourEventsRegisterSchema) -> schema.FourEventsRegisterResponse:
        """Register the participant in a 4Events event."""
        return schema.FourEventsRegisterResponse(data=registry_service.register_in_fourevents(payload))
