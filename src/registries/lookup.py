"""Participant resolution across the local database and the external registries.

Order: local database, SAS, CPE, 4Events. First success wins; there are no
retries. A registry failure is logged and the chain moves on, except when CPE
fails and SAS had nothing to offer: then the failure propagates.
"""

import typing as t

import structlog

from common.documents import normalize_cpf
from events.models import Event, Participant, Registration

from .cpe import CPEClient
from .exceptions import RegistryError
from .fourevents import FourEventsClient
from .sas import SASClient
from .schema import CompanyData, LookupResult, RegistrationInfo

logger = structlog.get_logger(__name__)


def local_result(participant: Participant, event: Event | None = None) -> LookupResult:
    """Describe a local participant, with their enrollment in ``event`` when given."""
    company = None
    if participant.company_id:
        company = CompanyData(
            cnpj=participant.company.cnpj,
            razao_social=participant.company.razao_social,
            nome_fantasia=participant.company.nome_fantasia,
            cargo=participant.cargo,
        )
    registration_info = None
    if event is not None:
        registration = (
            Registration.objects.filter(participant=participant, event=event).select_related("checkin").first()
        )
        if registration is not None:
            checkin = getattr(registration, "checkin", None)
            registration_info = RegistrationInfo(
                registration_id=registration.id,
                status=registration.status,
                codigo_inscricao=registration.codigo_inscricao,
                already_checked_in=checkin is not None,
                data_check_in=checkin.data_check_in if checkin else None,
            )
    return LookupResult(
        source="local",
        cpf=participant.cpf,
        nome=participant.nome,
        email=participant.email,
        telefone=participant.telefone,
        cargo=participant.cargo,
        company=company,
        participant_id=participant.id,
        registration=registration_info,
    )


class ParticipantLookup:
    """Resolve a CPF to participant data.

    Usage:
        with ParticipantLookup() as lookup:
            result = lookup.resolve("123.456.789-09", event=event)
    """

    def __init__(
        self,
        sas: SASClient | None = None,
        cpe: CPEClient | None = None,
        fourevents: FourEventsClient | None = None,
    ) -> None:
        self.sas = sas or SASClient()
        self.cpe = cpe or CPEClient()
        self.fourevents = fourevents or FourEventsClient()

    def __enter__(self) -> t.Self:
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    def close(self) -> None:
        for client in (self.sas, self.cpe, self.fourevents):
            client.close()

    def find_local(self, cpf: str, event: Event | None = None) -> LookupResult | None:
        participant = Participant.objects.select_related("company").filter(cpf=normalize_cpf(cpf)).first()
        if participant is None:
            return None
        return local_result(participant, event)

    def resolve(self, cpf: str, event: Event | None = None) -> LookupResult | None:
        """Walk the chain and return the first hit, or ``None``.

        Raises:
            RegistryError: CPE failed and SAS had no record to fall back on.
        """
        cpf = normalize_cpf(cpf)
        log = logger.bind(cpf=cpf, event_id=str(event.id) if event else None)

        if result := self.find_local(cpf, event):
            log.info("participant_lookup_hit", source="local")
            return result

        sas_record = None
        try:
            sas_record = self.sas.find_person(cpf)
        except RegistryError as e:
            log.warning("participant_lookup_registry_failed", registry="sas", error=str(e))

        if sas_record and self.sas.is_active(sas_record):
            result = self.sas.person_to_result(sas_record, cpf=cpf)
            log.info("participant_lookup_hit", source="sas")
            self._mirror_to_fourevents(result)
            return result

        try:
            cpe_record = self.cpe.find_person(cpf)
        except RegistryError as e:
            log.warning("participant_lookup_registry_failed", registry="cpe", error=str(e))
            if sas_record:
                log.info("participant_lookup_hit", source="sas", inactive=True)
                return self.sas.person_to_result(sas_record, cpf=cpf)
            raise

        if cpe_record:
            result = self.cpe.person_to_result(cpe_record, cpf=cpf)
            log.info("participant_lookup_hit", source="cpe")
            self._mirror_to_fourevents(result)
            return result

        try:
            attendee = self.fourevents.search_attendee(cpf)
        except RegistryError as e:
            log.warning("participant_lookup_registry_failed", registry="4events", error=str(e))
            attendee = None
        if attendee:
            log.info("participant_lookup_hit", source="4events")
            return self.fourevents.attendee_to_result(attendee, cpf=cpf)

        log.info("participant_lookup_miss")
        return None

    def _mirror_to_fourevents(self, result: LookupResult) -> None:
        try:
            self.fourevents.create_attendee(result.nome, result.email, result.telefone, result.cpf)
        except RegistryError as e:
            logger.warning("fourevents_mirror_failed", source=result.source, error=str(e))
