"""Client for SAS, the customer service system of Sebrae (registry A).

Person lookups and enrollments go to ``SAS_PERSON_URL``, event queries to
``SAS_BASE_URL``. Every request carries the API key in the ``x-req`` header.
"""

import typing as t
from datetime import date, datetime

import httpx
import structlog
from django.conf import settings
from django.utils import timezone

from common.documents import normalize_cnpj, normalize_cpf, only_digits

from .base import RegistryClient
from .exceptions import RegistryError, RegistryNotFound
from .schema import CompanyData, LookupResult, SASEvent, SASParticipant

logger = structlog.get_logger(__name__)

EMAIL_COMMUNICATION_CODE = 25
PHONE_COMMUNICATION_CODE = 5
ACTIVE = 1
SAS_DATE_FORMAT = "%d/%m/%Y"
SAS_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"


class EnrollableParticipant(t.Protocol):
    cpf: str
    nome: str
    email: str
    telefone: str
    cargo: str


def parse_sas_datetime(value: str | None) -> datetime | None:
    """Parse ``DD/MM/YYYY HH:mm:ss`` (time optional) into an aware datetime."""
    if not value:
        return None
    value = value.strip()
    for fmt in (SAS_DATETIME_FORMAT, SAS_DATE_FORMAT):
        try:
            return timezone.make_aware(datetime.strptime(value, fmt))
        except ValueError:
            continue
    logger.warning("sas_invalid_date", value=value)
    return None


def normalize_modalidade(value: str | None) -> t.Literal["presencial", "online", "hibrido"]:
    lowered = (value or "").lower()
    if "online" in lowered or "ead" in lowered:
        return "online"
    if "hibrido" in lowered or "híbrido" in lowered:
        return "hibrido"
    return "presencial"


def _to_int(value: t.Any) -> int | None:
    try:
        return int(value) or None
    except (TypeError, ValueError):
        return None


def map_event(raw: dict[str, t.Any]) -> SASEvent:
    """Map a raw ``Evento/Consultar`` record."""
    now = timezone.now()
    titulo = raw.get("TituloEvento") or "Evento SAS"
    return SASEvent(
        codevento=str(raw.get("CodEvento") or ""),
        nome=titulo,
        descricao=raw.get("DescProduto") or titulo,
        data_inicio=parse_sas_datetime(raw.get("PeriodoInicial")) or now,
        data_fim=parse_sas_datetime(raw.get("PeriodoFinal")) or now,
        local=raw.get("Local") or "Local não informado",
        modalidade=normalize_modalidade(raw.get("ModalidadeNome")),
        status="active" if raw.get("Situacao") == "Disponível" else "draft",
        tipo_evento=raw.get("InstrumentoNome") or "Evento",
        publico_alvo="Público geral" if raw.get("TipoPublico") == "Aberto" else "Público específico",
        capacidade=_to_int(raw.get("MaxParticipante")),
        solucao=raw.get("DescProjeto") or "Sistema SAS",
        unidade=raw.get("DescUnidadeOrganizacional") or "SEBRAE-RR",
        tipo_acao=raw.get("DescAcao") or "",
    )


def map_participant(raw: dict[str, t.Any]) -> SASParticipant:
    """Map a raw ``Evento/ConsultarParticipante`` record. SAS sends the CPF as a number."""
    return SASParticipant(
        cpf=normalize_cpf(raw.get("CPF")),
        nome=raw.get("NomeRazaoSocialPF") or "",
        email=(raw.get("Email") or "").lower(),
        telefone=only_digits(raw.get("Telefone")),
        empresa=raw.get("NomeRazaoSocialPJ") or "",
        cnpj=only_digits(raw.get("CNPJ")),
        vinculo=raw.get("TipoParticipanteNome") or "",
        status=raw.get("Situacao") or "",
    )


class SASClient(RegistryClient):
    name = "sas"

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self.base_url = settings.SAS_BASE_URL.rstrip("/")
        self.person_url = settings.SAS_PERSON_URL.rstrip("/")
        self.cod_uf = settings.SAS_COD_UF
        super().__init__(
            headers={"x-req": settings.SAS_API_KEY, "Content-Type": "application/json"},
            transport=transport,
        )

    # People

    def find_person(self, cpf: str) -> dict[str, t.Any] | None:
        """Fetch a person by CPF.

        404, ``null``, an empty list or an unparseable body mean not found.

        Raises:
            RegistryError: any other non-2xx answer.
        """
        response = self._request(
            "GET", f"{self.person_url}/SelecionarPessoaFisica", params={"CgcCpf": only_digits(cpf)}
        )
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise self._error(response, "SAS person lookup failed")
        data = self._json(response)
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        return data

    @staticmethod
    def is_active(record: dict[str, t.Any]) -> bool:
        """Inactive records are treated as incomplete by the lookup chain."""
        return record.get("Situacao") == ACTIVE

    @staticmethod
    def person_to_result(record: dict[str, t.Any], cpf: str | None = None) -> LookupResult:
        """Map a person record. The company comes from the principal link, else the first one."""
        contacts = record.get("ListaInformacoesContato") or []
        email = next((c.get("Numero") for c in contacts if c.get("CodComunic") == EMAIL_COMMUNICATION_CODE), "")
        phone = next((c.get("Numero") for c in contacts if c.get("CodComunic") == PHONE_COMMUNICATION_CODE), "")
        links = record.get("ListaVinculo") or []
        principal = next((v for v in links if v.get("IndPrincipal") == 1), links[0] if links else None)
        company = None
        if principal:
            company = CompanyData(
                cnpj=normalize_cnpj(principal.get("CgcCpf")) if principal.get("CgcCpf") else "",
                razao_social=principal.get("NomeRazaoSocialPJ") or "",
                cargo=principal.get("DescCargCli") or "",
            )
        return LookupResult(
            source="sas",
            cpf=normalize_cpf(record.get("CgcCpf") or cpf),
            nome=record.get("NomeRazaoSocial") or "",
            email=email or "",
            telefone=only_digits(phone),
            situacao="Ativo" if SASClient.is_active(record) else "Inativo",
            cargo=company.cargo if company else "",
            company=company,
            raw_data=record,
        )

    # Events

    def _query_events(self, params: dict[str, str]) -> list[dict[str, t.Any]]:
        response = self._request(
            "GET", f"{self.base_url}/Evento/Consultar", params={"CodSebrae": self.cod_uf, **params}
        )
        if not response.is_success:
            raise self._error(response, "SAS event query failed")
        data = self._json(response)
        return data if isinstance(data, list) else []

    def find_event(self, cod_evento: str, year: int | None = None) -> SASEvent:
        """Find an event by code.

        Looks in the given (or current) year, then the previous and next ones,
        then without any period. The first non-empty answer wins.

        Raises:
            RegistryNotFound: the event is not in SAS.
        """
        base_year = year or timezone.localdate().year
        for test_year in (base_year, base_year - 1, base_year + 1):
            try:
                found = self._query_events(
                    {
                        "Situacao": "D",
                        "PeriodoInicial": date(test_year, 1, 1).strftime(SAS_DATE_FORMAT),
                        "PeriodoFinal": date(test_year, 12, 31).strftime(SAS_DATE_FORMAT),
                        "CodEvento": str(cod_evento),
                    }
                )
            except RegistryError:
                continue
            if found:
                logger.info("sas_event_found", cod_evento=cod_evento, year=test_year)
                return map_event(found[0])

        found = self._query_events({"CodEvento": str(cod_evento)})
        if found:
            logger.info("sas_event_found", cod_evento=cod_evento, year=None)
            return map_event(found[0])
        raise RegistryNotFound(f"Evento {cod_evento} não encontrado no SAS", registry=self.name)

    def list_events(
        self,
        periodo_inicial: str,
        periodo_final: str,
        situacao: str = "D",
        cod_evento: str | None = None,
    ) -> list[SASEvent]:
        """List events in a period. Dates are ``DD/MM/YYYY`` strings."""
        params = {"Situacao": situacao, "PeriodoInicial": periodo_inicial, "PeriodoFinal": periodo_final}
        if cod_evento:
            params["CodEvento"] = str(cod_evento)
        return [map_event(raw) for raw in self._query_events(params)]

    def list_event_participants(self, cod_evento: str) -> list[SASParticipant]:
        """Participants enrolled in an SAS event.

        Raises:
            RegistryError: non-2xx, or a body that is not a list.
        """
        response = self._request(
            "GET",
            f"{self.base_url}/Evento/ConsultarParticipante",
            params={"CodSebrae": self.cod_uf, "CodEvento": str(cod_evento)},
        )
        if not response.is_success:
            raise self._error(response, f"SAS participants of event {cod_evento} unavailable")
        data = self._json(response)
        if not isinstance(data, list):
            raise RegistryError("Formato de resposta inválido da API SAS", registry=self.name)
        logger.info("sas_participants_fetched", cod_evento=cod_evento, count=len(data))
        return [map_participant(raw) for raw in data]

    # Enrollment

    def is_enrolled(self, cpf: str, cod_evento: str) -> bool:
        response = self._request(
            "GET",
            f"{self.person_url}/SelecionarInscricao",
            params={"CgcCpf": only_digits(cpf), "CodEvento": str(cod_evento)},
        )
        if response.status_code == 404:
            return False
        if not response.is_success:
            raise self._error(response, "SAS enrollment lookup failed")
        return bool(self._json(response))

    def enroll(self, participant: EnrollableParticipant, cod_evento: str) -> dict[str, t.Any]:
        """Send a local participant to SAS as enrolled in the event.

        Raises:
            RegistryError: non-2xx or a body that is not JSON.
        """
        payload = {
            "CodEvento": str(cod_evento),
            "CgcCpf": only_digits(participant.cpf),
            "NomePessoa": participant.nome,
            "Email": participant.email or "",
            "Telefone": participant.telefone or "",
            "Cargo": participant.cargo or "",
            "Situacao": ACTIVE,
            "DataInscricao": timezone.now().isoformat(),
        }
        response = self._request("POST", f"{self.person_url}/IncluirInscricao", json=payload)
        if not response.is_success:
            raise self._error(response, "SAS enrollment failed")
        data = self._json(response)
        if data is None:
            raise RegistryError("Resposta inválida do SAS", registry=self.name, status_code=response.status_code)
        logger.info("sas_participant_enrolled", cod_evento=cod_evento)
        return data if isinstance(data, dict) else {"result": data}
