"""Client for CPE, the people and companies registry (registry B).

Authenticates with OAuth2 client credentials. The access token is kept in the
Django cache until shortly before it expires.
"""

import typing as t

import httpx
import structlog
from django.conf import settings
from django.core.cache import cache

from common.documents import normalize_cnpj, normalize_cpf, only_digits

from .base import RegistryClient
from .exceptions import RegistryAuthError, RegistryError, RegistryNotFound
from .schema import CompanyData, LookupResult

logger = structlog.get_logger(__name__)

TOKEN_CACHE_KEY = "registries:cpe:access_token"
TOKEN_SAFETY_MARGIN_SECONDS = 60
EMAIL_COMMUNICATION_TYPE = 25
PHONE_COMMUNICATION_TYPE = 5


class CPEClient(RegistryClient):
    name = "cpe"

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self.auth_url = settings.CPE_AUTH_URL
        self.base_url = settings.CPE_BASE_URL.rstrip("/")
        super().__init__(transport=transport)

    def get_token(self) -> str:
        """Return a valid access token, requesting a new one when the cached one is gone.

        Raises:
            RegistryAuthError: the token endpoint is unreachable or refuses the credentials.
        """
        token = cache.get(TOKEN_CACHE_KEY)
        if token:
            return t.cast(str, token)

        logger.info("cpe_token_requested")
        try:
            response = self._request(
                "POST",
                self.auth_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": settings.CPE_CLIENT_ID,
                    "client_secret": settings.CPE_CLIENT_SECRET,
                },
            )
        except RegistryError as e:
            raise RegistryAuthError(str(e), registry=self.name) from e
        data = self._json(response)
        if not response.is_success or not isinstance(data, dict) or not data.get("access_token"):
            logger.warning("cpe_token_refused", status=response.status_code)
            raise RegistryAuthError(
                "Falha ao obter o token de acesso da CPE.", registry=self.name, status_code=response.status_code
            )

        expires_in = int(data.get("expires_in") or settings.CPE_TOKEN_DEFAULT_TTL)
        cache.set(TOKEN_CACHE_KEY, data["access_token"], timeout=max(expires_in - TOKEN_SAFETY_MARGIN_SECONDS, 1))
        return t.cast(str, data["access_token"])

    def _authorized_get(self, path: str, params: dict[str, str]) -> httpx.Response:
        response = self._request(
            "GET", f"{self.base_url}/{path}", params=params, headers={"Authorization": f"Bearer {self.get_token()}"}
        )
        if response.status_code == 401:
            cache.delete(TOKEN_CACHE_KEY)
            raise RegistryAuthError("Token da CPE recusado.", registry=self.name, status_code=401)
        return response

    def find_person(self, cpf: str) -> dict[str, t.Any] | None:
        """Fetch a person by CPF; ``None`` on 404.

        Raises:
            RegistryError: any other failure.
        """
        response = self._authorized_get("pessoa-fisica", {"cpf": only_digits(cpf)})
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise self._error(response, "CPE person lookup failed")
        data = self._json(response)
        if isinstance(data, list):
            data = data[0] if data else None
        if data is not None and not isinstance(data, dict):
            raise RegistryError("Resposta inválida da CPE", registry=self.name)
        return data

    @staticmethod
    def person_to_result(record: dict[str, t.Any], cpf: str | None = None) -> LookupResult:
        communications = record.get("comunicacoes") or []

        def _by_type(type_id: int) -> str:
            for item in communications:
                if (item.get("tipoComunicacao") or {}).get("id") == type_id:
                    return str(item.get("comunicacao") or "")
            return ""

        return LookupResult(
            source="cpe",
            cpf=normalize_cpf(record.get("cpf") or cpf),
            nome=record.get("nome") or "",
            email=_by_type(EMAIL_COMMUNICATION_TYPE),
            telefone=only_digits(_by_type(PHONE_COMMUNICATION_TYPE)),
            raw_data=record,
        )

    def find_company(self, cnpj: str) -> CompanyData:
        """Fetch a company by CNPJ. The API answers with either a list or a single object.

        Raises:
            RegistryNotFound: 404 or an empty answer.
            RegistryError: any other failure.
        """
        response = self._authorized_get("pessoa-juridica", {"cnpj": only_digits(cnpj)})
        if response.status_code == 404:
            raise RegistryNotFound("CNPJ não encontrado na base da Receita.", registry=self.name, status_code=404)
        if not response.is_success:
            raise self._error(response, "Erro ao consultar a API de empresas")
        data = self._json(response)
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict) or not data.get("cnpj"):
            raise RegistryNotFound("CNPJ não encontrado na base da Receita.", registry=self.name)
        return CompanyData(
            cnpj=normalize_cnpj(data["cnpj"]),
            razao_social=data.get("razaoSocial") or "",
            nome_fantasia=data.get("nomeFantasia") or "",
        )
