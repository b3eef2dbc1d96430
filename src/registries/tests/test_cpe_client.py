import httpx
import pytest
from django.core.cache import cache

from registries.cpe import TOKEN_CACHE_KEY, CPEClient
from registries.exceptions import RegistryAuthError, RegistryError, RegistryNotFound
from registries.testing import CPE_TOKEN_URL, RegistryStub

PERSON_URL = "https://cpe.test/api/pessoa-fisica"
COMPANY_URL = "https://cpe.test/api/pessoa-juridica"

CPE_PERSON = {
    "cpf": "11144477735",
    "nome": "João Pereira",
    "comunicacoes": [
        {"tipoComunicacao": {"id": 25}, "comunicacao": "joao@example.com"},
        {"tipoComunicacao": {"id": 5}, "comunicacao": "(95) 98888-7777"},
    ],
}


@pytest.fixture
def cpe() -> CPEClient:
    return CPEClient()


class TestToken:
    def test_token_is_cached(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        assert cpe.get_token() == "cpe-token"
        assert cpe.get_token() == "cpe-token"

        assert len(registry_stub.calls("POST", CPE_TOKEN_URL)) == 1
        assert cache.get(TOKEN_CACHE_KEY) == "cpe-token"

    def test_sends_client_credentials(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        cpe.get_token()

        body = registry_stub.calls("POST", CPE_TOKEN_URL)[0].content.decode()
        assert "grant_type=client_credentials" in body
        assert "client_id=cpe-client" in body

    def test_refused_credentials(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        registry_stub.add("POST", CPE_TOKEN_URL, status_code=401, json={"error": "invalid_client"})

        with pytest.raises(RegistryAuthError):
            cpe.get_token()

        assert cache.get(TOKEN_CACHE_KEY) is None

    def test_unreachable_token_endpoint(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        registry_stub.add_handler("POST", CPE_TOKEN_URL, handler)

        with pytest.raises(RegistryAuthError):
            cpe.get_token()

    def test_rejected_token_is_dropped(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        registry_stub.add("GET", PERSON_URL, status_code=401)

        with pytest.raises(RegistryAuthError):
            cpe.find_person("11144477735")

        assert cache.get(TOKEN_CACHE_KEY) is None


class TestFindPerson:
    def test_found(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        registry_stub.add("GET", PERSON_URL, json=[CPE_PERSON])

        record = cpe.find_person("111.444.777-35")

        assert record == CPE_PERSON
        request = registry_stub.calls("GET", PERSON_URL)[0]
        assert request.headers["Authorization"] == "Bearer cpe-token"
        assert request.url.params["cpf"] == "11144477735"

    def test_not_found(self, cpe: CPEClient) -> None:
        assert cpe.find_person("11144477735") is None

    def test_server_error(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        registry_stub.add("GET", PERSON_URL, status_code=503)

        with pytest.raises(RegistryError):
            cpe.find_person("11144477735")

    def test_person_to_result(self) -> None:
        result = CPEClient.person_to_result(CPE_PERSON)

        assert result.source == "cpe"
        assert result.nome == "João Pereira"
        assert result.email == "joao@example.com"
        assert result.telefone == "95988887777"


class TestFindCompany:
    @pytest.mark.parametrize(
        "body",
        [
            [{"cnpj": "11.444.777/0001-61", "razaoSocial": "Padaria Boa LTDA", "nomeFantasia": "Padaria Boa"}],
            {"cnpj": "11444777000161", "razaoSocial": "Padaria Boa LTDA", "nomeFantasia": "Padaria Boa"},
        ],
    )
    def test_list_or_object(self, cpe: CPEClient, registry_stub: RegistryStub, body: object) -> None:
        registry_stub.add("GET", COMPANY_URL, json=body)

        company = cpe.find_company("11444777000161")

        assert company.cnpj == "11444777000161"
        assert company.razao_social == "Padaria Boa LTDA"
        assert company.nome_fantasia == "Padaria Boa"

    def test_not_found(self, cpe: CPEClient) -> None:
        with pytest.raises(RegistryNotFound):
            cpe.find_company("11444777000161")

    def test_empty_answer_is_not_found(self, cpe: CPEClient, registry_stub: RegistryStub) -> None:
        registry_stub.add("GET", COMPANY_URL, json=[])

        with pytest.raises(RegistryNotFound):
            cpe.find_company("11444777000161")
