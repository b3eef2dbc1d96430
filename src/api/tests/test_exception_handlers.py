"""Tests for the API exception handlers."""

import orjson
import pytest
from django.core.exceptions import ValidationError
from django.test import RequestFactory

from api import exception_handlers
from events.exceptions import EventNotFound, ParticipantNotFound
from registries.exceptions import RegistryAuthError, RegistryError, RegistryNotFound


@pytest.fixture
def request_factory() -> RequestFactory:
    return RequestFactory()


def test_obfuscate_hides_sensitive_keys() -> None:
    data = {"Authorization": "Bearer abc", "cpf": "52998224725", "page": "1"}

    result = exception_handlers.obfuscate(data)

    assert result == {"Authorization": "********", "cpf": "********", "page": "1"}
    assert data["cpf"] == "52998224725"


def test_general_exception_returns_500(request_factory: RequestFactory) -> None:
    request = request_factory.get("/api/boom", {"token": "secret"})

    response = exception_handlers.handle_general_exception(request, RuntimeError("boom"))

    assert response.status_code == 500
    assert orjson.loads(response.content)["detail"] == "Internal Server Error."


def test_django_validation_error_with_fields(request_factory: RequestFactory) -> None:
    request = request_factory.post("/api/events")
    exc = ValidationError({"cpf": ["CPF inválido."]})

    response = exception_handlers.handle_django_validation_error(request, exc)

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"errors": {"cpf": ["CPF inválido."]}}


def test_django_validation_error_without_fields(request_factory: RequestFactory) -> None:
    request = request_factory.post("/api/events")

    response = exception_handlers.handle_django_validation_error(request, ValidationError("Algo deu errado."))

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"errors": {"__all__": ["Algo deu errado."]}}


def test_participant_not_found_carries_fallback_url(request_factory: RequestFactory) -> None:
    request = request_factory.get("/api/checkin/search")
    exc = ParticipantNotFound("52998224725", fallback_url="https://inscricoes.test")

    response = exception_handlers.handle_participant_not_found(request, exc)

    assert response.status_code == 404
    assert orjson.loads(response.content)["fallback_url"] == "https://inscricoes.test"


def test_event_not_found(request_factory: RequestFactory) -> None:
    response = exception_handlers.handle_event_not_found(request_factory.get("/"), EventNotFound("nope"))

    assert response.status_code == 404
    assert orjson.loads(response.content) == {"detail": "Evento não encontrado: nope"}


def test_registry_errors(request_factory: RequestFactory) -> None:
    request = request_factory.get("/")

    not_found = exception_handlers.handle_registry_not_found(request, RegistryNotFound("sem registro", registry="sas"))
    failed = exception_handlers.handle_registry_error(request, RegistryError("fora do ar", registry="cpe"))
    auth = exception_handlers.handle_registry_auth_error(request, RegistryAuthError("client secret", registry="cpe"))

    assert not_found.status_code == 404
    assert orjson.loads(not_found.content) == {"detail": "sem registro", "registry": "sas"}
    assert failed.status_code == 502
    assert orjson.loads(failed.content)["registry"] == "cpe"
    assert auth.status_code == 502
    assert "client secret" not in orjson.loads(auth.content)["detail"]
