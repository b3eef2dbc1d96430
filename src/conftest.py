"""Project-wide fixtures: the registry HTTP stub, back-office users with roles and their API clients."""

import secrets
import string
import typing as t
from datetime import datetime, timedelta

import faker
import httpx
import pytest
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import AdminUser, Role
from events.models import Company, Event, Participant, Registration
from registries.base import RegistryClient
from registries.testing import RegistryStub


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits of the custom throttles to allow testing."""
    monkeypatch.setattr("common.throttling.AuthThrottle.rate", "1000/min")
    monkeypatch.setattr("common.throttling.LookupThrottle.rate", "1000/min")
    monkeypatch.setattr("common.throttling.WriteThrottle.rate", "1000/min")
    monkeypatch.setattr("common.throttling.WebhookThrottle.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def registry_settings(settings: t.Any) -> None:
    """Point every registry client at predictable test URLs."""
    settings.SAS_BASE_URL = "https://sas.test/api"
    settings.SAS_PERSON_URL = "https://sas.test/pessoa"
    settings.SAS_API_KEY = "sas-key"
    settings.CPE_AUTH_URL = "https://cpe.test/oauth/token"
    settings.CPE_BASE_URL = "https://cpe.test/api"
    settings.CPE_CLIENT_ID = "cpe-client"
    settings.CPE_CLIENT_SECRET = "cpe-secret"
    settings.FOUR_EVENTS_BASE_URL = "https://4events.test/api"
    settings.FOUR_EVENTS_TOKEN = "4events-token"
    settings.LOOKUP_FALLBACK_URL = "https://inscricoes.test"
    settings.WORKFLOW_WEBHOOK_SECRET = "webhook-secret"


@pytest.fixture(autouse=True)
def clear_cache() -> t.Iterator[None]:
    """Throttle buckets and the CPE token live in the cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def registry_stub(monkeypatch: MonkeyPatch) -> RegistryStub:
    """Every registry client talks to this stub instead of the network."""
    stub = RegistryStub()
    monkeypatch.setattr(RegistryClient, "transport", httpx.MockTransport(stub))
    return stub


@pytest.fixture
def role_admin(db: None) -> Role:
    return Role.objects.get_or_create(name=Role.Name.ADMIN)[0]


@pytest.fixture
def role_manager(db: None) -> Role:
    return Role.objects.get_or_create(name=Role.Name.MANAGER)[0]


@pytest.fixture
def role_operator(db: None) -> Role:
    return Role.objects.get_or_create(name=Role.Name.OPERATOR)[0]


class AdminUserFactory:
    """Factory for creating AdminUser instances for testing."""

    fake = faker.Faker("pt_BR")

    def create_user(self, **kwargs: t.Any) -> AdminUser:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)))
        email = kwargs.pop("email", f"{username}@credenciamento.test")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return AdminUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> AdminUser:
        return self.create_user(**kwargs)


@pytest.fixture
def admin_user_factory() -> AdminUserFactory:
    return AdminUserFactory()


@pytest.fixture
def admin_role_user(admin_user_factory: AdminUserFactory, role_admin: Role) -> AdminUser:
    return admin_user_factory(username="administrador", role=role_admin)


@pytest.fixture
def manager_user(admin_user_factory: AdminUserFactory, role_manager: Role) -> AdminUser:
    return admin_user_factory(username="gerente", role=role_manager)


@pytest.fixture
def operator_user(admin_user_factory: AdminUserFactory, role_operator: Role) -> AdminUser:
    return admin_user_factory(username="operador", first_name="Ana", last_name="Atendente", role=role_operator)


@pytest.fixture
def no_role_user(admin_user_factory: AdminUserFactory) -> AdminUser:
    return admin_user_factory(username="semperfil")


def _client_for(user: AdminUser) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def admin_role_client(admin_role_user: AdminUser) -> Client:
    """API client for an administrator."""
    return _client_for(admin_role_user)


@pytest.fixture
def manager_client(manager_user: AdminUser) -> Client:
    """API client for a manager."""
    return _client_for(manager_user)


@pytest.fixture
def operator_client(operator_user: AdminUser) -> Client:
    """API client for an attendant."""
    return _client_for(operator_user)


@pytest.fixture
def no_role_client(no_role_user: AdminUser) -> Client:
    """API client for an authenticated user without any role."""
    return _client_for(no_role_user)


@pytest.fixture
def next_week() -> datetime:
    return timezone.now() + timedelta(days=7)


@pytest.fixture
def company(db: None) -> Company:
    return Company.objects.create(cnpj="11444777000161", razao_social="Padaria Boa LTDA", nome_fantasia="Padaria Boa")


@pytest.fixture
def event(db: None, next_week: datetime) -> Event:
    return Event.objects.create(
        nome="Feira do Empreendedor",
        data_inicio=next_week,
        data_fim=next_week + timedelta(hours=8),
        local="Boa Vista",
        status=Event.Status.ACTIVE,
    )


@pytest.fixture
def sas_event(db: None, next_week: datetime) -> Event:
    """An event mirrored from SAS, with code 12345."""
    return Event.objects.create(
        nome="Oficina de Vendas",
        data_inicio=next_week,
        data_fim=next_week + timedelta(hours=4),
        status=Event.Status.ACTIVE,
        codevento_sas="12345",
        fourevents_id="77",
    )


@pytest.fixture
def participant(company: Company) -> Participant:
    return Participant.objects.create(
        cpf="52998224725",
        nome="Maria da Silva",
        email="maria@example.com",
        telefone="95991234567",
        cargo="Dona",
        company=company,
        fonte=Participant.Fonte.MANUAL,
    )


@pytest.fixture
def registration(event: Event, participant: Participant) -> Registration:
    return Registration.objects.create(event=event, participant=participant)
