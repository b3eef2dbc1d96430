import pytest
from django.utils import timezone

from events.models import CheckIn, Company, Event, Participant, Registration


@pytest.fixture
def other_participant(db: None) -> Participant:
    return Participant.objects.create(
        cpf="11144477735",
        nome="João Pereira",
        email="11144477735@temp.com",
        fonte=Participant.Fonte.IMPORT,
    )


@pytest.fixture
def confirmed_registration(registration: Registration) -> Registration:
    registration.status = Registration.Status.CONFIRMED
    registration.save()
    return registration


@pytest.fixture
def checked_in_registration(confirmed_registration: Registration) -> Registration:
    CheckIn.objects.create(
        registration=confirmed_registration,
        data_check_in=timezone.now(),
        responsavel_credenciamento="Ana Atendente",
    )
    return confirmed_registration


@pytest.fixture
def other_company(db: None) -> Company:
    return Company.objects.create(razao_social="Mercadinho Central")


@pytest.fixture
def inactive_event(event: Event) -> Event:
    event.ativo = False
    event.save()
    return event
