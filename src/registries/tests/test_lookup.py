import pytest

from events.models import Event, Participant, Registration
from registries.exceptions import RegistryError
from registries.lookup import ParticipantLookup
from registries.testing import RegistryStub

pytestmark = pytest.mark.django_db

CPF = "11144477735"
SAS_PERSON_URL = "https://sas.test/pessoa/SelecionarPessoaFisica"
CPE_PERSON_URL = "https://cpe.test/api/pessoa-fisica"
FOUR_EVENTS_SEARCH_URL = "https://4events.test/api/attendees/search"
FOUR_EVENTS_CREATE_URL = "https://4events.test/api/attendees/create"


def _sas_person(situacao: int = 1) -> dict[str, object]:
    return {
        "CgcCpf": int(CPF),
        "NomeRazaoSocial": "João Pereira",
        "Situacao": situacao,
        "ListaInformacoesContato": [{"CodComunic": 25, "Numero": "joao@example.com"}],
        "ListaVinculo": [],
    }


@pytest.fixture
def lookup() -> ParticipantLookup:
    return ParticipantLookup()


def test_local_participant_wins(
    lookup: ParticipantLookup, registration: Registration, event: Event, registry_stub: RegistryStub
) -> None:
    result = lookup.resolve("529.982.247-25", event=event)

    assert result is not None
    assert result.source == "local"
    assert result.participant_id == registration.participant_id
    assert result.company is not None
    assert result.company.cnpj == "11444777000161"
    assert result.registration is not None
    assert result.registration.registration_id == registration.id
    assert result.registration.already_checked_in is False
    assert registry_stub.requests == []


def test_local_participant_without_registration(
    lookup: ParticipantLookup, participant: Participant, event: Event
) -> None:
    result = lookup.resolve(participant.cpf, event=event)

    assert result is not None
    assert result.registration is None


def test_active_sas_record_is_mirrored_to_fourevents(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", SAS_PERSON_URL, json=[_sas_person()])
    registry_stub.add("POST", FOUR_EVENTS_CREATE_URL, json={"id": 10})

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "sas"
    assert result.email == "joao@example.com"
    assert len(registry_stub.calls("POST", FOUR_EVENTS_CREATE_URL)) == 1
    assert registry_stub.calls("GET", CPE_PERSON_URL) == []


def test_mirror_failure_does_not_break_the_lookup(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", SAS_PERSON_URL, json=[_sas_person()])
    registry_stub.add("POST", FOUR_EVENTS_CREATE_URL, status_code=500)

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "sas"


def test_cpe_hit(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", CPE_PERSON_URL, json={"cpf": CPF, "nome": "João Pereira", "comunicacoes": []})

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "cpe"
    assert result.nome == "João Pereira"
    assert len(registry_stub.calls("POST", FOUR_EVENTS_CREATE_URL)) == 1


def test_sas_failure_moves_on_to_cpe(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", SAS_PERSON_URL, status_code=500)
    registry_stub.add("GET", CPE_PERSON_URL, json={"cpf": CPF, "nome": "João Pereira"})

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "cpe"


def test_cpe_failure_falls_back_to_inactive_sas_record(
    lookup: ParticipantLookup, registry_stub: RegistryStub
) -> None:
    registry_stub.add("GET", SAS_PERSON_URL, json=[_sas_person(situacao=0)])
    registry_stub.add("GET", CPE_PERSON_URL, status_code=500)

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "sas"
    assert result.situacao == "Inativo"


def test_cpe_failure_without_sas_record_propagates(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    registry_stub.add("GET", CPE_PERSON_URL, status_code=500)

    with pytest.raises(RegistryError):
        lookup.resolve(CPF)


def test_inactive_sas_record_and_cpe_miss_continue_to_fourevents(
    lookup: ParticipantLookup, registry_stub: RegistryStub
) -> None:
    registry_stub.add("GET", SAS_PERSON_URL, json=[_sas_person(situacao=0)])
    registry_stub.add("POST", FOUR_EVENTS_SEARCH_URL, json={"results": [{"attendee_name": "João P."}]})

    result = lookup.resolve(CPF)

    assert result is not None
    assert result.source == "4events"
    assert result.cpf == CPF
    assert result.nome == "João P."


def test_nobody_knows_the_cpf(lookup: ParticipantLookup, registry_stub: RegistryStub) -> None:
    assert lookup.resolve(CPF) is None
    assert len(registry_stub.calls("POST", FOUR_EVENTS_SEARCH_URL)) == 1
