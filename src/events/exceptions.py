class EventNotFound(Exception):
    """No active event matches the given id or SAS code."""

    def __init__(self, reference: str | None = None) -> None:
        super().__init__(f"Evento não encontrado: {reference}" if reference else "Evento não encontrado.")
        self.reference = reference


class ParticipantNotFound(Exception):
    """The CPF is unknown locally and to every external registry.

    Attributes:
        fallback_url: Where the attendant can send the person to register.
    """

    def __init__(self, cpf: str, fallback_url: str | None = None) -> None:
        super().__init__("Participante não encontrado.")
        self.cpf = cpf
        self.fallback_url = fallback_url
