import typing as t

from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel

from .event import Event
from .participant import Participant


class RegistrationQuerySet(models.QuerySet["Registration"]):
    def confirmed(self) -> t.Self:
        return self.filter(status=Registration.Status.CONFIRMED)

    def with_details(self) -> t.Self:
        return self.select_related("event", "participant", "participant__company", "checkin")


class Registration(TimeStampedModel):
    class Status(models.TextChoices):
        REGISTERED = "registered", "Inscrito"
        CONFIRMED = "confirmed", "Confirmado"
        CHECKED_IN = "checked_in", "Presente"
        CANCELLED = "cancelled", "Cancelado"
        NO_SHOW = "no_show", "Ausente"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    participant = models.ForeignKey(Participant, on_delete=models.CASCADE, related_name="registrations")
    ticket_category = models.CharField(max_length=50, blank=True)
    data_inscricao = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.REGISTERED, db_index=True)
    forma_pagamento = models.CharField(max_length=50, blank=True)
    valor_pago = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    codigo_inscricao = models.CharField(max_length=100, unique=True, null=True, blank=True)
    dados_adicionais = models.JSONField(default=dict, blank=True)
    observacoes = models.TextField(blank=True)

    objects = RegistrationQuerySet.as_manager()

    class Meta:
        ordering = ["-data_inscricao"]
        constraints = [
            models.UniqueConstraint(fields=["event", "participant"], name="unique_registration_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.participant_id} @ {self.event_id} ({self.status})"

    def clean(self) -> None:
        if not self.codigo_inscricao:
            self.codigo_inscricao = None


class CheckIn(TimeStampedModel):
    registration = models.OneToOneField(Registration, on_delete=models.CASCADE, related_name="checkin")
    data_check_in = models.DateTimeField(default=timezone.now, db_index=True)
    responsavel_credenciamento = models.CharField(max_length=255, blank=True)
    observacoes = models.TextField(blank=True)

    class Meta:
        ordering = ["-data_check_in"]

    def __str__(self) -> str:
        return f"Check-in {self.registration_id} at {self.data_check_in:%Y-%m-%d %H:%M}"
