import typing as t
import uuid

from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel


class EventQuerySet(models.QuerySet["Event"]):
    def active(self) -> t.Self:
        """Events not soft-deleted."""
        return self.filter(ativo=True)

    def upcoming(self) -> t.Self:
        return self.filter(data_inicio__gt=timezone.now())

    def by_reference(self, reference: str) -> "Event | None":
        """Find an event by UUID or by its SAS code."""
        try:
            return self.filter(pk=uuid.UUID(str(reference))).first()
        except ValueError:
            return self.filter(codevento_sas=str(reference)).first()


class Event(TimeStampedModel):
    class Modalidade(models.TextChoices):
        PRESENCIAL = "presencial", "Presencial"
        ONLINE = "online", "Online"
        HIBRIDO = "hibrido", "Híbrido"

    class Status(models.TextChoices):
        DRAFT = "draft", "Rascunho"
        ACTIVE = "active", "Ativo"
        INACTIVE = "inactive", "Inativo"
        CANCELLED = "cancelled", "Cancelado"
        COMPLETED = "completed", "Concluído"

    nome = models.CharField(max_length=255, db_index=True)
    descricao = models.TextField(blank=True)
    data_inicio = models.DateTimeField(db_index=True)
    data_fim = models.DateTimeField()
    local = models.CharField(max_length=255, blank=True)
    endereco = models.TextField(blank=True)
    capacidade = models.PositiveIntegerField(null=True, blank=True)
    modalidade = models.CharField(max_length=20, choices=Modalidade.choices, default=Modalidade.PRESENCIAL)
    tipo_evento = models.CharField(max_length=100, blank=True)
    publico_alvo = models.CharField(max_length=255, blank=True)
    gerente = models.CharField(max_length=255, blank=True)
    coordenador = models.CharField(max_length=255, blank=True)
    solucao = models.CharField(max_length=255, blank=True)
    unidade = models.CharField(max_length=255, blank=True)
    tipo_acao = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    meta_participantes = models.PositiveIntegerField(null=True, blank=True)
    observacoes = models.TextField(blank=True)
    ativo = models.BooleanField(default=True, db_index=True)
    codevento_sas = models.CharField(max_length=50, unique=True, null=True, blank=True)
    fourevents_id = models.CharField(max_length=50, blank=True)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["-data_inicio"]

    def __str__(self) -> str:
        return self.nome

    def clean(self) -> None:
        if not self.codevento_sas:
            self.codevento_sas = None
