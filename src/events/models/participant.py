import typing as t

from django.core.exceptions import ValidationError
from django.db import models

from common.documents import normalize_cpf, normalize_phone
from common.models import TimeStampedModel

from .company import Company

TEMPORARY_EMAIL_DOMAIN = "@temp.com"


class ParticipantQuerySet(models.QuerySet["Participant"]):
    def active(self) -> t.Self:
        return self.filter(ativo=True)

    def needing_enrichment(self) -> t.Self:
        """Participants with a temporary email, no phone or no company."""
        return self.filter(
            models.Q(email__iendswith=TEMPORARY_EMAIL_DOMAIN)
            | models.Q(email="")
            | models.Q(telefone="")
            | models.Q(company__isnull=True)
        )


class Participant(TimeStampedModel):
    class Fonte(models.TextChoices):
        LOCAL = "local", "Local"
        SAS = "sas", "SAS"
        CPE = "cpe", "CPE"
        FOUR_EVENTS = "4events", "4Events"
        MANUAL = "manual", "Manual"
        IMPORT = "import", "Importação"

    cpf = models.CharField(max_length=11, unique=True)
    nome = models.CharField(max_length=255, db_index=True)
    email = models.CharField(max_length=254, blank=True)
    telefone = models.CharField(max_length=11, blank=True)
    data_nascimento = models.DateField(null=True, blank=True)
    genero = models.CharField(max_length=50, blank=True)
    escolaridade = models.CharField(max_length=100, blank=True)
    profissao = models.CharField(max_length=100, blank=True)
    cargo = models.CharField(max_length=100, blank=True)
    endereco = models.TextField(blank=True)
    fonte = models.CharField(max_length=20, choices=Fonte.choices, default=Fonte.LOCAL)
    company = models.ForeignKey(
        Company, on_delete=models.SET_NULL, null=True, blank=True, related_name="participants"
    )
    observacoes = models.TextField(blank=True)
    ativo = models.BooleanField(default=True)

    objects = ParticipantQuerySet.as_manager()

    class Meta:
        ordering = ["nome"]

    def __str__(self) -> str:
        return f"{self.nome} ({self.cpf})"

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """CPF and phone are stored as digits only."""
        if not self.cpf or not self.cpf.strip():
            raise ValidationError({"cpf": "CPF é obrigatório."})
        self.cpf = normalize_cpf(self.cpf)
        self.telefone = normalize_phone(self.telefone)
        super().save(*args, **kwargs)

    @property
    def has_temporary_email(self) -> bool:
        return not self.email or self.email.lower().endswith(TEMPORARY_EMAIL_DOMAIN)
