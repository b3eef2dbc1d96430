import typing as t

from django.db import models

from common.documents import normalize_cnpj
from common.models import TimeStampedModel


class CompanyQuerySet(models.QuerySet["Company"]):
    def active(self) -> "CompanyQuerySet":
        return self.filter(ativo=True)

    def matching_name(self, name: str) -> "CompanyQuerySet":
        """Companies whose razão social or nome fantasia equals ``name``, ignoring case."""
        return self.filter(models.Q(razao_social__iexact=name) | models.Q(nome_fantasia__iexact=name))


class Company(TimeStampedModel):
    cnpj = models.CharField(max_length=14, unique=True, null=True, blank=True)
    razao_social = models.CharField(max_length=255, db_index=True)
    nome_fantasia = models.CharField(max_length=255, blank=True)
    telefone = models.CharField(max_length=11, blank=True)
    email = models.CharField(max_length=254, blank=True)
    endereco = models.TextField(blank=True)
    ativo = models.BooleanField(default=True)

    objects = CompanyQuerySet.as_manager()

    class Meta:
        ordering = ["razao_social"]
        verbose_name_plural = "companies"

    def __str__(self) -> str:
        return self.nome_fantasia or self.razao_social

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Store the CNPJ as 14 digits, or NULL when missing."""
        self.cnpj = normalize_cnpj(self.cnpj) if self.cnpj else None
        super().save(*args, **kwargs)
