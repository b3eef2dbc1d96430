# src/events/admin/event.py
"""Admin classes for events and companies."""

from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import EventRegistrationInline


@admin.register(models.Event)
class EventAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["nome", "codevento_sas", "status", "modalidade", "data_inicio", "registration_count", "ativo"]
    list_filter = ["status", "modalidade", "ativo", "data_inicio"]
    search_fields = ["nome", "codevento_sas", "local", "unidade"]
    date_hierarchy = "data_inicio"
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [EventRegistrationInline]

    tabs = [
        ("Detalhes", ["Detalhes"]),
        ("SAS", ["SAS"]),
    ]

    fieldsets = [
        (
            "Detalhes",
            {
                "fields": (
                    "id",
                    ("nome", "status", "ativo"),
                    "descricao",
                    ("data_inicio", "data_fim"),
                    ("local", "modalidade"),
                    "endereco",
                    ("capacidade", "meta_participantes"),
                    ("gerente", "coordenador"),
                    "observacoes",
                )
            },
        ),
        (
            "SAS",
            {
                "fields": (
                    ("codevento_sas", "fourevents_id"),
                    ("tipo_evento", "publico_alvo"),
                    ("solucao", "unidade", "tipo_acao"),
                    ("created_at", "updated_at"),
                )
            },
        ),
    ]

    def get_queryset(self, request: HttpRequest) -> QuerySet[models.Event]:
        return super().get_queryset(request).annotate(registration_total=Count("registrations"))

    @admin.display(description="Inscrições", ordering="registration_total")
    def registration_count(self, obj: models.Event) -> int:
        return obj.registration_total  # type: ignore[attr-defined,no-any-return]


@admin.register(models.Company)
class CompanyAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["razao_social", "nome_fantasia", "cnpj", "ativo"]
    list_filter = ["ativo"]
    search_fields = ["razao_social", "nome_fantasia", "cnpj"]
    readonly_fields = ["id", "created_at", "updated_at"]
