from django.apps import AppConfig


class RegistriesConfig(AppConfig):
    """External person/event registries: SAS, CPE and 4Events."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "registries"
