# Manual migration to seed the three back-office roles
from django.db import migrations

ROLES = [
    ("admin", "Acesso total ao sistema"),
    ("manager", "Gerencia eventos, participantes e relatórios"),
    ("operator", "Realiza o credenciamento de participantes"),
]


def create_roles(apps, schema_editor):
    """Create the admin, manager and operator roles if missing."""
    Role = apps.get_model("accounts", "Role")
    for name, description in ROLES:
        Role.objects.get_or_create(name=name, defaults={"description": description})


def remove_roles(apps, schema_editor):
    """Remove the seeded roles."""
    Role = apps.get_model("accounts", "Role")
    Role.objects.filter(name__in=[name for name, _ in ROLES]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_roles, remove_roles),
    ]
