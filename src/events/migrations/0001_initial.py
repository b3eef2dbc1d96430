import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("cnpj", models.CharField(blank=True, max_length=14, null=True, unique=True)),
                ("razao_social", models.CharField(db_index=True, max_length=255)),
                ("nome_fantasia", models.CharField(blank=True, max_length=255)),
                ("telefone", models.CharField(blank=True, max_length=11)),
                ("email", models.CharField(blank=True, max_length=254)),
                ("endereco", models.TextField(blank=True)),
                ("ativo", models.BooleanField(default=True)),
            ],
            options={"ordering": ["razao_social"], "verbose_name_plural": "companies"},
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("nome", models.CharField(db_index=True, max_length=255)),
                ("descricao", models.TextField(blank=True)),
                ("data_inicio", models.DateTimeField(db_index=True)),
                ("data_fim", models.DateTimeField()),
                ("local", models.CharField(blank=True, max_length=255)),
                ("endereco", models.TextField(blank=True)),
                ("capacidade", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "modalidade",
                    models.CharField(
                        choices=[("presencial", "Presencial"), ("online", "Online"), ("hibrido", "Híbrido")],
                        default="presencial",
                        max_length=20,
                    ),
                ),
                ("tipo_evento", models.CharField(blank=True, max_length=100)),
                ("publico_alvo", models.CharField(blank=True, max_length=255)),
                ("gerente", models.CharField(blank=True, max_length=255)),
                ("coordenador", models.CharField(blank=True, max_length=255)),
                ("solucao", models.CharField(blank=True, max_length=255)),
                ("unidade", models.CharField(blank=True, max_length=255)),
                ("tipo_acao", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Rascunho"),
                            ("active", "Ativo"),
                            ("inactive", "Inativo"),
                            ("cancelled", "Cancelado"),
                            ("completed", "Concluído"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("meta_participantes", models.PositiveIntegerField(blank=True, null=True)),
                ("observacoes", models.TextField(blank=True)),
                ("ativo", models.BooleanField(db_index=True, default=True)),
                ("codevento_sas", models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ("fourevents_id", models.CharField(blank=True, max_length=50)),
            ],
            options={"ordering": ["-data_inicio"]},
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("cpf", models.CharField(max_length=11, unique=True)),
                ("nome", models.CharField(db_index=True, max_length=255)),
                ("email", models.CharField(blank=True, max_length=254)),
                ("telefone", models.CharField(blank=True, max_length=11)),
                ("data_nascimento", models.DateField(blank=True, null=True)),
                ("genero", models.CharField(blank=True, max_length=50)),
                ("escolaridade", models.CharField(blank=True, max_length=100)),
                ("profissao", models.CharField(blank=True, max_length=100)),
                ("cargo", models.CharField(blank=True, max_length=100)),
                ("endereco", models.TextField(blank=True)),
                (
                    "fonte",
                    models.CharField(
                        choices=[
                            ("local", "Local"),
                            ("sas", "SAS"),
                            ("cpe", "CPE"),
                            ("4events", "4Events"),
                            ("manual", "Manual"),
                            ("import", "Importação"),
                        ],
                        default="local",
                        max_length=20,
                    ),
                ),
                ("observacoes", models.TextField(blank=True)),
                ("ativo", models.BooleanField(default=True)),
                (
                    "company",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="participants",
                        to="events.company",
                    ),
                ),
            ],
            options={"ordering": ["nome"]},
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("ticket_category", models.CharField(blank=True, max_length=50)),
                ("data_inscricao", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("registered", "Inscrito"),
                            ("confirmed", "Confirmado"),
                            ("checked_in", "Presente"),
                            ("cancelled", "Cancelado"),
                            ("no_show", "Ausente"),
                        ],
                        db_index=True,
                        default="registered",
                        max_length=20,
                    ),
                ),
                ("forma_pagamento", models.CharField(blank=True, max_length=50)),
                ("valor_pago", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("codigo_inscricao", models.CharField(blank=True, max_length=100, null=True, unique=True)),
                ("dados_adicionais", models.JSONField(blank=True, default=dict)),
                ("observacoes", models.TextField(blank=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="registrations", to="events.event"
                    ),
                ),
                (
                    "participant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registrations",
                        to="events.participant",
                    ),
                ),
            ],
            options={"ordering": ["-data_inscricao"]},
        ),
        migrations.AddConstraint(
            model_name="registration",
            constraint=models.UniqueConstraint(fields=("event", "participant"), name="unique_registration_per_event"),
        ),
        migrations.CreateModel(
            name="CheckIn",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("data_check_in", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("responsavel_credenciamento", models.CharField(blank=True, max_length=255)),
                ("observacoes", models.TextField(blank=True)),
                (
                    "registration",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE, related_name="checkin", to="events.registration"
                    ),
                ),
            ],
            options={"ordering": ["-data_check_in"]},
        ),
    ]
