import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from common.models import TimeStampedModel


class Role(TimeStampedModel):
    class Name(models.TextChoices):
        ADMIN = "admin", "Administrador"
        MANAGER = "manager", "Gerente"
        OPERATOR = "operator", "Operador"

    name = models.CharField(max_length=20, choices=Name.choices, unique=True)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class AdminUserQueryset(models.QuerySet["AdminUser"]):
    """Queryset for AdminUser."""

    def with_role(self, *names: str) -> t.Self:
        """Users holding any of the given role names."""
        return self.filter(role__name__in=names)


class AdminUserManager(UserManager["AdminUser"]):
    def get_queryset(self) -> AdminUserQueryset:
        """Get queryset for AdminUser."""
        return AdminUserQueryset(self.model, using=self._db)


class AdminUser(AbstractUser):
    """Back-office user. Attendants, managers and administrators are all AdminUsers.

    A user holds at most one role; changing it replaces the previous one.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.ForeignKey(Role, on_delete=models.SET_NULL, null=True, blank=True, related_name="users")

    objects = AdminUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def role_name(self) -> str | None:
        """Name of the user's role, ``admin`` for superusers without one."""
        if self.role_id:
            return t.cast(Role, self.role).name
        if self.is_superuser:
            return Role.Name.ADMIN
        return None

    @property
    def display_name(self) -> str:
        """Full name, or the username as a fallback."""
        return self.get_full_name() or self.username
