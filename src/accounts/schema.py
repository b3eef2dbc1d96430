"""Schema for accounts module."""

import typing as t

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field, model_validator

from accounts.permissions import ALL_PERMISSIONS, has_permission
from common.schema import StrippedString

from .models import AdminUser, Role


class RoleSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = Role
        fields = ["id", "name", "description"]


class AdminUserSchema(ModelSchema):
    id: UUID4
    display_name: str
    role: RoleSchema | None = None
    permissions: list[str] = Field(default_factory=list)

    class Meta:
        model = AdminUser
        fields = ["id", "username", "email", "first_name", "last_name", "is_active", "date_joined"]

    @staticmethod
    def resolve_permissions(obj: AdminUser) -> list[str]:
        return sorted(p for p in ALL_PERMISSIONS if has_permission(obj, p))


class UserCreateSchema(Schema):
    username: StrippedString = Field(..., min_length=1, max_length=150)
    email: str = ""
    first_name: StrippedString = ""
    last_name: StrippedString = ""
    password: str = Field(..., min_length=6)
    role_id: UUID4 | None = None


class UserUpdateSchema(Schema):
    email: str | None = None
    first_name: StrippedString | None = None
    last_name: StrippedString | None = None
    is_active: bool | None = None


class PasswordResetSchema(Schema):
    password1: str = Field(..., min_length=6)
    password2: str

    @model_validator(mode="after")
    def passwords_match(self) -> t.Self:
        """Both passwords must be equal."""
        if self.password1 != self.password2:
            raise ValueError("Passwords do not match.")
        return self


class SetRoleSchema(Schema):
    role_id: UUID4
