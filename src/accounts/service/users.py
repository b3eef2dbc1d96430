import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.models import AdminUser, Role

logger = structlog.get_logger(__name__)


def create_user(payload: schema.UserCreateSchema) -> AdminUser:
    """Create a back-office user, optionally with a role.

    Raises:
        HttpError: 400 if the username is already taken.
    """
    if AdminUser.objects.filter(username__iexact=payload.username).exists():
        raise HttpError(400, str(_("A user with this username already exists.")))
    role = get_object_or_404(Role, pk=payload.role_id) if payload.role_id else None
    user = AdminUser.objects.create_user(
        username=payload.username,
        email=payload.email or "",
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=role,
    )
    logger.info("admin_user_created", user_id=str(user.id), role=role.name if role else None)
    return user


def update_user(user: AdminUser, payload: schema.UserUpdateSchema) -> AdminUser:
    """Apply the provided fields to the user."""
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in data.items():
        setattr(user, key, value)
    if data:
        user.save(update_fields=list(data.keys()))
    return user


def delete_user(acting_user: AdminUser, user_id: UUID) -> None:
    """Delete a user. Nobody can delete themselves.

    Raises:
        HttpError: 400 when deleting oneself.
    """
    if acting_user.id == user_id:
        raise HttpError(400, str(_("You cannot delete your own user.")))
    user = get_object_or_404(AdminUser, pk=user_id)
    user.delete()
    logger.info("admin_user_deleted", deleted_user_id=str(user_id))


def reset_password(user: AdminUser, new_password: str) -> AdminUser:
    """Set a new password for the user."""
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("admin_user_password_reset", target_user_id=str(user.id))
    return user


@transaction.atomic
def set_single_role(user_id: UUID, role_id: UUID) -> AdminUser:
    """Replace whatever role the user had with the given one."""
    user = get_object_or_404(AdminUser.objects.select_for_update(), pk=user_id)
    role = get_object_or_404(Role, pk=role_id)
    previous = t.cast(Role | None, user.role)
    user.role = role
    user.save(update_fields=["role"])
    logger.info(
        "admin_user_role_set",
        target_user_id=str(user.id),
        previous_role=previous.name if previous else None,
        role=role.name,
    )
    return user
