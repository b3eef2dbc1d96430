"""Role based permissions.

Roles map to a fixed set of permission strings. Administrators and Django
superusers hold every permission.
"""

import typing as t

from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.models import Role

MANAGE_USERS = "manage_users"
VIEW_USERS = "view_users"
MANAGE_EVENTS = "manage_events"
VIEW_EVENTS = "view_events"
EXPORT_EVENTS = "export_events"
MANAGE_PARTICIPANTS = "manage_participants"
VIEW_PARTICIPANTS = "view_participants"
EXPORT_PARTICIPANTS = "export_participants"
VIEW_REPORTS = "view_reports"
EXPORT_REPORTS = "export_reports"
VIEW_LOGS = "view_logs"
MANAGE_SETTINGS = "manage_settings"

ALL_PERMISSIONS: frozenset[str] = frozenset(
    {
        MANAGE_USERS,
        VIEW_USERS,
        MANAGE_EVENTS,
        VIEW_EVENTS,
        EXPORT_EVENTS,
        MANAGE_PARTICIPANTS,
        VIEW_PARTICIPANTS,
        EXPORT_PARTICIPANTS,
        VIEW_REPORTS,
        EXPORT_REPORTS,
        VIEW_LOGS,
        MANAGE_SETTINGS,
    }
)

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    Role.Name.ADMIN: ALL_PERMISSIONS,
    Role.Name.MANAGER: frozenset(
        {
            VIEW_USERS,
            MANAGE_EVENTS,
            VIEW_EVENTS,
            EXPORT_EVENTS,
            MANAGE_PARTICIPANTS,
            VIEW_PARTICIPANTS,
            EXPORT_PARTICIPANTS,
            VIEW_REPORTS,
            EXPORT_REPORTS,
        }
    ),
    Role.Name.OPERATOR: frozenset({VIEW_EVENTS, MANAGE_PARTICIPANTS, VIEW_PARTICIPANTS, VIEW_REPORTS}),
}


def _role_name(user: t.Any) -> str | None:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return t.cast(str | None, getattr(user, "role_name", None))


def has_permission(user: t.Any, permission: str) -> bool:
    """Whether the user's role grants the permission."""
    role = _role_name(user)
    if role is None:
        return False
    if role == Role.Name.ADMIN:
        return True
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def has_any_permission(user: t.Any, permissions: t.Iterable[str]) -> bool:
    return any(has_permission(user, p) for p in permissions)


def has_all_permissions(user: t.Any, permissions: t.Iterable[str]) -> bool:
    return all(has_permission(user, p) for p in permissions)


class HasPermission(BasePermission):
    """ninja-extra permission requiring any of the given permission strings.

    Usage:
        @api_controller("/admin/users", auth=StructlogJWTAuth(), permissions=[HasPermission(MANAGE_USERS)])
    """

    message = "Você não tem permissão para executar esta ação."

    def __init__(self, *permissions: str) -> None:
        """Store the accepted permissions."""
        self.permissions = permissions

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        return has_any_permission(request.user, self.permissions)


class HasRole(BasePermission):
    """ninja-extra permission requiring one of the given role names."""

    message = "Acesso restrito ao seu perfil."

    def __init__(self, *roles: str) -> None:
        """Store the accepted roles."""
        self.roles = roles

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        return _role_name(request.user) in self.roles
