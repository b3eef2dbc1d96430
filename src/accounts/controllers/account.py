"""Controllers for the authenticated user and for user/role management."""

import typing as t
from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route, status

from accounts import permissions, schema
from accounts.models import AdminUser, Role
from accounts.service import users as users_service
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import WriteThrottle


@api_controller("/account", tags=["Account"], auth=StructlogJWTAuth())
class AccountController(UserAwareController):
    @route.get("/me", response=schema.AdminUserSchema, url_name="me")
    def me(self) -> AdminUser:
        """Retrieve the authenticated user with their role and effective permissions.

        Use the permission list to decide which admin screens to expose.
        """
        return self.user()

    @route.get("/roles", response=list[schema.RoleSchema], url_name="list_roles")
    def list_roles(self) -> list[Role]:
        """List the available roles."""
        return list(Role.objects.all())


@api_controller(
    "/admin/users",
    tags=["Admin Users"],
    auth=StructlogJWTAuth(),
    permissions=[permissions.HasRole(Role.Name.ADMIN, Role.Name.MANAGER)],
)
class UserAdminController(UserAwareController):
    @route.get("/", response=list[schema.AdminUserSchema], url_name="list_users")
    def list_users(self) -> t.Any:
        """List back-office users ordered by username."""
        return AdminUser.objects.select_related("role").all()

    @route.post(
        "/", response={201: schema.AdminUserSchema}, url_name="create_user", throttle=WriteThrottle()
    )
    def create_user(self, payload: schema.UserCreateSchema) -> tuple[int, AdminUser]:
        """Create a user. Passwords need at least 6 characters."""
        return status.HTTP_201_CREATED, users_service.create_user(payload)

    @route.get("/{user_id}", response=schema.AdminUserSchema, url_name="get_user")
    def get_user(self, user_id: UUID) -> AdminUser:
        return get_object_or_404(AdminUser.objects.select_related("role"), pk=user_id)

    @route.patch("/{user_id}", response=schema.AdminUserSchema, url_name="update_user")
    def update_user(self, user_id: UUID, payload: schema.UserUpdateSchema) -> AdminUser:
        """Update the provided fields of a user."""
        user = get_object_or_404(AdminUser, pk=user_id)
        return users_service.update_user(user, payload)

    @route.delete("/{user_id}", response={204: None}, url_name="delete_user")
    def delete_user(self, user_id: UUID) -> tuple[int, None]:
        """Delete a user. You cannot delete yourself."""
        users_service.delete_user(self.user(), user_id)
        return status.HTTP_204_NO_CONTENT, None

    @route.post("/{user_id}/reset-password", response=ResponseMessage, url_name="reset_user_password")
    def reset_password(self, user_id: UUID, payload: schema.PasswordResetSchema) -> ResponseMessage:
        """Set a new password for a user."""
        user = get_object_or_404(AdminUser, pk=user_id)
        users_service.reset_password(user, payload.password1)
        return ResponseMessage(message="Senha redefinida com sucesso.")

    @route.put(
        "/{user_id}/role",
        response=schema.AdminUserSchema,
        url_name="set_user_role",
        permissions=[permissions.HasRole(Role.Name.ADMIN)],
    )
    def set_single_role(self, user_id: UUID, payload: schema.SetRoleSchema) -> AdminUser:
        """Give the user exactly one role, replacing any previous one. Administrators only."""
        return users_service.set_single_role(user_id, payload.role_id)
