import typing as t

from django.contrib.auth.models import AnonymousUser
from ninja_extra import ControllerBase

from accounts.models import AdminUser


class UserAwareController(ControllerBase):
    def maybe_user(self) -> AdminUser | AnonymousUser:
        """Get the user for this request."""
        return t.cast(AdminUser | AnonymousUser, self.context.request.user)  # type: ignore[union-attr]

    def user(self) -> AdminUser:
        """Get the user for this request."""
        return t.cast(AdminUser, self.context.request.user)  # type: ignore[union-attr]

    def attendant_name(self) -> str:
        """Name recorded on check-ins made by the current user."""
        user = self.user()
        return user.get_full_name() or user.username
