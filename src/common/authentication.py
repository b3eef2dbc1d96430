import typing as t

import structlog
from django.http import HttpRequest
from ninja_jwt.authentication import JWTAuth


class StructlogJWTAuth(JWTAuth):
    """JWT authentication that binds the authenticated user to the log context.

    Usage:
        @api_controller("/admin/events", auth=StructlogJWTAuth())
        class EventAdminController:
            ...
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and bind ``user_id`` and ``role`` for structlog."""
        user = super().authenticate(request, token)
        if user:
            structlog.contextvars.bind_contextvars(
                user_id=str(user.id),
                role=getattr(getattr(user, "role", None), "name", None),
            )
        return user
