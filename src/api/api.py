from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.account import AccountController, UserAdminController
from accounts.controllers.auth import AuthController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers.bulk import ParticipantBulkController
from events.controllers.checkin import CheckinController
from events.controllers.dashboard import DashboardController
from events.controllers.event_admin import EventAdminController
from events.controllers.participant_admin import ParticipantAdminController
from events.controllers.webhooks import WorkflowWebhookController
from events.exceptions import EventNotFound, ParticipantNotFound
from registries.exceptions import RegistryAuthError, RegistryError, RegistryNotFound

from .exception_handlers import (
    handle_django_validation_error,
    handle_event_not_found,
    handle_general_exception,
    handle_participant_not_found,
    handle_registry_auth_error,
    handle_registry_error,
    handle_registry_not_found,
)

api = NinjaExtraAPI(
    title="Credenciamento API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Credenciamento API {settings.VERSION}",
    app_name=f"credenciamento-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION, demo=settings.DEMO_MODE)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Account controllers
    AuthController,
    AccountController,
    UserAdminController,
    # Check-in controllers
    CheckinController,
    # Admin controllers
    DashboardController,
    EventAdminController,
    ParticipantBulkController,
    ParticipantAdminController,
    # Webhooks
    WorkflowWebhookController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    ParticipantNotFound: handle_participant_not_found,
    EventNotFound: handle_event_not_found,
    RegistryError: handle_registry_error,
    RegistryNotFound: handle_registry_not_found,
    RegistryAuthError: handle_registry_auth_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
