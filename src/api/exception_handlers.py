"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import EventNotFound, ParticipantNotFound
from registries.exceptions import RegistryAuthError, RegistryError, RegistryNotFound

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        exc_info=True,
        method=request.method,
        path=request.path,
        GET=obfuscate(request.GET.dict()),
        headers=obfuscate(dict(request.headers)),
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("VALIDATION_ERROR", path=request.path, error=str(exc))
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_participant_not_found(
    request: HttpRequest, exc: ParticipantNotFound | t.Type[ParticipantNotFound]
) -> Response:
    """Nobody knows the CPF: point the attendant to the registration page."""
    return Response(status=404, data={"detail": str(exc), "fallback_url": getattr(exc, "fallback_url", None)})


def handle_event_not_found(request: HttpRequest, exc: EventNotFound | t.Type[EventNotFound]) -> Response:
    return Response(status=404, data={"detail": str(exc)})


def handle_registry_not_found(request: HttpRequest, exc: RegistryNotFound | t.Type[RegistryNotFound]) -> Response:
    return Response(status=404, data={"detail": str(exc), "registry": getattr(exc, "registry", None)})


def handle_registry_error(request: HttpRequest, exc: RegistryError | t.Type[RegistryError]) -> Response:
    """An external registry failed or refused the request."""
    logger.error("REGISTRY_ERROR", path=request.path, registry=getattr(exc, "registry", None), error=str(exc))
    return Response(status=502, data={"detail": str(exc), "registry": getattr(exc, "registry", None)})


def handle_registry_auth_error(request: HttpRequest, exc: RegistryAuthError | t.Type[RegistryAuthError]) -> Response:
    """We could not authenticate against a registry. Credentials are ours, so the details stay in the logs."""
    logger.error("REGISTRY_AUTH_ERROR", path=request.path, registry=getattr(exc, "registry", None), error=str(exc))
    return Response(
        status=502,
        data={"detail": "Falha de autenticação no serviço externo.", "registry": getattr(exc, "registry", None)},
    )


SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "x-webhook-secret", "cpf"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
