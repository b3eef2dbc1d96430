"""Shared plumbing for the external registry clients."""

import typing as t

import httpx
import structlog
from django.conf import settings

from .exceptions import RegistryError

logger = structlog.get_logger(__name__)


class RegistryClient:
    """Thin synchronous httpx wrapper.

    One request per call, no retries. Transport failures become ``RegistryError``;
    interpreting status codes is left to the concrete client.

    ``transport`` can be overridden (per instance or on the class) to route requests
    through an ``httpx.MockTransport``.
    """

    name: str = "registry"
    transport: httpx.BaseTransport | None = None

    def __init__(
        self,
        *,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            headers=headers,
            timeout=httpx.Timeout(timeout or settings.REGISTRY_TIMEOUT_SECONDS),
            transport=transport or type(self).transport,
        )

    def __enter__(self) -> t.Self:
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: t.Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("registry_request_failed", registry=self.name, method=method, url=url, error=str(e))
            raise RegistryError(f"{self.name} unreachable: {e}", registry=self.name) from e
        logger.debug("registry_response", registry=self.name, method=method, url=url, status=response.status_code)
        return response

    def _error(self, response: httpx.Response, message: str) -> RegistryError:
        logger.warning(
            "registry_error_response",
            registry=self.name,
            url=str(response.request.url),
            status=response.status_code,
            body=response.text[:200],
        )
        return RegistryError(f"{message}: {response.status_code}", registry=self.name, status_code=response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> t.Any:
        """Decode the body, ``None`` when it is not JSON."""
        try:
            return response.json()
        except ValueError:
            return None
