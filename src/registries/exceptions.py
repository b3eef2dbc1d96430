class RegistryError(Exception):
    """Raised when an external registry fails or answers something we cannot use.

    Attributes:
        registry: Short name of the registry (``sas``, ``cpe``, ``4events``).
        status_code: HTTP status code returned by the registry, if any.
    """

    def __init__(self, message: str, registry: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.registry = registry
        self.status_code = status_code


class RegistryNotFound(RegistryError):
    """The registry answered, but the requested record does not exist."""


class RegistryAuthError(RegistryError):
    """Could not authenticate against the registry."""
