"""Impact provider error definitions.

A resource the backend cannot assess is not an error: it is returned with
``impacts_values=None``. These exceptions abort a whole provider call.
"""


class ImpactProviderError(Exception):
    """A provider call failed and produced no estimated inventory.

    Attributes:
        backend: Name of the provider that failed
        usage_duration_hours: Duration the call was made for
    """

    def __init__(self, message: str, backend: str, usage_duration_hours: float | None = None):
        super().__init__(message)
        self.message = message
        self.backend = backend
        self.usage_duration_hours = usage_duration_hours

    def __str__(self) -> str:
        return (
            f"{self.message} (backend={self.backend}, "
            f"usage_duration_hours={self.usage_duration_hours})"
        )


class BackendError(ImpactProviderError):
    """The backend could not be reached, or its response could not be parsed."""


class ProviderTimeoutError(BackendError):
    """The backend, or the provider call as a whole, took too long."""


class InvalidDurationError(ImpactProviderError, ValueError):
    """The requested usage duration is not a positive, finite number of hours."""
