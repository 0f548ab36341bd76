"""Impact providers.

Each provider implements the ImpactProvider protocol:
- get_impacts(inventory, usage_duration_hours, verbose) -> EstimatedInventory

Callers depend on the protocol only, so backends can be swapped freely.
"""

from impact_scanner.providers.base import ImpactProvider, validate_usage_duration
from impact_scanner.providers.boavizta import BoaviztaImpactProvider
from impact_scanner.providers.errors import (
    BackendError,
    ImpactProviderError,
    InvalidDurationError,
    ProviderTimeoutError,
)

__all__ = [
    "ImpactProvider",
    "validate_usage_duration",
    "BoaviztaImpactProvider",
    "ImpactProviderError",
    "BackendError",
    "ProviderTimeoutError",
    "InvalidDurationError",
]
