"""Impact provider protocol definition."""

import math
from typing import Protocol

from impact_scanner.models.impacts import EstimatedInventory
from impact_scanner.models.inventory import Inventory
from impact_scanner.providers.errors import InvalidDurationError


class ImpactProvider(Protocol):
    """Protocol for impact backends.

    Allows different sources of impact data (Boavizta API versions, other
    databases, test doubles) behind one call.
    """

    name: str

    async def get_impacts(
        self,
        inventory: Inventory,
        usage_duration_hours: float,
        verbose: bool = False,
    ) -> EstimatedInventory:
        """Estimate the impacts of every resource in an inventory.

        Args:
            inventory: Resources to assess (not modified)
            usage_duration_hours: Duration to project impacts over, must be > 0
            verbose: Keep backend raw data on each ImpactsValues

        Returns:
            EstimatedInventory with one pairing per input resource, in input order,
            each quoted over usage_duration_hours. Resources the backend has no
            data for carry impacts_values=None.

        Raises:
            InvalidDurationError: If usage_duration_hours is not a positive finite number
            BackendError: If the backend cannot be reached or its data parsed
        """
        ...


def validate_usage_duration(usage_duration_hours: float, backend: str) -> float:
    """Reject durations a provider cannot estimate impacts for.

    Returns:
        The duration as a float

    Raises:
        InvalidDurationError: If the duration is non-positive, NaN or infinite
    """
    try:
        hours = float(usage_duration_hours)
    except (TypeError, ValueError) as e:
        msg = f"Usage duration must be a number of hours, got {usage_duration_hours!r}"
        raise InvalidDurationError(msg, backend=backend) from e

    if math.isnan(hours) or math.isinf(hours) or hours <= 0:
        msg = f"Usage duration must be a positive number of hours, got {usage_duration_hours}"
        raise InvalidDurationError(msg, backend=backend, usage_duration_hours=hours)
    return hours
