"""Impact provider backed by the Boavizta API (v1).

Each resource is translated into one Boavizta request:
- Instances: POST /v1/cloud/instance
- Block storage: POST /v1/component/ssd or /v1/component/hdd, by volume type
- Object storage: not modelled by the API, reported as not assessed

Requests run concurrently, bounded by BoaviztaConfig.max_concurrent_requests.
Unknown instance types or rejected payloads (HTTP 400/404/422) mark that one
resource as not assessed; any other failure aborts the whole call.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from impact_scanner.common.http_client import create_async_client
from impact_scanner.config import BoaviztaConfig
from impact_scanner.models.enums import InstanceState, StorageKind
from impact_scanner.models.impacts import (
    CloudResourceWithImpacts,
    EstimatedInventory,
    EstimationMetadata,
    ImpactsValues,
)
from impact_scanner.models.inventory import (
    BlockStorageDetails,
    CloudResource,
    InstanceDetails,
    Inventory,
)
from impact_scanner.providers.base import validate_usage_duration
from impact_scanner.providers.errors import BackendError, ProviderTimeoutError

logger = logging.getLogger(__name__)

CRITERIA = ("gwp", "adp", "pe")

# Volume types by backing technology
STORAGE_KINDS: dict[str, StorageKind] = {
    "gp2": StorageKind.SSD,
    "gp3": StorageKind.SSD,
    "io1": StorageKind.SSD,
    "io2": StorageKind.SSD,
    "st1": StorageKind.HDD,
    "sc1": StorageKind.HDD,
    "standard": StorageKind.HDD,
}

# Responses meaning "no data for this resource" rather than a backend failure
NOT_ASSESSED_STATUS_CODES = frozenset({400, 404, 422})


class BoaviztaImpactProvider:
    """Estimates resource impacts with the Boavizta API.

    Args:
        config: API location, timeouts and concurrency limits
        client: Optional pre-built httpx client. When omitted, a client is
            created and closed for each get_impacts call.
    """

    name = "boavizta"

    def __init__(
        self,
        config: BoaviztaConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config or BoaviztaConfig()
        self._client = client

    async def get_impacts(
        self,
        inventory: Inventory,
        usage_duration_hours: float,
        verbose: bool = False,
    ) -> EstimatedInventory:
        hours = validate_usage_duration(usage_duration_hours, backend=self.name)
        logger.info(
            f"Estimating impacts of {len(inventory.resources)} resources "
            f"over {hours}h with {self.config.api_url}"
        )

        if self._client is not None:
            return await self._estimate_inventory(self._client, inventory, hours, verbose)

        async with create_async_client(self.config) as client:
            return await self._estimate_inventory(client, inventory, hours, verbose)

    async def _estimate_inventory(
        self,
        client: httpx.AsyncClient,
        inventory: Inventory,
        hours: float,
        verbose: bool,
    ) -> EstimatedInventory:
        semaphore = asyncio.Semaphore(self.config.max_concurrent_requests)
        # Let every request settle before failing so none outlives the client
        results = await asyncio.gather(
            *(
                self._estimate_resource(client, semaphore, resource, hours, verbose)
                for resource in inventory.resources
            ),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        pairings = [r for r in results if isinstance(r, CloudResourceWithImpacts)]
        return EstimatedInventory(
            metadata=EstimationMetadata(
                description=inventory.metadata.description,
                backend=self.name,
            ),
            impacting_resources=pairings,
        )

    async def _estimate_resource(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        resource: CloudResource,
        hours: float,
        verbose: bool,
    ) -> CloudResourceWithImpacts:
        request = self._build_request(resource)
        impacts_values = None

        if request is None:
            logger.debug(f"No Boavizta model for {resource.resource_type} {resource.id}")
        else:
            path, body = request
            async with semaphore:
                raw = await self._post(client, path, body, hours, verbose, resource.id)
            if raw is not None:
                impacts_values = self._to_impacts_values(raw, hours, verbose)

        return CloudResourceWithImpacts(
            cloud_resource=resource,
            impacts_values=impacts_values,
            impacts_duration_hours=hours,
        )

    def _build_request(self, resource: CloudResource) -> tuple[str, dict[str, Any]] | None:
        """Build the API path and JSON body for a resource, or None if unsupported."""
        details = resource.resource_details

        if isinstance(details, InstanceDetails):
            if details.usage is None:
                load = self.config.default_cpu_load_percent
            elif details.usage.state == InstanceState.STOPPED:
                load = 0.0
            else:
                load = details.usage.average_cpu_load
            body = {
                "provider": resource.provider.value,
                "instance_type": details.instance_type,
                "usage": {
                    "usage_location": resource.location.iso_country_code,
                    "time_workload": [{"time_percentage": 100, "load_percentage": load}],
                },
            }
            return "/v1/cloud/instance", body

        if isinstance(details, BlockStorageDetails):
            kind = STORAGE_KINDS.get(details.storage_type)
            if kind is None or details.usage is None:
                return None
            return f"/v1/component/{kind.value}", {"capacity": details.usage.size_gb}

        return None

    async def _post(
        self,
        client: httpx.AsyncClient,
        path: str,
        body: dict[str, Any],
        hours: float,
        verbose: bool,
        resource_id: str,
    ) -> dict[str, Any] | None:
        params = [("verbose", str(verbose).lower()), ("duration", hours)]
        params.extend(("criteria", criterion) for criterion in CRITERIA)

        try:
            response = await client.post(path, params=params, json=body)
        except httpx.TimeoutException as e:
            msg = f"Timed out calling Boavizta {path} for {resource_id}"
            raise ProviderTimeoutError(msg, backend=self.name, usage_duration_hours=hours) from e
        except httpx.HTTPError as e:
            msg = f"Could not reach Boavizta {path} for {resource_id}: {e}"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours) from e

        if response.status_code in NOT_ASSESSED_STATUS_CODES:
            logger.warning(
                f"Boavizta has no impacts for {resource_id} "
                f"(HTTP {response.status_code}): {response.text[:200]}"
            )
            return None

        if response.is_error:
            msg = f"Boavizta {path} returned HTTP {response.status_code} for {resource_id}"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours)

        try:
            payload = response.json()
        except ValueError as e:
            msg = f"Boavizta {path} returned invalid JSON for {resource_id}"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours) from e

        if not isinstance(payload, dict):
            msg = f"Boavizta {path} returned {type(payload).__name__}, expected an object"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours)
        return payload

    def _to_impacts_values(
        self, raw: dict[str, Any], hours: float, verbose: bool
    ) -> ImpactsValues:
        """Normalise a Boavizta response into ImpactsValues.

        Phases the API does not implement (reported as a string instead of an
        object) count as zero. Any other phase without a numeric value fails
        the call.
        """
        impacts = raw.get("impacts")
        if not isinstance(impacts, dict):
            msg = "Boavizta response has no 'impacts' object"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours)

        def phase_value(criterion: str, phase: str) -> float:
            block = impacts.get(criterion)
            if not isinstance(block, dict):
                msg = f"Boavizta response is missing the '{criterion}' criterion"
                raise BackendError(msg, backend=self.name, usage_duration_hours=hours)

            value = block.get(phase)
            if isinstance(value, str):
                # e.g. "not implemented"
                return 0.0
            if isinstance(value, dict):
                value = value.get("value")
            if isinstance(value, bool) or not isinstance(value, int | float):
                msg = f"Boavizta response has no numeric {criterion}.{phase} value"
                raise BackendError(msg, backend=self.name, usage_duration_hours=hours)
            return float(value)

        try:
            return ImpactsValues(
                adp_manufacture=phase_value("adp", "embedded"),
                adp_use=phase_value("adp", "use"),
                pe_manufacture=phase_value("pe", "embedded"),
                pe_use=phase_value("pe", "use"),
                gwp_manufacture=phase_value("gwp", "embedded"),
                gwp_use=phase_value("gwp", "use"),
                raw_data=raw if verbose else None,
            )
        except ValidationError as e:
            msg = f"Boavizta returned out-of-range impacts: {e}"
            raise BackendError(msg, backend=self.name, usage_duration_hours=hours) from e
