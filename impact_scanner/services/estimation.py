"""Impact estimation service - coordinates provider call, timeout, metrics and summary."""

import asyncio
import logging
import time

from impact_scanner.common.log_utils import estimation_context
from impact_scanner.common.metrics import counter, duration
from impact_scanner.config import MetricsConfig, ScanConfig
from impact_scanner.models.impacts import EstimatedInventory, ImpactsSummary
from impact_scanner.models.inventory import ExecutionStatistics, Inventory
from impact_scanner.models.location import UsageLocation
from impact_scanner.providers.base import ImpactProvider
from impact_scanner.providers.errors import (
    BackendError,
    ImpactProviderError,
    ProviderTimeoutError,
)
from impact_scanner.services.summary import summarize

logger = logging.getLogger(__name__)


class ImpactEstimator:
    """Runs an impact provider over an inventory and summarizes the result.

    The estimator depends only on the ImpactProvider protocol, so any backend
    or test double can be plugged in.
    """

    def __init__(
        self,
        provider: ImpactProvider,
        scan_config: ScanConfig | None = None,
        metrics_config: MetricsConfig | None = None,
    ):
        self.provider = provider
        self.scan_config = scan_config or ScanConfig()
        self.metrics_config = metrics_config or MetricsConfig()

    async def estimate(
        self,
        inventory: Inventory,
        usage_duration_hours: float | None = None,
        verbose: bool | None = None,
    ) -> EstimatedInventory:
        """Estimate impacts of an inventory.

        Args:
            inventory: Resources to assess
            usage_duration_hours: Duration to estimate for (defaults to ScanConfig)
            verbose: Keep backend raw data (defaults to ScanConfig)

        Returns:
            EstimatedInventory with estimation timings recorded in its metadata

        Raises:
            InvalidDurationError: If the duration is rejected by the provider
            BackendError: If the provider fails, breaks its contract, or times out
        """
        hours = (
            usage_duration_hours
            if usage_duration_hours is not None
            else self.scan_config.usage_duration_hours
        )
        verbose = self.scan_config.verbose if verbose is None else verbose

        backend = self.provider.name

        with estimation_context(backend, hours):
            start_time = time.perf_counter()
            try:
                estimated = await self._call_provider(inventory, hours, verbose)
                self._check_contract(inventory, estimated, hours)
            except ImpactProviderError as e:
                logger.error(f"Impact estimation failed: {e}")
                counter("ImpactEstimationFailed", backend=backend, config=self.metrics_config)
                raise

            elapsed = time.perf_counter() - start_time
            assessed = sum(1 for r in estimated.impacting_resources if r.is_assessed)
            not_assessed = len(estimated.impacting_resources) - assessed
            logger.info(
                f"Estimated impacts with {backend} in {elapsed:.2f}s: "
                f"{assessed} assessed, {not_assessed} not assessed"
            )

        metrics_config = self.metrics_config
        counter("ResourcesAssessed", assessed, backend=backend, config=metrics_config)
        counter("ResourcesNotAssessed", not_assessed, backend=backend, config=metrics_config)
        duration("ImpactEstimationDuration", elapsed, backend=backend, config=metrics_config)

        statistics = ExecutionStatistics(impact_estimation_duration_seconds=elapsed)
        metadata = estimated.metadata.model_copy(update={"execution_statistics": statistics})
        return estimated.model_copy(update={"metadata": metadata})

    async def summarize_inventory(
        self,
        inventory: Inventory,
        aws_region: str,
        usage_duration_hours: float | None = None,
    ) -> ImpactsSummary:
        """Estimate an inventory and reduce it to an ImpactsSummary.

        Args:
            inventory: Resources to assess
            aws_region: Region reported in the summary; its country is looked up
            usage_duration_hours: Duration to estimate for (defaults to ScanConfig)

        Raises:
            UnsupportedRegionError: If aws_region has no known country
            ImpactProviderError: If the estimation fails
        """
        location = UsageLocation.from_aws_region(aws_region)
        hours = (
            usage_duration_hours
            if usage_duration_hours is not None
            else self.scan_config.usage_duration_hours
        )

        estimated = await self.estimate(inventory, hours, verbose=False)
        return summarize(
            location=location.aws_region,
            country=location.iso_country_code,
            estimated_inventory=estimated,
            duration_of_use_hours=hours,
        )

    async def _call_provider(
        self, inventory: Inventory, hours: float, verbose: bool
    ) -> EstimatedInventory:
        timeout = self.scan_config.provider_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                return await self.provider.get_impacts(inventory, hours, verbose)
        except TimeoutError as e:
            msg = f"Provider call exceeded {timeout}s"
            raise ProviderTimeoutError(
                msg, backend=self.provider.name, usage_duration_hours=hours
            ) from e

    def _check_contract(
        self, inventory: Inventory, estimated: EstimatedInventory, hours: float
    ) -> None:
        """Reject provider output that does not pair every resource, in order."""
        pairings = estimated.impacting_resources
        if len(pairings) != len(inventory.resources):
            msg = (
                f"Provider returned {len(pairings)} estimated resources "
                f"for {len(inventory.resources)} inventoried resources"
            )
            raise BackendError(msg, backend=self.provider.name, usage_duration_hours=hours)

        for resource, pairing in zip(inventory.resources, pairings, strict=True):
            if pairing.cloud_resource.id != resource.id:
                msg = f"Provider returned {pairing.cloud_resource.id} in place of {resource.id}"
                raise BackendError(msg, backend=self.provider.name, usage_duration_hours=hours)
            if pairing.impacts_duration_hours != hours:
                msg = (
                    f"Provider quoted {resource.id} over {pairing.impacts_duration_hours}h "
                    f"instead of {hours}h"
                )
                raise BackendError(msg, backend=self.provider.name, usage_duration_hours=hours)
