"""Builders and test doubles shared by the unit tests."""

from impact_scanner.models import (
    BlockStorageDetails,
    CloudResource,
    CloudResourceWithImpacts,
    EstimatedInventory,
    ImpactsValues,
    InstanceDetails,
    InstanceUsage,
    Inventory,
    ObjectStorageDetails,
    StorageUsage,
    UsageLocation,
)
from impact_scanner.providers.base import validate_usage_duration


def make_instance(resource_id: str, instance_type: str = "m6g.xlarge", cpu: float | None = 30.0):
    usage = InstanceUsage(average_cpu_load=cpu) if cpu is not None else None
    return CloudResource(
        id=resource_id,
        location=UsageLocation.from_aws_region("eu-west-3"),
        resource_details=InstanceDetails(instance_type=instance_type, usage=usage),
    )


def make_volume(resource_id: str, storage_type: str = "gp3", size_gb: int | None = 100):
    usage = StorageUsage(size_gb=size_gb) if size_gb is not None else None
    return CloudResource(
        id=resource_id,
        location=UsageLocation.from_aws_region("eu-west-3"),
        resource_details=BlockStorageDetails(storage_type=storage_type, usage=usage),
    )


def make_bucket(resource_id: str):
    return CloudResource(
        id=resource_id,
        location=UsageLocation.from_aws_region("eu-west-3"),
        resource_details=ObjectStorageDetails(),
    )


def make_impacts(*values: float) -> ImpactsValues:
    adp_m, adp_u, pe_m, pe_u, gwp_m, gwp_u = values
    return ImpactsValues(
        adp_manufacture=adp_m,
        adp_use=adp_u,
        pe_manufacture=pe_m,
        pe_use=pe_u,
        gwp_manufacture=gwp_m,
        gwp_use=gwp_u,
    )


def make_estimated(pairs, hours: float = 24.0) -> EstimatedInventory:
    """Build an EstimatedInventory from (resource_id, ImpactsValues | None) pairs."""
    return EstimatedInventory(
        impacting_resources=[
            CloudResourceWithImpacts(
                cloud_resource=make_instance(resource_id),
                impacts_values=impacts,
                impacts_duration_hours=hours,
            )
            for resource_id, impacts in pairs
        ]
    )


class StaticImpactProvider:
    """Test double returning fixed impacts per resource id.

    Resources missing from ``impacts_by_id`` are returned as not assessed.
    """

    name = "static"

    def __init__(self, impacts_by_id: dict[str, ImpactsValues] | None = None):
        self.impacts_by_id = impacts_by_id or {}
        self.calls: list[tuple[Inventory, float, bool]] = []

    async def get_impacts(self, inventory, usage_duration_hours, verbose=False):
        hours = validate_usage_duration(usage_duration_hours, backend=self.name)
        self.calls.append((inventory, hours, verbose))
        return EstimatedInventory(
            impacting_resources=[
                CloudResourceWithImpacts(
                    cloud_resource=resource,
                    impacts_values=self.impacts_by_id.get(resource.id),
                    impacts_duration_hours=hours,
                )
                for resource in inventory.resources
            ]
        )


