"""Inventory and impact models."""

from impact_scanner.models.enums import CloudProvider, InstanceState, StorageKind
from impact_scanner.models.impacts import (
    METRIC_FIELDS,
    CloudResourceWithImpacts,
    EstimatedInventory,
    EstimationMetadata,
    ImpactsSummary,
    ImpactsValues,
)
from impact_scanner.models.inventory import (
    BlockStorageDetails,
    CloudResource,
    CloudResourceTag,
    ExecutionStatistics,
    InstanceDetails,
    InstanceUsage,
    Inventory,
    InventoryMetadata,
    ObjectStorageDetails,
    StorageUsage,
)
from impact_scanner.models.location import UnsupportedRegionError, UsageLocation

__all__ = [
    "CloudProvider",
    "InstanceState",
    "StorageKind",
    "UsageLocation",
    "UnsupportedRegionError",
    "CloudResourceTag",
    "InstanceUsage",
    "StorageUsage",
    "InstanceDetails",
    "BlockStorageDetails",
    "ObjectStorageDetails",
    "CloudResource",
    "ExecutionStatistics",
    "InventoryMetadata",
    "Inventory",
    "METRIC_FIELDS",
    "ImpactsValues",
    "CloudResourceWithImpacts",
    "EstimationMetadata",
    "EstimatedInventory",
    "ImpactsSummary",
]
