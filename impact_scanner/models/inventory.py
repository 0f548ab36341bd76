"""Inventory models: the cloud resources handed to an impact provider.

Resource discovery happens outside this package; these models only describe
the shape an inventory must have to be estimated. Resource details are a
discriminated union keyed on ``type`` so a JSON inventory round-trips without
losing which kind of resource each entry is.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from impact_scanner.models.enums import CloudProvider, InstanceState
from impact_scanner.models.location import UsageLocation


class CloudResourceTag(BaseModel):
    """A key/value tag attached to a cloud resource."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str | None = None


class InstanceUsage(BaseModel):
    """Observed usage of a compute instance.

    Attributes:
        average_cpu_load: Mean CPU utilisation over the observation window (%)
        state: Instance state when inventoried
    """

    model_config = ConfigDict(frozen=True)

    average_cpu_load: float = Field(ge=0, le=100, description="Average CPU load (%)")
    state: InstanceState = Field(default=InstanceState.RUNNING)


class StorageUsage(BaseModel):
    """Provisioned size of a storage volume."""

    model_config = ConfigDict(frozen=True)

    size_gb: int = Field(ge=0, description="Provisioned size (GB)")


class InstanceDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["instance"] = "instance"
    instance_type: str = Field(description="Provider instance type (e.g. m6g.xlarge)")
    usage: InstanceUsage | None = None


class BlockStorageDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["block_storage"] = "block_storage"
    storage_type: str = Field(description="Provider volume type (e.g. gp3, st1)")
    usage: StorageUsage | None = None


class ObjectStorageDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["object_storage"] = "object_storage"


ResourceDetails = Annotated[
    InstanceDetails | BlockStorageDetails | ObjectStorageDetails,
    Field(discriminator="type"),
]


class CloudResource(BaseModel):
    """An identifiable cloud resource to be assessed.

    Attributes:
        provider: Cloud provider the resource belongs to
        id: Provider resource identifier (e.g. i-0123456789abcdef0)
        location: Region and country the resource runs in
        resource_details: Type-specific description of the resource
        tags: Provider tags, carried through for display
    """

    model_config = ConfigDict(frozen=True)

    provider: CloudProvider = Field(default=CloudProvider.AWS)
    id: str = Field(description="Resource identifier")
    location: UsageLocation
    resource_details: ResourceDetails
    tags: list[CloudResourceTag] = Field(default_factory=list)

    @property
    def resource_type(self) -> str:
        return self.resource_details.type


class ExecutionStatistics(BaseModel):
    """Wall-clock timings of a scan, in seconds."""

    model_config = ConfigDict(frozen=True)

    inventory_duration_seconds: float | None = Field(default=None, ge=0)
    impact_estimation_duration_seconds: float | None = Field(default=None, ge=0)
    total_duration_seconds: float | None = Field(default=None, ge=0)


class InventoryMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    inventory_date: datetime | None = None
    description: str | None = None
    execution_statistics: ExecutionStatistics | None = None


class Inventory(BaseModel):
    """Ordered collection of cloud resources to assess."""

    model_config = ConfigDict(frozen=True)

    metadata: InventoryMetadata = Field(default_factory=InventoryMetadata)
    resources: list[CloudResource] = Field(default_factory=list)
