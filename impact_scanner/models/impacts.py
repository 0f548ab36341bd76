"""Impact models: per-resource impact figures and the aggregated summary.

These models represent estimation results as immutable value objects.

Units are fixed for every metric family:
- ADP (abiotic depletion potential): kg Sb-eq
- PE (primary energy): MJ
- GWP (global warming potential): kg CO2-eq

Each family is split into a manufacture (embedded) and a use phase.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from impact_scanner.models.inventory import CloudResource, ExecutionStatistics

METRIC_FIELDS: tuple[str, ...] = (
    "adp_manufacture",
    "adp_use",
    "pe_manufacture",
    "pe_use",
    "gwp_manufacture",
    "gwp_use",
)


class ImpactsValues(BaseModel):
    """Impacts of an individual resource over the requested duration.

    Either all six metrics are known or the resource carries no ImpactsValues
    at all, so none of the metric fields has a default.

    Attributes:
        adp_manufacture: Depletion potential of manufacturing (kg Sb-eq)
        adp_use: Depletion potential of use (kg Sb-eq)
        pe_manufacture: Primary energy of manufacturing (MJ)
        pe_use: Primary energy of use (MJ)
        gwp_manufacture: Warming potential of manufacturing (kg CO2-eq)
        gwp_use: Warming potential of use (kg CO2-eq)
        raw_data: Backend payload kept for audit when verbose output is requested
    """

    model_config = ConfigDict(frozen=True)

    adp_manufacture: float = Field(ge=0, description="ADP manufacture (kg Sb-eq)")
    adp_use: float = Field(ge=0, description="ADP use (kg Sb-eq)")
    pe_manufacture: float = Field(ge=0, description="Primary energy manufacture (MJ)")
    pe_use: float = Field(ge=0, description="Primary energy use (MJ)")
    gwp_manufacture: float = Field(ge=0, description="GWP manufacture (kg CO2-eq)")
    gwp_use: float = Field(ge=0, description="GWP use (kg CO2-eq)")
    raw_data: Any | None = Field(default=None, description="Opaque backend payload")


class CloudResourceWithImpacts(BaseModel):
    """A cloud resource paired with its impacts, if the backend could assess it."""

    model_config = ConfigDict(frozen=True)

    cloud_resource: CloudResource
    impacts_values: ImpactsValues | None = Field(
        default=None, description="None when the resource could not be assessed"
    )
    impacts_duration_hours: float = Field(gt=0, description="Duration impacts cover (hours)")

    @property
    def is_assessed(self) -> bool:
        return self.impacts_values is not None


class EstimationMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    estimation_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    description: str | None = None
    backend: str | None = Field(default=None, description="Name of the impact provider")
    backend_version: str | None = None
    execution_statistics: ExecutionStatistics | None = None


class EstimatedInventory(BaseModel):
    """Output of a provider call: one pairing per input resource, in input order.

    A single provider call quotes every impact over one duration, so mixed
    ``impacts_duration_hours`` values are rejected.
    """

    model_config = ConfigDict(frozen=True)

    metadata: EstimationMetadata = Field(default_factory=EstimationMetadata)
    impacting_resources: list[CloudResourceWithImpacts] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_single_duration(self) -> "EstimatedInventory":
        durations = {r.impacts_duration_hours for r in self.impacting_resources}
        if len(durations) > 1:
            msg = f"Estimated resources must share one impacts duration, got {sorted(durations)}"
            raise ValueError(msg)
        return self


class ImpactsSummary(BaseModel):
    """Aggregated impacts and report metadata for one estimated inventory.

    Attributes:
        number_of_resources_total: Resources in the estimated inventory
        number_of_resources_assessed: Resources with impact values
        number_of_resources_not_assessed: Resources without impact values
        duration_of_use_hours: Duration the report covers (hours)
        location: Report location qualifier, e.g. an AWS region
        country: Report country, e.g. an ISO 3166-1 alpha-3 code
    """

    model_config = ConfigDict(frozen=True)

    number_of_resources_total: int = Field(ge=0)
    number_of_resources_assessed: int = Field(ge=0)
    number_of_resources_not_assessed: int = Field(ge=0)
    duration_of_use_hours: float
    adp_manufacture: float = Field(description="Total ADP manufacture (kg Sb-eq)")
    adp_use: float = Field(description="Total ADP use (kg Sb-eq)")
    pe_manufacture: float = Field(description="Total primary energy manufacture (MJ)")
    pe_use: float = Field(description="Total primary energy use (MJ)")
    gwp_manufacture: float = Field(description="Total GWP manufacture (kg CO2-eq)")
    gwp_use: float = Field(description="Total GWP use (kg CO2-eq)")
    location: str
    country: str

    @model_validator(mode="after")
    def check_counts(self) -> "ImpactsSummary":
        assessed = self.number_of_resources_assessed + self.number_of_resources_not_assessed
        if self.number_of_resources_total != assessed:
            msg = (
                f"number_of_resources_total ({self.number_of_resources_total}) must equal "
                f"assessed + not assessed ({assessed})"
            )
            raise ValueError(msg)
        return self

    @property
    def aws_region(self) -> str:
        return self.location
