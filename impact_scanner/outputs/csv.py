"""CSV output strategy for estimation results.

One row per resource, in inventory order. Resources that could not be
assessed keep their row with empty metric cells so the CSV always lists the
whole inventory.
"""

from pathlib import Path

import pandas as pd

from impact_scanner.models.impacts import (
    METRIC_FIELDS,
    CloudResourceWithImpacts,
    EstimatedInventory,
)


class OutputColumns:
    """Column names in the output CSV."""

    RESOURCE_ID = "resource_id"
    PROVIDER = "provider"
    RESOURCE_TYPE = "resource_type"
    AWS_REGION = "aws_region"
    COUNTRY = "country"
    ASSESSED = "assessed"
    DURATION_HOURS = "impacts_duration_hours"

    @classmethod
    def final_output_order(cls) -> list[str]:
        """Get the ordered list of columns for CSV output."""
        return [
            cls.RESOURCE_ID,
            cls.PROVIDER,
            cls.RESOURCE_TYPE,
            cls.AWS_REGION,
            cls.COUNTRY,
            cls.ASSESSED,
            cls.DURATION_HOURS,
            *METRIC_FIELDS,
        ]


class CSVOutputStrategy:
    """Writes per-resource impacts to CSV."""

    def write(self, estimated_inventory: EstimatedInventory, output_path: Path) -> Path:
        rows = [self._to_row(r) for r in estimated_inventory.impacting_resources]
        df = pd.DataFrame(rows, columns=OutputColumns.final_output_order())

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        return output_path

    def _to_row(self, resource: CloudResourceWithImpacts) -> dict:
        cloud_resource = resource.cloud_resource
        row = {
            OutputColumns.RESOURCE_ID: cloud_resource.id,
            OutputColumns.PROVIDER: cloud_resource.provider.value,
            OutputColumns.RESOURCE_TYPE: cloud_resource.resource_type,
            OutputColumns.AWS_REGION: cloud_resource.location.aws_region,
            OutputColumns.COUNTRY: cloud_resource.location.iso_country_code,
            OutputColumns.ASSESSED: resource.is_assessed,
            OutputColumns.DURATION_HOURS: resource.impacts_duration_hours,
        }
        for field in METRIC_FIELDS:
            row[field] = (
                getattr(resource.impacts_values, field) if resource.impacts_values else None
            )
        return row
