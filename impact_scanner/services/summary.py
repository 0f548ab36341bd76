"""Reduction of an estimated inventory into one ImpactsSummary."""

import logging

from impact_scanner.models.impacts import METRIC_FIELDS, EstimatedInventory, ImpactsSummary

logger = logging.getLogger(__name__)


def summarize(
    location: str,
    country: str,
    estimated_inventory: EstimatedInventory,
    duration_of_use_hours: float,
) -> ImpactsSummary:
    """Sum the impacts of every assessed resource in an estimated inventory.

    Resources without impact values are counted as not assessed and add
    nothing to the metric totals. Location, country and duration are copied
    into the summary as given.

    Args:
        location: Report location qualifier (e.g. "eu-west-1")
        country: Report country (e.g. "FRA")
        estimated_inventory: Output of an ImpactProvider call
        duration_of_use_hours: Duration the report covers

    Returns:
        ImpactsSummary for the inventory. An empty inventory gives zero counts
        and 0.0 totals.
    """
    resources = estimated_inventory.impacting_resources

    totals = dict.fromkeys(METRIC_FIELDS, 0.0)
    assessed = 0
    not_assessed = 0
    mismatched_duration = False

    for resource in resources:
        if resource.impacts_duration_hours != duration_of_use_hours:
            mismatched_duration = True

        impacts = resource.impacts_values
        if impacts is not None:
            assessed += 1
            for field in METRIC_FIELDS:
                totals[field] += getattr(impacts, field)
        else:
            logger.debug(
                f"Skipped counting resource {resource.cloud_resource.id} "
                f"({resource.cloud_resource.resource_type}) in summary: no impact data"
            )
            not_assessed += 1

    if mismatched_duration:
        logger.warning(
            f"Summary duration {duration_of_use_hours}h differs from the duration "
            "impacts were estimated for"
        )

    return ImpactsSummary(
        number_of_resources_total=len(resources),
        number_of_resources_assessed=assessed,
        number_of_resources_not_assessed=not_assessed,
        duration_of_use_hours=duration_of_use_hours,
        location=location,
        country=country,
        **totals,
    )
