"""Impact estimation endpoints.

Endpoints:
    POST /impacts          - Estimate every resource of an inventory
    POST /impacts/summary  - Estimate an inventory and return the aggregated summary
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from impact_scanner.api.dependencies import get_estimator
from impact_scanner.config import AWSConfig
from impact_scanner.models.impacts import EstimatedInventory, ImpactsSummary
from impact_scanner.models.inventory import Inventory
from impact_scanner.models.location import UnsupportedRegionError
from impact_scanner.providers.errors import ImpactProviderError, InvalidDurationError
from impact_scanner.services.estimation import ImpactEstimator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/impacts")


class EstimationRequest(BaseModel):
    """Request body for the impacts endpoints."""

    inventory: Inventory = Field(..., description="Resources to assess")
    usage_duration_hours: float | None = Field(
        default=None,
        description="Usage duration (hours), defaults to SCAN_USAGE_DURATION_HOURS",
    )
    verbose: bool = Field(default=False, description="Include backend raw data")
    aws_region: str | None = Field(
        default=None,
        description="Region reported by /impacts/summary (defaults to AWS_REGION)",
    )


def _provider_error_to_http(error: ImpactProviderError) -> HTTPException:
    if isinstance(error, InvalidDurationError):
        return HTTPException(status_code=422, detail=str(error))
    logger.error(f"Impact provider failed: {error}")
    return HTTPException(status_code=502, detail=str(error))


@router.post("", response_model=EstimatedInventory)
async def estimate_impacts(
    request: EstimationRequest,
    estimator: ImpactEstimator = Depends(get_estimator),
):
    """Estimate the impacts of each resource in the inventory.

    Raises:
        HTTPException 422: If the usage duration is invalid
        HTTPException 502: If the impact backend fails
    """
    try:
        return await estimator.estimate(
            request.inventory,
            usage_duration_hours=request.usage_duration_hours,
            verbose=request.verbose,
        )
    except ImpactProviderError as e:
        raise _provider_error_to_http(e) from e


@router.post("/summary", response_model=ImpactsSummary)
async def summarize_impacts(
    request: EstimationRequest,
    estimator: ImpactEstimator = Depends(get_estimator),
):
    """Estimate the inventory and return the aggregated impacts.

    Raises:
        HTTPException 400: If the region is not supported
        HTTPException 422: If the usage duration is invalid
        HTTPException 502: If the impact backend fails
    """
    aws_region = request.aws_region or AWSConfig().region
    try:
        return await estimator.summarize_inventory(
            request.inventory,
            aws_region=aws_region,
            usage_duration_hours=request.usage_duration_hours,
        )
    except UnsupportedRegionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ImpactProviderError as e:
        raise _provider_error_to_http(e) from e
