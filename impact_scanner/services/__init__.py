"""Services that turn inventories into impact results.

This package contains:
- summarize: Reduces an EstimatedInventory to an ImpactsSummary
- ImpactEstimator: Runs an ImpactProvider with timeout, contract checks and metrics
"""

from impact_scanner.services.estimation import ImpactEstimator
from impact_scanner.services.summary import summarize

__all__ = ["ImpactEstimator", "summarize"]
