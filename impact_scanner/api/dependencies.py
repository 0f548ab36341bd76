"""Shared FastAPI dependencies."""

from fastapi import Depends

from impact_scanner.config import BoaviztaConfig
from impact_scanner.providers.base import ImpactProvider
from impact_scanner.providers.boavizta import BoaviztaImpactProvider
from impact_scanner.services.estimation import ImpactEstimator


def get_impact_provider() -> ImpactProvider:
    """Provider used by the impacts endpoints. Override in tests."""
    return BoaviztaImpactProvider(BoaviztaConfig())


def get_estimator(provider: ImpactProvider = Depends(get_impact_provider)) -> ImpactEstimator:
    return ImpactEstimator(provider)
