"""Shared fixtures."""

from unittest.mock import patch

import pytest

from impact_scanner.models import Inventory
from tests.utils import (
    StaticImpactProvider,
    make_bucket,
    make_impacts,
    make_instance,
    make_volume,
)


@pytest.fixture
def sample_inventory():
    """Inventory with an instance, a volume and a bucket."""
    return Inventory(
        resources=[
            make_instance("i-001"),
            make_volume("vol-001"),
            make_bucket("bucket-001"),
        ]
    )


@pytest.fixture
def static_provider():
    """Provider assessing i-001 and vol-001 but not bucket-001."""
    return StaticImpactProvider(
        {
            "i-001": make_impacts(1.0, 2.0, 3.0, 4.0, 5.0, 6.0),
            "vol-001": make_impacts(0.5, 0.0, 1.5, 0.0, 2.5, 0.0),
        }
    )


@pytest.fixture(autouse=True)
def no_metrics():
    """Keep CloudWatch EMF metrics out of unit tests."""
    with (
        patch("impact_scanner.services.estimation.counter") as mock_counter,
        patch("impact_scanner.services.estimation.duration"),
    ):
        yield mock_counter
