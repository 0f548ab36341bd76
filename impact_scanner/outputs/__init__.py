"""Output strategies for estimation results."""

from impact_scanner.outputs.base import OutputStrategy
from impact_scanner.outputs.csv import CSVOutputStrategy

__all__ = ["OutputStrategy", "CSVOutputStrategy"]
