"""Base output strategy interface for estimation results."""

from pathlib import Path
from typing import Protocol

from impact_scanner.models.impacts import EstimatedInventory


class OutputStrategy(Protocol):
    """Protocol for output strategies that serialize an estimated inventory.

    Output strategies are separate from providers. Providers return an
    EstimatedInventory, and the caller decides when and where to write it.
    """

    def write(self, estimated_inventory: EstimatedInventory, output_path: Path) -> Path:
        """Write estimation results to a file.

        Args:
            estimated_inventory: Output of an impact provider call
            output_path: Path where output file should be written

        Returns:
            Path to the written output file

        Raises:
            IOError: If writing fails
        """
        ...
