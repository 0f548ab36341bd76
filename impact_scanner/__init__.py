"""Cloud Impact Scanner: environmental impacts of cloud resource inventories."""

__version__ = "0.1.0"
