"""Enumerations shared by the inventory and impact models."""

from enum import Enum


class CloudProvider(Enum):
    """Cloud providers a resource can be inventoried from."""

    AWS = "aws"
    OVH = "ovh"


class InstanceState(Enum):
    """Lifecycle state of a compute instance at inventory time."""

    RUNNING = "running"
    STOPPED = "stopped"


class StorageKind(Enum):
    """Physical storage technology backing a block storage volume."""

    SSD = "ssd"
    HDD = "hdd"
