from .catalog import CatalogEntry
from .machine_pool import CloudProvider, MachinePool, MachinePoolPlatform, MachinePoolSpec, ObjectMeta
from .notification import ServiceLog
from .plan import ResizePlan

__all__ = [
    "CatalogEntry",
    "CloudProvider",
    "MachinePool",
    "MachinePoolPlatform",
    "MachinePoolSpec",
    "ObjectMeta",
    "ResizePlan",
    "ServiceLog",
]
