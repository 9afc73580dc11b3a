from .catalog import InstanceSizeCatalog
from .transformer import PoolSpecTransformer

__all__ = ["InstanceSizeCatalog", "PoolSpecTransformer"]
