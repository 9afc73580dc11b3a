from .node_watcher import NodeReadinessWatcher
from .pool_watcher import PoolLifecycleWatcher

__all__ = ["NodeReadinessWatcher", "PoolLifecycleWatcher"]
