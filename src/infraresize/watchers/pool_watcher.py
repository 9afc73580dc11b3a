# src/infraresize/watchers/pool_watcher.py

import logging

from ..core.exceptions import PoolNotFound
from ..core.machine_pools import MachinePoolClient
from ..core.polling import poll_until
from .base_watcher import BaseWatcher

logger = logging.getLogger(__name__)


class PoolLifecycleWatcher(BaseWatcher):
    """Waits for MachinePools in the Hive cluster to disappear."""

    def __init__(self, pools: MachinePoolClient, poll_interval: float = None, timeout: float = None):
        super().__init__(poll_interval, timeout)
        self.pools = pools

    async def await_absence(self, namespace: str, name: str, poll_interval: float = None,
                            timeout: float = None) -> None:
        """
        Blocks until the MachinePool `namespace/name` no longer exists.

        Only "still exists" keeps the wait going: any error other than
        not-found is raised immediately.
        """

        async def check():
            try:
                await self.pools.get(namespace, name)
            except PoolNotFound:
                logger.info("machinepool %s/%s is gone", namespace, name)
                return True, "absent"
            logger.info("machinepool %s/%s still exists, continuing to wait", namespace, name)
            return False, "present"

        await poll_until(
            check,
            poll_interval if poll_interval is not None else self.poll_interval,
            timeout if timeout is not None else self.timeout,
            f"deletion of machinepool {namespace}/{name}",
        )
