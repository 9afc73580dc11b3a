# src/infraresize/core/orchestrator.py
"""
The infra resize campaign.

Capacity is doubled with a temporary pool at the new instance type, the
original pool is retired, a permanent pool at the new instance type is
installed and the temporary pool is retired in turn. Each mutation is
followed by a watcher that blocks until the cluster reflects it; nothing
is rolled back when a phase fails, so the cluster is left exactly where
the failure happened for the operator to pick up.
"""

import inspect
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Union

from ..models.machine_pool import MachinePool
from ..models.plan import ResizePlan
from ..notifications.service_log import ServiceLogSender, build_service_log, manual_command
from ..resize.transformer import PoolSpecTransformer
from ..watchers.node_watcher import NodeReadinessWatcher
from ..watchers.pool_watcher import PoolLifecycleWatcher
from .config import config
from .exceptions import NotificationError
from .machine_pools import MachinePoolClient

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[ResizePlan], Union[bool, Awaitable[bool]]]


class ResizePhase(str, Enum):
    INIT = "init"
    DISCOVER_ORIGINAL_POOL = "discover-original-pool"
    COMPUTE_PLAN = "compute-plan"
    CONFIRM = "confirm"
    CREATE_TEMPORARY_POOL = "create-temporary-pool"
    AWAIT_DOUBLE_CAPACITY = "await-double-capacity"
    DELETE_ORIGINAL_POOL = "delete-original-pool"
    AWAIT_ORIGINAL_ABSENT = "await-original-absent"
    CREATE_FINAL_POOL = "create-final-pool"
    AWAIT_FINAL_CAPACITY = "await-final-capacity"
    DELETE_TEMPORARY_POOL = "delete-temporary-pool"
    AWAIT_TEMPORARY_ABSENT = "await-temporary-absent"
    AWAIT_STEADY_REPLICA_COUNT = "await-steady-replica-count"
    NOTIFY = "notify"
    DONE = "done"
    DECLINED = "declined"


# Phases after which the cluster holds changes made by the campaign.
MUTATING_PHASES = frozenset(
    {
        ResizePhase.CREATE_TEMPORARY_POOL,
        ResizePhase.AWAIT_DOUBLE_CAPACITY,
        ResizePhase.DELETE_ORIGINAL_POOL,
        ResizePhase.AWAIT_ORIGINAL_ABSENT,
        ResizePhase.CREATE_FINAL_POOL,
        ResizePhase.AWAIT_FINAL_CAPACITY,
        ResizePhase.DELETE_TEMPORARY_POOL,
        ResizePhase.AWAIT_TEMPORARY_ABSENT,
        ResizePhase.AWAIT_STEADY_REPLICA_COUNT,
    }
)


class ResizeOrchestrator:
    """
    Drives one resize campaign from discovery to notification.

    Phases run strictly in order on the caller's event loop; a phase never
    starts before the previous watcher has reported success.
    `confirm` is called with the computed plan and must approve it before the
    first mutation.
    """

    def __init__(
        self,
        pools: MachinePoolClient,
        node_watcher: NodeReadinessWatcher,
        pool_watcher: PoolLifecycleWatcher,
        transformer: PoolSpecTransformer,
        confirm: ConfirmCallback,
        notifier: Optional[ServiceLogSender] = None,
        on_manual_notification: Optional[Callable[[str], None]] = None,
        infra_pool_name: str = None,
        node_selector: str = None,
        cluster_id_label: str = None,
    ):
        self.pools = pools
        self.node_watcher = node_watcher
        self.pool_watcher = pool_watcher
        self.transformer = transformer
        self.notifier = notifier or ServiceLogSender()
        self.confirm = confirm
        self.on_manual_notification = on_manual_notification
        self.infra_pool_name = infra_pool_name or config.INFRA_POOL_NAME
        self.node_selector = node_selector or config.INFRA_NODE_SELECTOR
        self.cluster_id_label = cluster_id_label or config.CLUSTER_ID_LABEL
        self.phase = ResizePhase.INIT

    def _enter(self, phase: ResizePhase):
        logger.debug("entering phase %s", phase.value)
        self.phase = phase

    async def discover_original_pool(self, cluster_id: str) -> MachinePool:
        """
        Finds the infra MachinePool in the Hive namespace of `cluster_id`.

        Raises:
            AmbiguousOrMissingNamespace: If the cluster id does not select exactly one namespace.
            InfraPoolNotFound: If the namespace has no infra MachinePool.
        """
        self._enter(ResizePhase.DISCOVER_ORIGINAL_POOL)
        namespace = await self.pools.find_cluster_namespace(cluster_id, self.cluster_id_label)
        return await self.pools.find_by_pool_name(namespace, self.infra_pool_name)

    def compute_plan(
        self, cluster_id: str, original: MachinePool, override_instance_type: Optional[str] = None
    ) -> ResizePlan:
        self._enter(ResizePhase.COMPUTE_PLAN)
        new_pool = self.transformer.derive_resized(original, override_instance_type)
        temp_pool = self.transformer.derive_temporary(new_pool)
        return ResizePlan(
            cluster_id=cluster_id,
            original=original,
            new_pool=new_pool,
            temp_pool=temp_pool,
            instance_type=new_pool.spec.platform.instance_type,
        )

    async def _confirmed(self, plan: ResizePlan) -> bool:
        self._enter(ResizePhase.CONFIRM)
        answer = self.confirm(plan)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def execute(self, plan: ResizePlan) -> None:
        """Runs the mutating phases of a confirmed plan."""
        original, new_pool, temp_pool = plan.original, plan.new_pool, plan.temp_pool

        self._enter(ResizePhase.CREATE_TEMPORARY_POOL)
        logger.info("creating temporary machinepool %s, with instance type %s", temp_pool.name, plan.instance_type)
        await self.pools.create(temp_pool)

        self._enter(ResizePhase.AWAIT_DOUBLE_CAPACITY)
        await self.node_watcher.await_ready_count(self.node_selector, plan.double_capacity_target)

        self._enter(ResizePhase.DELETE_ORIGINAL_POOL)
        logger.info(
            "deleting original machinepool %s, with instance type %s", original.name, plan.original_instance_type
        )
        await self.pools.delete(original)

        self._enter(ResizePhase.AWAIT_ORIGINAL_ABSENT)
        await self.pool_watcher.await_absence(original.namespace, original.name)

        self._enter(ResizePhase.CREATE_FINAL_POOL)
        logger.info("creating new machinepool %s, with instance type %s", new_pool.name, plan.instance_type)
        await self.pools.create(new_pool)

        # The original pool's nodes are gone; the temporary and the new pool now overlap.
        self._enter(ResizePhase.AWAIT_FINAL_CAPACITY)
        await self.node_watcher.await_ready_count(self.node_selector, plan.double_capacity_target)

        self._enter(ResizePhase.DELETE_TEMPORARY_POOL)
        logger.info("deleting temporary machinepool %s, with instance type %s", temp_pool.name, plan.instance_type)
        await self.pools.delete(temp_pool)

        self._enter(ResizePhase.AWAIT_TEMPORARY_ABSENT)
        await self.pool_watcher.await_absence(temp_pool.namespace, temp_pool.name)

        self._enter(ResizePhase.AWAIT_STEADY_REPLICA_COUNT)
        await self.node_watcher.await_node_count(self.node_selector, plan.steady_state_target)
        logger.info("found %d infra nodes, infra resize complete", plan.steady_state_target)

    async def notify(self, plan: ResizePlan) -> bool:
        """
        Sends the customer notification. Never raises: on failure the manual
        osdctl command is logged and handed to `on_manual_notification`.

        Returns:
            True if the service log was posted.
        """
        self._enter(ResizePhase.NOTIFY)
        service_log = build_service_log(plan.instance_type, plan.cluster_id)
        try:
            await self.notifier.send(service_log)
        except NotificationError as e:
            command = manual_command(service_log)
            logger.warning("Failed to generate service log: %s", e)
            logger.warning("Please manually send a service log to the customer with: %s", command)
            if self.on_manual_notification:
                self.on_manual_notification(command)
            return False
        logger.info("service log sent to cluster %s", plan.cluster_id)
        return True

    async def run(self, cluster_id: str, override_instance_type: Optional[str] = None) -> Optional[ResizePlan]:
        """
        Runs the whole campaign for `cluster_id`.

        Returns:
            The executed plan, or None if the operator declined it.
        """
        logger.info("resizing infra nodes for %s", cluster_id)
        original = await self.discover_original_pool(cluster_id)
        plan = self.compute_plan(cluster_id, original, override_instance_type)

        logger.info("planning to resize to instance type %s", plan.instance_type)
        if not await self._confirmed(plan):
            logger.info("resize declined, exiting without changes")
            self._enter(ResizePhase.DECLINED)
            return None

        await self.execute(plan)
        await self.notify(plan)
        self._enter(ResizePhase.DONE)
        return plan
