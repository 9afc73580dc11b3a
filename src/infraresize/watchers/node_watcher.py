# src/infraresize/watchers/node_watcher.py

import logging
from typing import List

from kubernetes_asyncio import client
from kubernetes_asyncio.client.rest import ApiException

from ..core.exceptions import ControlPlaneError
from ..core.polling import poll_until
from .base_watcher import BaseWatcher

logger = logging.getLogger(__name__)


def is_node_ready(node) -> bool:
    """True when the node reports a Ready condition with status True."""
    status = getattr(node, "status", None)
    conditions = (status and status.conditions) or []
    return any(cond.type == "Ready" and cond.status == "True" for cond in conditions)


class NodeReadinessWatcher(BaseWatcher):
    """Waits on the nodes matching a label selector in the managed cluster."""

    def __init__(self, core_api: client.CoreV1Api, poll_interval: float = None, timeout: float = None):
        super().__init__(poll_interval, timeout)
        self.core_api = core_api

    async def _list_nodes(self, label_selector: str) -> List:
        try:
            nodes = await self.core_api.list_node(label_selector=label_selector)
        except ApiException as e:
            raise ControlPlaneError(f"failed to list nodes with selector {label_selector}: {e.reason}") from e
        return nodes.items or []

    async def await_ready_count(self, label_selector: str, target_count: int, poll_interval: float = None,
                                timeout: float = None) -> int:
        """
        Blocks until at least `target_count` nodes matching `label_selector` report Ready.

        Returns:
            The number of Ready nodes observed on the successful tick.

        Raises:
            ControlPlaneError: If listing nodes fails; the wait is not retried.
            WaitTimedOut: If the target is not reached within the timeout.
        """

        async def check():
            ready = 0
            for node in await self._list_nodes(label_selector):
                if is_node_ready(node):
                    ready += 1
                    logger.debug("found node %s reporting Ready", node.metadata.name)
            if ready >= target_count:
                logger.info("found %d nodes matching %s reporting Ready", ready, label_selector)
                return True, ready
            logger.info("found %d/%d nodes matching %s reporting Ready, continuing to wait",
                        ready, target_count, label_selector)
            return False, ready

        logger.info("waiting for %d nodes matching %s to be reporting Ready", target_count, label_selector)
        return await poll_until(
            check,
            poll_interval if poll_interval is not None else self.poll_interval,
            timeout if timeout is not None else self.timeout,
            f"{target_count} Ready nodes matching {label_selector}",
        )

    async def await_node_count(self, label_selector: str, target_count: int, poll_interval: float = None,
                               timeout: float = None) -> int:
        """
        Blocks until exactly `target_count` nodes match `label_selector`,
        regardless of their readiness.
        """

        async def check():
            count = len(await self._list_nodes(label_selector))
            if count == target_count:
                logger.info("found %d nodes matching %s", count, label_selector)
                return True, count
            logger.info("found %d nodes matching %s, waiting for %d", count, label_selector, target_count)
            return False, count

        logger.info("waiting for node count matching %s to return to: %d", label_selector, target_count)
        return await poll_until(
            check,
            poll_interval if poll_interval is not None else self.poll_interval,
            timeout if timeout is not None else self.timeout,
            f"exactly {target_count} nodes matching {label_selector}",
        )
