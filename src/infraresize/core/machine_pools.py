# src/infraresize/core/machine_pools.py
"""
Access to Hive MachinePool custom resources and the namespaces that hold them.

Reads go through the regular Hive client; create and delete go through the
admin client. Nothing is cached: every call reads the control plane.
"""

import logging
from typing import List, Optional

from kubernetes_asyncio import client
from kubernetes_asyncio.client.rest import ApiException
from pydantic import ValidationError

from ..models.machine_pool import HIVE_GROUP, HIVE_VERSION, MACHINE_POOL_PLURAL, MachinePool
from .exceptions import AmbiguousOrMissingNamespace, ControlPlaneError, InfraPoolNotFound, PoolNotFound

logger = logging.getLogger(__name__)


class MachinePoolClient:
    """Thin wrapper over the custom objects API for hive.openshift.io/v1 MachinePools."""

    def __init__(
        self,
        core_api: client.CoreV1Api,
        custom_api: client.CustomObjectsApi,
        admin_custom_api: Optional[client.CustomObjectsApi] = None,
    ):
        self.core_api = core_api
        self.custom_api = custom_api
        self.admin_custom_api = admin_custom_api or custom_api

    async def find_cluster_namespace(self, cluster_id: str, label_key: str) -> str:
        """
        Returns the single namespace labelled `label_key=cluster_id`.

        Raises:
            AmbiguousOrMissingNamespace: If zero or several namespaces match.
            ControlPlaneError: If the namespaces cannot be listed.
        """
        selector = f"{label_key}={cluster_id}"
        try:
            namespaces = await self.core_api.list_namespace(label_selector=selector)
        except ApiException as e:
            raise ControlPlaneError(f"failed to list namespaces with selector {selector}: {e.reason}") from e

        items = namespaces.items or []
        if len(items) != 1:
            raise AmbiguousOrMissingNamespace(
                f"expected 1 namespace, found {len(items)} namespaces with tag: {selector}"
            )

        name = items[0].metadata.name
        logger.info("found namespace: %s", name)
        return name

    async def list(self, namespace: str) -> List[MachinePool]:
        try:
            response = await self.custom_api.list_namespaced_custom_object(
                HIVE_GROUP, HIVE_VERSION, namespace, MACHINE_POOL_PLURAL
            )
        except ApiException as e:
            raise ControlPlaneError(f"failed to list machinepools in {namespace}: {e.reason}") from e
        return [self._parse(item) for item in response.get("items", [])]

    async def find_by_pool_name(self, namespace: str, pool_name: str) -> MachinePool:
        """
        Returns the MachinePool in `namespace` whose logical pool name is `pool_name`.

        Raises:
            InfraPoolNotFound: If no MachinePool carries that logical name.
        """
        for pool in await self.list(namespace):
            if pool.spec.name == pool_name:
                logger.info("found machinepool %s", pool.name)
                return pool
        raise InfraPoolNotFound(f"did not find the {pool_name} machinepool in namespace: {namespace}")

    async def get(self, namespace: str, name: str) -> MachinePool:
        """
        Raises:
            PoolNotFound: If the MachinePool does not exist.
            ControlPlaneError: For any other API failure.
        """
        try:
            response = await self.custom_api.get_namespaced_custom_object(
                HIVE_GROUP, HIVE_VERSION, namespace, MACHINE_POOL_PLURAL, name
            )
        except ApiException as e:
            if e.status == 404:
                raise PoolNotFound(f"machinepool {namespace}/{name} not found") from e
            raise ControlPlaneError(f"failed to get machinepool {namespace}/{name}: {e.reason}") from e
        return self._parse(response)

    async def create(self, pool: MachinePool) -> None:
        try:
            await self.admin_custom_api.create_namespaced_custom_object(
                HIVE_GROUP, HIVE_VERSION, pool.namespace, MACHINE_POOL_PLURAL, pool.to_api()
            )
        except ApiException as e:
            raise ControlPlaneError(f"failed to create machinepool {pool.namespace}/{pool.name}: {e.reason}") from e

    async def delete(self, pool: MachinePool) -> None:
        try:
            await self.admin_custom_api.delete_namespaced_custom_object(
                HIVE_GROUP, HIVE_VERSION, pool.namespace, MACHINE_POOL_PLURAL, pool.name
            )
        except ApiException as e:
            raise ControlPlaneError(f"failed to delete machinepool {pool.namespace}/{pool.name}: {e.reason}") from e

    @staticmethod
    def _parse(raw: dict) -> MachinePool:
        try:
            return MachinePool.model_validate(raw)
        except ValidationError as e:
            name = (raw.get("metadata") or {}).get("name", "<unknown>")
            raise ControlPlaneError(f"machinepool {name} has an unexpected shape: {e}") from e
