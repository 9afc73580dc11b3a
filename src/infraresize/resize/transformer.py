# src/infraresize/resize/transformer.py
"""
Derives the MachinePools of a resize campaign from the pool found on the
control plane. Everything here works on in-memory copies; nothing is sent
to the API.
"""

import logging
from typing import Optional

from ..core.exceptions import UnsupportedReplicaCount
from ..models.machine_pool import MachinePool
from .catalog import InstanceSizeCatalog

logger = logging.getLogger(__name__)

DEFAULT_TEMP_SUFFIX = "2"


class PoolSpecTransformer:
    """Builds resized and temporary MachinePool specifications."""

    def __init__(self, catalog: InstanceSizeCatalog, temp_suffix: str = DEFAULT_TEMP_SUFFIX):
        self.catalog = catalog
        self.temp_suffix = temp_suffix

    def target_instance_type(self, original: MachinePool, override_instance_type: Optional[str] = None) -> str:
        """
        Returns the instance type `original` should be resized to.

        Raises:
            UnsupportedPlatform: If the pool has neither an AWS nor a GCP platform block.
            UnsupportedInstanceType: If no override is given and the catalog has no next size.
        """
        platform = original.spec.platform
        # Resolving the provider first rejects unsupported platforms even when an override is given.
        provider = platform.provider
        if override_instance_type:
            logger.info("using override instance type: %s", override_instance_type)
            return override_instance_type

        current = platform.instance_type
        next_size = self.catalog.next_size(provider, current)
        logger.info("resizing %s instance type %s to %s", provider.value, current, next_size)
        return next_size

    def derive_resized(self, original: MachinePool, override_instance_type: Optional[str] = None) -> MachinePool:
        """
        Returns a copy of `original` with server-assigned fields cleared and the
        instance type of its provider replaced.

        Raises:
            UnsupportedReplicaCount: If the pool has no fixed replica count of at least 1.
        """
        # Every capacity target is a multiple of the replica count.
        if original.replicas is None or original.replicas < 1:
            raise UnsupportedReplicaCount(original.name, original.replicas)

        instance_type = self.target_instance_type(original, override_instance_type)

        new_pool = original.model_copy(deep=True)
        meta = new_pool.metadata
        meta.creation_timestamp = None
        meta.finalizers = None
        meta.resource_version = None
        meta.generation = None
        meta.self_link = None
        meta.uid = None
        new_pool.status = None

        new_pool.spec.platform = new_pool.spec.platform.with_instance_type(instance_type)
        return new_pool

    def derive_temporary(self, new_pool: MachinePool) -> MachinePool:
        """
        Returns a same-size sibling of `new_pool` whose resource name and logical
        pool name carry the temporary suffix. The replica count is unchanged.
        """
        temp_pool = new_pool.model_copy(deep=True)
        temp_pool.metadata.name = f"{temp_pool.metadata.name}{self.temp_suffix}"
        temp_pool.spec.name = f"{temp_pool.spec.name}{self.temp_suffix}"
        return temp_pool
