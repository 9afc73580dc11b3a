# src/infraresize/models/machine_pool.py

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import UnsupportedPlatform

HIVE_GROUP = "hive.openshift.io"
HIVE_VERSION = "v1"
MACHINE_POOL_PLURAL = "machinepools"
MACHINE_POOL_KIND = "MachinePool"


class CloudProvider(str, Enum):
    """Cloud providers whose MachinePool platform block can be resized."""

    AWS = "aws"
    GCP = "gcp"


class _HiveModel(BaseModel):
    # Fields the tool does not know about are kept so a derived pool
    # carries the whole original specification back to the API.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ObjectMeta(_HiveModel):
    name: str
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    finalizers: Optional[List[str]] = None
    creation_timestamp: Optional[str] = Field(None, alias="creationTimestamp")
    resource_version: Optional[str] = Field(None, alias="resourceVersion")
    generation: Optional[int] = None
    self_link: Optional[str] = Field(None, alias="selfLink")
    uid: Optional[str] = None


class InstanceTypePlatform(_HiveModel):
    """AWS and GCP platform blocks both carry the instance type under `type`."""

    instance_type: str = Field(..., alias="type")


class MachinePoolPlatform(_HiveModel):
    """
    Provider-specific part of a MachinePool. Exactly one of the provider
    blocks is expected to be populated.
    """

    aws: Optional[InstanceTypePlatform] = None
    gcp: Optional[InstanceTypePlatform] = None

    @property
    def provider(self) -> CloudProvider:
        populated = [p for p in CloudProvider if getattr(self, p.value) is not None]
        if len(populated) != 1:
            raise UnsupportedPlatform("unsupported platform, only AWS and GCP are supported")
        return populated[0]

    @property
    def instance_type(self) -> str:
        return getattr(self, self.provider.value).instance_type

    def with_instance_type(self, instance_type: str) -> "MachinePoolPlatform":
        """Returns a copy with the populated provider block's instance type replaced."""
        provider = self.provider
        block = getattr(self, provider.value).model_copy(update={"instance_type": instance_type})
        return self.model_copy(update={provider.value: block})


class MachinePoolSpec(_HiveModel):
    name: str
    # Unset on autoscaling pools.
    replicas: Optional[int] = None
    platform: MachinePoolPlatform = Field(default_factory=MachinePoolPlatform)


class MachinePool(_HiveModel):
    """
    Pydantic model for a Hive MachinePool custom resource.

    Attributes:
        metadata: Resource identity, including the server-assigned fields
        spec: Logical pool name, replica count and provider platform
        status: Owned by the Hive reconciler; never sent back on create
    """

    api_version: str = Field(f"{HIVE_GROUP}/{HIVE_VERSION}", alias="apiVersion")
    kind: str = MACHINE_POOL_KIND
    metadata: ObjectMeta
    spec: MachinePoolSpec
    status: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.namespace

    @property
    def replicas(self) -> Optional[int]:
        return self.spec.replicas

    def to_api(self) -> Dict[str, Any]:
        """Serializes the pool into the body expected by the custom objects API."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
