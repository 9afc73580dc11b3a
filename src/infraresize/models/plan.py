# src/infraresize/models/plan.py

from pydantic import BaseModel, ConfigDict, Field

from .machine_pool import MachinePool


class ResizePlan(BaseModel):
    """
    Everything one resize campaign needs, computed before the first mutation.

    The temporary and the final pool always carry the same instance type;
    only their names and lifetimes differ.
    """

    model_config = ConfigDict(frozen=True)

    cluster_id: str = Field(..., description="Cluster identifier the campaign runs against")
    original: MachinePool = Field(..., description="Infra pool as found on the control plane")
    new_pool: MachinePool = Field(..., description="Permanent replacement, created after the original is gone")
    temp_pool: MachinePool = Field(..., description="Same-size sibling providing the capacity overlap")
    instance_type: str = Field(..., description="Instance type of both the temporary and the new pool")

    @property
    def original_replicas(self) -> int:
        return self.original.replicas

    @property
    def original_instance_type(self) -> str:
        return self.original.spec.platform.instance_type

    @property
    def double_capacity_target(self) -> int:
        """Ready infra nodes expected while two pools of the original size coexist."""
        return self.original_replicas * 2

    @property
    def steady_state_target(self) -> int:
        return self.original_replicas
