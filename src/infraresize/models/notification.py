# src/infraresize/models/notification.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ServiceLog(BaseModel):
    """A customer notification rendered from a managed-notifications template."""

    model_config = ConfigDict(frozen=True)

    cluster_id: str = Field(..., description="Cluster the service log is posted to")
    template: str = Field(..., description="URL of the JSON notification template")
    template_params: List[str] = Field(default_factory=list, description="KEY=VALUE template substitutions")
