# src/infraresize/models/catalog.py

from pydantic import BaseModel, ConfigDict, Field

from .machine_pool import CloudProvider


class CatalogEntry(BaseModel):
    """
    One step of an instance size ladder.

    Attributes:
        provider: Cloud provider the instance types belong to
        current: Instance type found on the pool (e.g., 'm5.xlarge', 'custom-4-32768-ext')
        next: Next larger instance type to resize to
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    provider: CloudProvider = Field(..., description="Cloud provider")
    current: str = Field(..., min_length=1, description="Current instance type")
    next: str = Field(..., min_length=1, description="Next larger instance type")
