# src/infraresize/resize/catalog.py

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from ..core.exceptions import UnsupportedInstanceType
from ..data.instance_catalog import load_catalog_entries
from ..models.catalog import CatalogEntry
from ..models.machine_pool import CloudProvider

logger = logging.getLogger(__name__)


class InstanceSizeCatalog:
    """
    Maps an instance type to the next larger one, keyed by (provider, instance type)
    so identical names on two providers can never be confused.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._ladder: Dict[Tuple[CloudProvider, str], str] = {}
        for entry in entries:
            key = (entry.provider, entry.current)
            if key in self._ladder and self._ladder[key] != entry.next:
                logger.warning(
                    "Catalog entry %s/%s redefined: %s -> %s",
                    entry.provider.value,
                    entry.current,
                    self._ladder[key],
                    entry.next,
                )
            self._ladder[key] = entry.next

    @classmethod
    def from_csv(cls, path: Optional[Union[str, Path]] = None) -> "InstanceSizeCatalog":
        """Builds a catalog from a ladder CSV; the bundled ladder when no path is given."""
        return cls(load_catalog_entries(Path(path) if path else None))

    def next_size(self, provider: CloudProvider, instance_type: str) -> str:
        try:
            return self._ladder[(CloudProvider(provider), instance_type)]
        except KeyError:
            raise UnsupportedInstanceType(CloudProvider(provider).value, instance_type) from None

    def supports(self, provider: CloudProvider, instance_type: str) -> bool:
        return (CloudProvider(provider), instance_type) in self._ladder

    def __len__(self) -> int:
        return len(self._ladder)
