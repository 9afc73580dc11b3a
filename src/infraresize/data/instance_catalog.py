# src/infraresize/data/instance_catalog.py

"""
Instance size ladders used to pick the next infra node size.

AWS infra nodes move from general purpose m5 onto the memory optimized r5
family and then climb it; GCP infra nodes climb the extended-memory custom
machine types.
"""

import csv
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from ..models.catalog import CatalogEntry

logger = logging.getLogger(__name__)

DEFAULT_LADDER_PATH = Path(__file__).parent / "instance_ladder.csv"


def load_catalog_entries(path: Optional[Path] = None) -> List[CatalogEntry]:
    """
    Load ladder steps from a CSV file with a `provider,current,next` header,
    using Pydantic for validation. Invalid rows are skipped.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    ladder_file = Path(path) if path else DEFAULT_LADDER_PATH
    entries = []
    try:
        with open(ladder_file, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                # DictReader collects surplus columns under the None key.
                extra = row.pop(None, None)
                if extra:
                    logger.warning(
                        "Skipping invalid catalog row %d in %s: unexpected extra columns %s", line_no, ladder_file, extra
                    )
                    continue
                try:
                    entries.append(CatalogEntry.model_validate(row))
                except ValidationError as e:
                    logger.warning("Skipping invalid catalog row %d in %s: %s", line_no, ladder_file, e)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ConfigurationError(f"failed to read instance catalog {ladder_file}: {e}") from e

    logger.debug("Loaded %d instance catalog entries from %s", len(entries), ladder_file)
    return entries
