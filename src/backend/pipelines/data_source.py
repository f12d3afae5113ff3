from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Protocol

from merchant_twin.errors import InvalidMerchantStateError
from merchant_twin.twin.generator import generate_batch
from merchant_twin.twin.registry import curated_merchants
from merchant_twin.twin.schema import Merchant

logger = logging.getLogger(__name__)


class FleetSource(Protocol):
    def load_merchants(self) -> List[Merchant]:
        """Return validated merchant snapshots for a fleet scan."""
        ...


def get_fleet_source(name: str, **kwargs: Any) -> FleetSource:
    """Resolve a fleet source implementation by name (curated|generated|file)."""
    source = (name or "").strip().lower()
    if source in ("curated", ""):
        return CuratedFleetSource()
    if source == "generated":
        return GeneratedFleetSource(count=kwargs.get("count", 25), seed=kwargs.get("seed"))
    if source == "file":
        path = kwargs.get("path")
        if not path:
            raise ValueError("The 'file' fleet source requires a path.")
        return FileFleetSource(Path(path))
    raise ValueError(f"Unknown fleet source '{name}' (expected 'curated', 'generated' or 'file').")


class CuratedFleetSource:
    def load_merchants(self) -> List[Merchant]:
        return list(curated_merchants())


class GeneratedFleetSource:
    def __init__(self, count: int = 25, seed: Optional[int] = None) -> None:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self.count = count
        self.seed = seed

    def load_merchants(self) -> List[Merchant]:
        return generate_batch(self.count, seed=self.seed)


class FileFleetSource:
    """Reads a JSON array of merchant records."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load_merchants(self) -> List[Merchant]:
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"{self.path} must contain a JSON array of merchant records")

        merchants: List[Merchant] = []
        for index, record in enumerate(raw):
            if not isinstance(record, dict):
                raise InvalidMerchantStateError(
                    f"{self.path}: record {index} is not an object",
                    problems=[f"record {index}: expected object, got {type(record).__name__}"],
                )
            merchants.append(Merchant.from_record(record))
        logger.info("Loaded %d merchants from %s", len(merchants), self.path)
        return merchants
