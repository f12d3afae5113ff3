from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

DATA_SOURCES = ("curated", "generated", "file")


@dataclass(frozen=True)
class FleetSettings:
    data_source: str = "curated"
    fleet_size: int = 25
    seed: Optional[int] = None
    top_failures: int = 5
    log_level: str = "INFO"


def get_fleet_settings() -> FleetSettings:
    """
    Load fleet scan settings from environment variables.

    Reads:
      TWIN_DATA_SOURCE, TWIN_FLEET_SIZE, TWIN_SEED,
      TWIN_TOP_FAILURES, TWIN_LOG_LEVEL
    """
    data_source = (os.getenv("TWIN_DATA_SOURCE") or "curated").strip().lower()
    if data_source not in DATA_SOURCES:
        raise ValueError(f"TWIN_DATA_SOURCE must be one of {', '.join(DATA_SOURCES)} (got {data_source!r}).")

    return FleetSettings(
        data_source=data_source,
        fleet_size=_int_env("TWIN_FLEET_SIZE", 25, minimum=1),
        seed=_optional_int_env("TWIN_SEED"),
        top_failures=_int_env("TWIN_TOP_FAILURES", 5, minimum=0),
        log_level=(os.getenv("TWIN_LOG_LEVEL") or "INFO").strip().upper(),
    )


def _optional_int_env(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer (got {raw!r}).") from exc


def _int_env(name: str, default: int, *, minimum: int) -> int:
    value = _optional_int_env(name)
    if value is None:
        return default
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum} (got {value}).")
    return value
