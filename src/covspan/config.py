from __future__ import annotations

import os
from dataclasses import dataclass


STRICT_REGIONS_ENV = "COVSPAN_STRICT_REGIONS"


def _str_to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class RegionCheckPolicy:
    """How the region validator reacts to a malformed region.

    Production runs drop the region. Development and test harnesses can turn
    on `fail_on_improper_region` so the drop also raises.
    """

    fail_on_improper_region: bool = False

    @classmethod
    def from_env(cls) -> RegionCheckPolicy:
        return cls(fail_on_improper_region=_str_to_bool(os.getenv(STRICT_REGIONS_ENV)))


def default_policy() -> RegionCheckPolicy:
    return RegionCheckPolicy.from_env()
