from __future__ import annotations

from dataclasses import dataclass

from .sentinels import NO_ROUTE_VARIANT


@dataclass(frozen=True, slots=True)
class StopInfo:
    """Stop metadata. Coordinates are kept as the provider's strings."""

    name: str
    lat: str
    lon: str


@dataclass(frozen=True, slots=True)
class ArrivalRecord:
    estimated_remaining_s: float
    route_short_name: str
    route_variant_id: int
    stop: StopInfo

    @property
    def has_forecast(self) -> bool:
        return self.route_variant_id != NO_ROUTE_VARIANT
