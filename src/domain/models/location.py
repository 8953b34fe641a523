from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LocationRecord:
    route_name: str
    route_variant_id: int
    lat: str
    lon: str
    speed: str
