from __future__ import annotations

from dataclasses import dataclass

from .arrival import ArrivalRecord


@dataclass(frozen=True, slots=True)
class TrackingRecord:
    """An arrival joined with the current position of the vehicle serving it."""

    arrival: ArrivalRecord
    current_lat: str
    current_lon: str
    current_speed: str
