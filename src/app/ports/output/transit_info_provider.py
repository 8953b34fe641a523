from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import ArrivalRecord, LocationRecord


class ITransitInfoProvider(ABC):
    """Port for per-stop arrival forecasts and per-line vehicle locations.

    Implementations raise `UpstreamError` subclasses on failure; no transport or
    decoding library exception may escape.
    """

    @abstractmethod
    async def fetch_arrival(self, stop_id: str) -> ArrivalRecord:
        """Return the soonest listed arrival for a stop."""

    @abstractmethod
    async def fetch_location(self, line_id: str) -> LocationRecord:
        """Return the first listed vehicle location for a line."""
