from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence, TypeVar

from src.app.ports.output import ITransitInfoProvider
from src.domain.exceptions import UpstreamError
from src.domain.models import (
    LATITUDE_NOT_DETECTED,
    LONGITUDE_NOT_DETECTED,
    SPEED_NOT_DETECTED,
    UNMATCHED_POSITION,
    ArrivalRecord,
    LocationRecord,
    TrackingRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def join_tracking(
    arrivals: Sequence[ArrivalRecord], locations: Sequence[LocationRecord]
) -> tuple[TrackingRecord, ...]:
    """Join arrivals to vehicle locations by route-variant id.

    - An arrival without a route variant gets the "Not Detected" literals.
    - An arrival whose route variant has no location gets UNMATCHED_POSITION.
    - When several locations share a route variant, the last one wins.
    """

    by_variant: dict[int, LocationRecord] = {}
    for loc in locations:
        by_variant[loc.route_variant_id] = loc

    out: list[TrackingRecord] = []
    for arrival in arrivals:
        if not arrival.has_forecast:
            out.append(
                TrackingRecord(
                    arrival=arrival,
                    current_lat=LATITUDE_NOT_DETECTED,
                    current_lon=LONGITUDE_NOT_DETECTED,
                    current_speed=SPEED_NOT_DETECTED,
                )
            )
            continue

        loc = by_variant.get(arrival.route_variant_id)
        if loc is None:
            out.append(
                TrackingRecord(
                    arrival=arrival,
                    current_lat=UNMATCHED_POSITION,
                    current_lon=UNMATCHED_POSITION,
                    current_speed=UNMATCHED_POSITION,
                )
            )
            continue

        out.append(
            TrackingRecord(
                arrival=arrival,
                current_lat=loc.lat,
                current_lon=loc.lon,
                current_speed=loc.speed,
            )
        )

    return tuple(out)


@dataclass(slots=True)
class TrackingViewService:
    """Correlates per-stop arrivals with per-line vehicle locations.

    The stop and line ids are fixed at construction. Bulk views are
    best-effort: an id whose lookup fails is logged and left out.
    """

    provider: ITransitInfoProvider
    stop_ids: tuple[str, ...] = ()
    line_ids: tuple[str, ...] = ()
    max_concurrency: int = 8

    async def get_arrival(self, stop_id: str) -> ArrivalRecord:
        return await self.provider.fetch_arrival(stop_id)

    async def get_location(self, line_id: str) -> LocationRecord:
        return await self.provider.fetch_location(line_id)

    async def list_arrivals(self) -> tuple[ArrivalRecord, ...]:
        return await self._fan_out(self.stop_ids, self.provider.fetch_arrival)

    async def list_locations(self) -> tuple[LocationRecord, ...]:
        return await self._fan_out(self.line_ids, self.provider.fetch_location)

    async def build_tracking_view(self) -> tuple[TrackingRecord, ...]:
        arrivals, locations = await asyncio.gather(
            self.list_arrivals(), self.list_locations()
        )
        return join_tracking(arrivals, locations)

    async def _fan_out(
        self, ids: Sequence[str], fetch: Callable[[str], Awaitable[T]]
    ) -> tuple[T, ...]:
        sem = asyncio.Semaphore(max(1, self.max_concurrency))

        async def one(item_id: str) -> T | None:
            async with sem:
                try:
                    return await fetch(item_id)
                except UpstreamError as exc:
                    logger.warning(
                        "Dropping %s %s from view: %s",
                        exc.resource or "item",
                        item_id,
                        exc.__class__.__name__,
                    )
                    return None

        # gather keeps input order.
        results = await asyncio.gather(*(one(i) for i in ids))
        return tuple(r for r in results if r is not None)
