from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_tracking_view_service
from src.adapters.api.schemas.transit import (
    ArrivalSchema,
    LocationSchema,
    TrackingSchema,
)
from src.app.services.tracking_view_service import TrackingViewService
from src.domain.exceptions import DecodeFailure, UpstreamError, UpstreamUnavailable

router = APIRouter(tags=["transit"])


def _to_http_error(exc: UpstreamError) -> HTTPException:
    if isinstance(exc, UpstreamUnavailable):
        return HTTPException(status_code=404, detail="No such id")
    if isinstance(exc, DecodeFailure):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=502, detail="Upstream error")


@router.get("/busstop", response_model=list[ArrivalSchema])
async def list_arrivals(
    service: TrackingViewService = Depends(get_tracking_view_service),
) -> list[ArrivalSchema]:
    return [ArrivalSchema.from_domain(a) for a in await service.list_arrivals()]


@router.get("/busstop/{stop_id}", response_model=ArrivalSchema)
async def get_arrival(
    stop_id: str,
    service: TrackingViewService = Depends(get_tracking_view_service),
) -> ArrivalSchema:
    try:
        arrival = await service.get_arrival(stop_id)
    except UpstreamError as exc:
        raise _to_http_error(exc) from exc
    return ArrivalSchema.from_domain(arrival)


@router.get("/busline", response_model=list[LocationSchema])
async def list_locations(
    service: TrackingViewService = Depends(get_tracking_view_service),
) -> list[LocationSchema]:
    return [LocationSchema.from_domain(loc) for loc in await service.list_locations()]


@router.get("/busline/{line_id}", response_model=LocationSchema)
async def get_location(
    line_id: str,
    service: TrackingViewService = Depends(get_tracking_view_service),
) -> LocationSchema:
    try:
        loc = await service.get_location(line_id)
    except UpstreamError as exc:
        raise _to_http_error(exc) from exc
    return LocationSchema.from_domain(loc)


@router.get("/busevents", response_model=list[TrackingSchema])
async def list_events(
    service: TrackingViewService = Depends(get_tracking_view_service),
) -> list[TrackingSchema]:
    return [TrackingSchema.from_domain(r) for r in await service.build_tracking_view()]
