"""Pydantic models for the upstream JSON payloads.

Only the fields the domain needs are declared; everything else in the
(deeply nested) provider responses is ignored.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from src.domain.models import (
    LATITUDE_NOT_DETECTED,
    LONGITUDE_NOT_DETECTED,
    NO_FORECAST_SECONDS,
    NO_ROUTE_VARIANT,
    SPEED_NOT_DETECTED,
    UNKNOWN_ROUTE_NAME,
    ArrivalRecord,
    LocationRecord,
    StopInfo,
)


def _as_text(value: Any) -> Any:
    # Coordinates come back as strings or bare numbers depending on endpoint.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


Text = Annotated[str, BeforeValidator(_as_text)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # A JSON null is treated like a missing field so the default applies.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class RoutePayload(_Payload):
    short_name: str | None = None


class ForecastPayload(_Payload):
    forecast_seconds: float = NO_FORECAST_SECONDS
    route: RoutePayload | None = None
    rv_id: int = NO_ROUTE_VARIANT


class GeometryPayload(_Payload):
    lat: Text
    lon: Text


class StopArrivalPayload(_Payload):
    name: str = ""
    forecast: list[ForecastPayload] = Field(default_factory=list)
    geometry: list[GeometryPayload] = Field(default_factory=list)

    def to_arrival(self) -> ArrivalRecord:
        """Normalize to an `ArrivalRecord`.

        Uses the first forecast entry and assumes the provider lists the
        soonest arrival first; entries are not re-sorted.
        Raises ValueError when the stop has no geometry.
        """

        if not self.geometry:
            raise ValueError("stop payload has no geometry")

        point = self.geometry[0]
        stop = StopInfo(name=self.name, lat=point.lat, lon=point.lon)

        if not self.forecast:
            return ArrivalRecord(
                estimated_remaining_s=NO_FORECAST_SECONDS,
                route_short_name=UNKNOWN_ROUTE_NAME,
                route_variant_id=NO_ROUTE_VARIANT,
                stop=stop,
            )

        first = self.forecast[0]
        short_name = first.route.short_name if first.route is not None else None
        return ArrivalRecord(
            estimated_remaining_s=first.forecast_seconds,
            route_short_name=short_name or UNKNOWN_ROUTE_NAME,
            route_variant_id=first.rv_id,
            stop=stop,
        )


class VehiclePayload(_Payload):
    lat: Text = LATITUDE_NOT_DETECTED
    lon: Text = LONGITUDE_NOT_DETECTED
    speed: Text = SPEED_NOT_DETECTED


class LineVehiclesPayload(_Payload):
    id: int
    routename: str = ""
    vehicles: list[VehiclePayload] = Field(default_factory=list)

    def to_location(self) -> LocationRecord:
        """Normalize to a `LocationRecord` using the first listed vehicle."""

        vehicle = self.vehicles[0] if self.vehicles else VehiclePayload()
        return LocationRecord(
            route_name=self.routename,
            route_variant_id=self.id,
            lat=vehicle.lat,
            lon=vehicle.lon,
            speed=vehicle.speed,
        )
