from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models import ArrivalRecord, LocationRecord, TrackingRecord


class _WireSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BusStopSchema(_WireSchema):
    name: str = Field(..., alias="busStopName")
    lat: str = Field(..., alias="busStopLatitude")
    lon: str = Field(..., alias="busStopLongitude")


class ArrivalSchema(_WireSchema):
    estimated_remaining_s: float = Field(..., alias="estimatedRemainingTime")
    route_name: str = Field(..., alias="routeName")
    route_variant_id: int = Field(..., alias="rv_id")
    stop: BusStopSchema = Field(..., alias="busStop")

    @classmethod
    def from_domain(cls, arrival: ArrivalRecord) -> "ArrivalSchema":
        return cls(
            estimated_remaining_s=arrival.estimated_remaining_s,
            route_name=arrival.route_short_name,
            route_variant_id=arrival.route_variant_id,
            stop=BusStopSchema(
                name=arrival.stop.name, lat=arrival.stop.lat, lon=arrival.stop.lon
            ),
        )


class LocationSchema(_WireSchema):
    route_name: str = Field(..., alias="routeName")
    route_variant_id: int = Field(..., alias="rv_id")
    lat: str = Field(..., alias="busCurrentLat")
    lon: str = Field(..., alias="busCurrentLong")
    speed: str = Field(..., alias="busCurrentSpeed")

    @classmethod
    def from_domain(cls, loc: LocationRecord) -> "LocationSchema":
        return cls(
            route_name=loc.route_name,
            route_variant_id=loc.route_variant_id,
            lat=loc.lat,
            lon=loc.lon,
            speed=loc.speed,
        )


class TrackingSchema(_WireSchema):
    arrival: ArrivalSchema = Field(..., alias="busStopArrivalInfo")
    current_lat: str = Field(..., alias="busCurrentLat")
    current_lon: str = Field(..., alias="busCurrentLong")
    current_speed: str = Field(..., alias="busCurrentSpeed")

    @classmethod
    def from_domain(cls, rec: TrackingRecord) -> "TrackingSchema":
        return cls(
            arrival=ArrivalSchema.from_domain(rec.arrival),
            current_lat=rec.current_lat,
            current_lon=rec.current_lon,
            current_speed=rec.current_speed,
        )
