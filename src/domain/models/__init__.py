from .arrival import ArrivalRecord, StopInfo
from .location import LocationRecord
from .sentinels import (
    LATITUDE_NOT_DETECTED,
    LONGITUDE_NOT_DETECTED,
    NO_FORECAST_SECONDS,
    NO_ROUTE_VARIANT,
    SPEED_NOT_DETECTED,
    UNKNOWN_ROUTE_NAME,
    UNMATCHED_POSITION,
)
from .tracking import TrackingRecord

__all__ = [
    "ArrivalRecord",
    "LocationRecord",
    "StopInfo",
    "TrackingRecord",
    "LATITUDE_NOT_DETECTED",
    "LONGITUDE_NOT_DETECTED",
    "NO_FORECAST_SECONDS",
    "NO_ROUTE_VARIANT",
    "SPEED_NOT_DETECTED",
    "UNKNOWN_ROUTE_NAME",
    "UNMATCHED_POSITION",
]
