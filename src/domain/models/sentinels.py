from __future__ import annotations

# Reserved route-variant id meaning "no route variant known".
NO_ROUTE_VARIANT = -1
NO_FORECAST_SECONDS = -1.0
UNKNOWN_ROUTE_NAME = "Unknown Route Name"

LATITUDE_NOT_DETECTED = "Bus Latitude Not Detected"
LONGITUDE_NOT_DETECTED = "Bus Longitude Not Detected"
SPEED_NOT_DETECTED = "Bus Speed Not Detected"

# Position value used when a stop's route variant has no fetched location.
UNMATCHED_POSITION = ""
