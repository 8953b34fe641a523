from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://baseride.com"
DEFAULT_ARRIVAL_PATH = "/routes/api/platformbusarrival/{stop_id}/?format=json"
DEFAULT_LOCATION_PATH = "/routes/apigeo/routevariantvehicle/{line_id}/?format=json"

DEFAULT_STOP_IDS: tuple[str, ...] = (
    "378204", "383050", "378202", "383049", "382998", "378237", "378233", "378230",
    "378229", "378228", "378227", "382995", "378224", "378226", "383010", "383009",
    "383006", "383004", "378234", "383003", "378222", "383048", "378203", "382999",
    "378225", "383014", "383013", "383011", "377906", "383018", "383015", "378207",
)  # fmt: skip

DEFAULT_LINE_IDS: tuple[str, ...] = ("44478", "44479", "44480", "44481")


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_id_list(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated id list, keeping order and dropping blanks."""

    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def parse_headers(raw: str | None) -> dict[str, str]:
    """Parse headers given as 'Key:Value;Key2:Value2'."""

    raw = (raw or "").strip()
    if not raw:
        return {}
    headers: dict[str, str] = {}
    for part in raw.split(";"):
        part = part.strip()
        if not part or ":" not in part:
            continue
        k, v = part.split(":", 1)
        k = k.strip()
        if k:
            headers[k] = v.strip()
    return headers


@dataclass(frozen=True, slots=True)
class TransitRuntimeConfig:
    """Runtime settings for the upstream client and the tracking view.

    Env vars:
      - TRANSIT_API_BASE_URL
      - TRANSIT_ARRIVAL_PATH / TRANSIT_LOCATION_PATH: templated paths
      - TRANSIT_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - TRANSIT_TIMEOUT_S: per-call timeout (default 5)
      - TRANSIT_STOP_IDS / TRANSIT_LINE_IDS: comma-separated id lists
      - TRANSIT_MAX_CONCURRENCY: in-flight calls per fan-out group (default 8)
    """

    base_url: str = DEFAULT_BASE_URL
    arrival_path: str = DEFAULT_ARRIVAL_PATH
    location_path: str = DEFAULT_LOCATION_PATH
    headers_raw: str | None = None
    timeout_s: float = 5.0
    stop_ids: tuple[str, ...] = DEFAULT_STOP_IDS
    line_ids: tuple[str, ...] = DEFAULT_LINE_IDS
    max_concurrency: int = 8

    @staticmethod
    def from_env() -> "TransitRuntimeConfig":
        stop_ids = parse_id_list(os.getenv("TRANSIT_STOP_IDS")) or DEFAULT_STOP_IDS
        line_ids = parse_id_list(os.getenv("TRANSIT_LINE_IDS")) or DEFAULT_LINE_IDS

        return TransitRuntimeConfig(
            base_url=os.getenv("TRANSIT_API_BASE_URL", DEFAULT_BASE_URL),
            arrival_path=os.getenv("TRANSIT_ARRIVAL_PATH", DEFAULT_ARRIVAL_PATH),
            location_path=os.getenv("TRANSIT_LOCATION_PATH", DEFAULT_LOCATION_PATH),
            headers_raw=os.getenv("TRANSIT_HEADERS"),
            timeout_s=float(os.getenv("TRANSIT_TIMEOUT_S") or 5.0),
            stop_ids=stop_ids,
            line_ids=line_ids,
            max_concurrency=max(1, int(os.getenv("TRANSIT_MAX_CONCURRENCY") or 8)),
        )
