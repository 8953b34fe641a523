from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from src.adapters.config import (
    DEFAULT_ARRIVAL_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_LOCATION_PATH,
    parse_headers,
)
from src.adapters.upstream.payloads import LineVehiclesPayload, StopArrivalPayload
from src.app.ports.output import ITransitInfoProvider
from src.domain.exceptions import DecodeFailure, UpstreamNotFound, UpstreamUnavailable
from src.domain.models import ArrivalRecord, LocationRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpTransitInfoProvider(ITransitInfoProvider):
    """Fetches stop arrivals and line vehicles from the upstream JSON API.

    Env vars (used when the matching field is left as None):
      - TRANSIT_API_BASE_URL
      - TRANSIT_ARRIVAL_PATH: path template with a `{stop_id}` placeholder
      - TRANSIT_LOCATION_PATH: path template with a `{line_id}` placeholder
      - TRANSIT_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - TRANSIT_TIMEOUT_S: request timeout (default 5)

    Notes:
      - No caching and no retries; every call hits the upstream.
      - `transport` lets tests plug in an `httpx.MockTransport`.
    """

    base_url: str | None = None
    arrival_path: str | None = None
    location_path: str | None = None
    headers_raw: str | None = None
    timeout_s: float = 5.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("TRANSIT_API_BASE_URL", DEFAULT_BASE_URL)
        if self.arrival_path is None:
            self.arrival_path = os.getenv("TRANSIT_ARRIVAL_PATH", DEFAULT_ARRIVAL_PATH)
        if self.location_path is None:
            self.location_path = os.getenv(
                "TRANSIT_LOCATION_PATH", DEFAULT_LOCATION_PATH
            )
        if self.headers_raw is None:
            self.headers_raw = os.getenv("TRANSIT_HEADERS")
        if os.getenv("TRANSIT_TIMEOUT_S"):
            self.timeout_s = float(os.environ["TRANSIT_TIMEOUT_S"])

    async def fetch_arrival(self, stop_id: str) -> ArrivalRecord:
        path = (self.arrival_path or "").format(stop_id=stop_id)
        body = await self._get_json(path, resource="arrival", key=stop_id)
        try:
            return StopArrivalPayload.model_validate(body).to_arrival()
        except (ValidationError, ValueError) as exc:
            raise self._decode_failure(exc, resource="arrival", key=stop_id) from exc

    async def fetch_location(self, line_id: str) -> LocationRecord:
        path = (self.location_path or "").format(line_id=line_id)
        body = await self._get_json(path, resource="location", key=line_id)
        try:
            return LineVehiclesPayload.model_validate(body).to_location()
        except (ValidationError, ValueError) as exc:
            raise self._decode_failure(exc, resource="location", key=line_id) from exc

    async def _get_json(self, path: str, *, resource: str, key: str) -> Any:
        url = (self.base_url or "").rstrip("/") + path
        logger.debug("GET %s (%s %s)", url, resource, key)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                resp = await client.get(url, headers=parse_headers(self.headers_raw))
        except httpx.HTTPError as exc:
            logger.warning("Upstream %s lookup failed for %s: %s", resource, key, exc)
            raise UpstreamUnavailable(
                f"upstream request failed: {exc.__class__.__name__}",
                resource=resource,
                key=key,
            ) from exc

        if resp.status_code == 404:
            logger.warning("Upstream has no %s for %s", resource, key)
            raise UpstreamNotFound(
                "No such id", resource=resource, key=key, status_code=404
            )
        if resp.status_code >= 400:
            logger.warning(
                "Upstream %s lookup for %s answered %s",
                resource,
                key,
                resp.status_code,
            )
            raise UpstreamUnavailable(
                f"upstream answered {resp.status_code}",
                resource=resource,
                key=key,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise self._decode_failure(exc, resource=resource, key=key) from exc

    @staticmethod
    def _decode_failure(exc: Exception, *, resource: str, key: str) -> DecodeFailure:
        logger.warning("Could not decode upstream %s for %s: %s", resource, key, exc)
        return DecodeFailure(
            "Failed to parse the result", resource=resource, key=key
        )
