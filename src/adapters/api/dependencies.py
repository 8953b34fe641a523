from __future__ import annotations

from src.adapters.config import TransitRuntimeConfig
from src.adapters.upstream.http_transit_info_provider import HttpTransitInfoProvider
from src.app.services.tracking_view_service import TrackingViewService


def get_tracking_view_service() -> TrackingViewService:
    cfg = TransitRuntimeConfig.from_env()

    provider = HttpTransitInfoProvider(
        base_url=cfg.base_url,
        arrival_path=cfg.arrival_path,
        location_path=cfg.location_path,
        headers_raw=cfg.headers_raw,
        timeout_s=cfg.timeout_s,
    )

    return TrackingViewService(
        provider=provider,
        stop_ids=cfg.stop_ids,
        line_ids=cfg.line_ids,
        max_concurrency=cfg.max_concurrency,
    )
