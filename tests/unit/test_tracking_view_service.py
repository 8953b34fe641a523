from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from src.app.services.tracking_view_service import TrackingViewService, join_tracking
from src.domain.exceptions import DecodeFailure, UpstreamUnavailable
from src.domain.models import (
    LATITUDE_NOT_DETECTED,
    LONGITUDE_NOT_DETECTED,
    NO_FORECAST_SECONDS,
    NO_ROUTE_VARIANT,
    SPEED_NOT_DETECTED,
    UNKNOWN_ROUTE_NAME,
    UNMATCHED_POSITION,
    ArrivalRecord,
    LocationRecord,
    StopInfo,
)


def _arrival(rv_id: int, seconds: float = 60.0, name: str = "44A") -> ArrivalRecord:
    return ArrivalRecord(
        estimated_remaining_s=seconds,
        route_short_name=name,
        route_variant_id=rv_id,
        stop=StopInfo(name=f"Stop {rv_id}", lat="1.0", lon="2.0"),
    )


def _no_forecast() -> ArrivalRecord:
    return ArrivalRecord(
        estimated_remaining_s=NO_FORECAST_SECONDS,
        route_short_name=UNKNOWN_ROUTE_NAME,
        route_variant_id=NO_ROUTE_VARIANT,
        stop=StopInfo(name="Quiet stop", lat="1.0", lon="2.0"),
    )


def _location(rv_id: int, lat: str = "1.23", lon: str = "4.56") -> LocationRecord:
    return LocationRecord(
        route_name="44", route_variant_id=rv_id, lat=lat, lon=lon, speed="30"
    )


@dataclass(slots=True)
class FakeTransitInfoProvider:
    arrivals: dict[str, ArrivalRecord | Exception] = field(default_factory=dict)
    locations: dict[str, LocationRecord | Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def fetch_arrival(self, stop_id: str) -> ArrivalRecord:
        self.calls.append(f"stop:{stop_id}")
        result = self.arrivals[stop_id]
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_location(self, line_id: str) -> LocationRecord:
        self.calls.append(f"line:{line_id}")
        result = self.locations[line_id]
        if isinstance(result, Exception):
            raise result
        return result


def test_matching_route_variant_copies_vehicle_position() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"378204": _arrival(7, seconds=120.5)},
        locations={"44478": _location(7)},
    )
    svc = TrackingViewService(
        provider=provider, stop_ids=("378204",), line_ids=("44478",)
    )

    (rec,) = asyncio.run(svc.build_tracking_view())

    assert rec.arrival.estimated_remaining_s == 120.5
    assert rec.arrival.route_variant_id == 7
    assert (rec.current_lat, rec.current_lon, rec.current_speed) == (
        "1.23",
        "4.56",
        "30",
    )


def test_no_forecast_arrival_gets_not_detected_regardless_of_lines() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"s1": _no_forecast()},
        locations={"l1": _location(NO_ROUTE_VARIANT)},
    )
    svc = TrackingViewService(provider=provider, stop_ids=("s1",), line_ids=("l1",))

    (rec,) = asyncio.run(svc.build_tracking_view())

    assert rec.current_lat == LATITUDE_NOT_DETECTED
    assert rec.current_lon == LONGITUDE_NOT_DETECTED
    assert rec.current_speed == SPEED_NOT_DETECTED


def test_failed_line_leaves_matching_stop_unmatched() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"s1": _arrival(7)},
        locations={"l1": UpstreamUnavailable("down", resource="location", key="l1")},
    )
    svc = TrackingViewService(provider=provider, stop_ids=("s1",), line_ids=("l1",))

    (rec,) = asyncio.run(svc.build_tracking_view())

    assert rec.current_lat == UNMATCHED_POSITION
    assert rec.current_lon == UNMATCHED_POSITION
    assert rec.current_speed == UNMATCHED_POSITION
    assert rec.current_lat != LATITUDE_NOT_DETECTED


def test_failed_stops_are_dropped_and_order_is_kept() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={
            "a": _arrival(1),
            "b": UpstreamUnavailable("down", resource="arrival", key="b"),
            "c": _arrival(3),
            "d": DecodeFailure("bad", resource="arrival", key="d"),
            "e": _arrival(5),
        },
    )
    svc = TrackingViewService(provider=provider, stop_ids=("a", "b", "c", "d", "e"))

    out = asyncio.run(svc.build_tracking_view())

    assert len(out) <= len(svc.stop_ids)
    assert [r.arrival.route_variant_id for r in out] == [1, 3, 5]


def test_order_kept_when_fetched_sequentially() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"a": _arrival(1), "b": _arrival(2)},
        locations={"x": _location(1), "y": _location(2)},
    )
    svc = TrackingViewService(
        provider=provider, stop_ids=("a", "b"), line_ids=("x", "y"), max_concurrency=1
    )

    out = asyncio.run(svc.build_tracking_view())

    assert [r.arrival.route_variant_id for r in out] == [1, 2]
    assert [c for c in provider.calls if c.startswith("stop:")] == ["stop:a", "stop:b"]


def test_duplicate_route_variant_last_line_wins() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"s1": _arrival(7)},
        locations={"l1": _location(7, lat="first"), "l2": _location(7, lat="second")},
    )
    svc = TrackingViewService(
        provider=provider, stop_ids=("s1",), line_ids=("l1", "l2")
    )

    (rec,) = asyncio.run(svc.build_tracking_view())

    assert rec.current_lat == "second"


def test_view_is_idempotent_for_fixed_upstream() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"s1": _arrival(7), "s2": _no_forecast(), "s3": _arrival(8)},
        locations={"l1": _location(7)},
    )
    svc = TrackingViewService(
        provider=provider, stop_ids=("s1", "s2", "s3"), line_ids=("l1",)
    )

    assert asyncio.run(svc.build_tracking_view()) == asyncio.run(
        svc.build_tracking_view()
    )


def test_total_outage_gives_empty_view() -> None:
    err = UpstreamUnavailable("down")
    provider = FakeTransitInfoProvider(
        arrivals={"s1": err, "s2": err}, locations={"l1": err}
    )
    svc = TrackingViewService(
        provider=provider, stop_ids=("s1", "s2"), line_ids=("l1",)
    )

    assert asyncio.run(svc.build_tracking_view()) == ()
    assert asyncio.run(svc.list_locations()) == ()


def test_single_lookup_surfaces_error() -> None:
    provider = FakeTransitInfoProvider(
        arrivals={"s1": UpstreamUnavailable("down", resource="arrival", key="s1")}
    )
    svc = TrackingViewService(provider=provider)

    with pytest.raises(UpstreamUnavailable):
        asyncio.run(svc.get_arrival("s1"))


def test_programming_errors_are_not_swallowed() -> None:
    provider = FakeTransitInfoProvider(arrivals={"s1": _arrival(1)})
    svc = TrackingViewService(provider=provider, stop_ids=("s1", "missing"))

    with pytest.raises(KeyError):
        asyncio.run(svc.list_arrivals())


def test_join_tracking_without_locations() -> None:
    out = join_tracking([_arrival(7), _no_forecast()], [])

    assert out[0].current_speed == UNMATCHED_POSITION
    assert out[1].current_speed == SPEED_NOT_DETECTED


@dataclass(slots=True)
class SlowTransitInfoProvider:
    """Answers later ids sooner, so completion order is the reverse of input."""

    ids: tuple[str, ...]
    finished: list[str] = field(default_factory=list)

    def _delay(self, item_id: str) -> float:
        return 0.01 * (len(self.ids) - self.ids.index(item_id))

    async def fetch_arrival(self, stop_id: str) -> ArrivalRecord:
        await asyncio.sleep(self._delay(stop_id))
        self.finished.append(stop_id)
        return _arrival(int(stop_id))

    async def fetch_location(self, line_id: str) -> LocationRecord:
        await asyncio.sleep(self._delay(line_id))
        self.finished.append(line_id)
        return _location(int(line_id), lat=f"lat-{line_id}")


def test_order_kept_when_fetches_complete_out_of_order() -> None:
    ids = ("1", "2", "3", "4", "5")
    provider = SlowTransitInfoProvider(ids=ids)
    svc = TrackingViewService(provider=provider, stop_ids=ids, line_ids=ids)

    out = asyncio.run(svc.build_tracking_view())

    assert provider.finished[:2] == ["5", "5"]
    assert [r.arrival.route_variant_id for r in out] == [1, 2, 3, 4, 5]
    assert [r.current_lat for r in out] == [f"lat-{i}" for i in ids]
