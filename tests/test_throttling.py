"""Tests for the throttle gate and throttled backend."""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest

from animescout.core.backends.base import FetchError, RequestSpec
from animescout.core.backends.http_backend import HttpBackend
from animescout.core.fetch.throttling import ThrottledBackend, ThrottleGate

from conftest import FakeClock

API_URL = "https://api.jikan.moe/v4/anime"
OTHER_URL = "https://cdn.myanimelist.net/images/anime/1.jpg"


class TestThrottleGate:
    """Test ThrottleGate spacing."""

    @pytest.mark.asyncio
    async def test_first_call_is_not_delayed(self, fake_clock):
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        slot = await gate.acquire(API_URL)

        assert slot == 100.0
        assert fake_clock.sleeps == []
        assert gate.last_call == 100.0

    @pytest.mark.asyncio
    async def test_second_call_waits_for_the_remainder(self, fake_clock):
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        await gate.acquire(API_URL)
        fake_clock.now += 0.3
        slot = await gate.acquire(API_URL)

        assert fake_clock.sleeps == [pytest.approx(0.7)]
        assert slot == pytest.approx(101.0)

    @pytest.mark.asyncio
    async def test_call_after_interval_proceeds_immediately(self, fake_clock):
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        await gate.acquire(API_URL)
        fake_clock.now += 2.5
        slot = await gate.acquire(API_URL)

        assert fake_clock.sleeps == []
        assert slot == pytest.approx(102.5)

    @pytest.mark.asyncio
    async def test_back_to_back_calls_are_spaced(self, fake_clock):
        """Test that N sequential calls are each at least the interval apart."""
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        slots = [await gate.acquire(API_URL) for _ in range(6)]

        gaps = [b - a for a, b in zip(slots, slots[1:])]
        assert all(gap >= 1.0 - 1e-9 for gap in gaps)

    @pytest.mark.asyncio
    async def test_concurrent_callers_do_not_race_past_the_gate(self):
        """Test callers arriving at the same instant are issued one interval apart."""
        clock = FakeClock(start=50.0)
        gate = ThrottleGate(1000, clock=clock, sleep=clock.sleep)

        slots = await asyncio.gather(*(gate.acquire(API_URL) for _ in range(4)))

        assert sorted(slots) == [pytest.approx(s) for s in (50.0, 51.0, 52.0, 53.0)]
        assert clock.sleeps == [pytest.approx(1.0)] * 3

    @pytest.mark.asyncio
    async def test_late_wakeup_pushes_the_next_call_back(self):
        """Test spacing is measured from when a call went out, not when it was due."""
        clock = FakeClock(start=0.0, overshoot=0.4)
        gate = ThrottleGate(1000, clock=clock, sleep=clock.sleep)

        issued = [await gate.acquire(API_URL)]
        clock.now = 0.5
        issued.append(await gate.acquire(API_URL))
        clock.now += 0.05
        issued.append(await gate.acquire(API_URL))

        assert issued == [pytest.approx(t) for t in (0.0, 1.4, 2.8)]
        gaps = [b - a for a, b in zip(issued, issued[1:])]
        assert all(gap >= 1.0 for gap in gaps)
        assert gate.last_call == pytest.approx(2.8)

    @pytest.mark.asyncio
    async def test_other_hosts_pass_through(self, fake_clock):
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        await gate.acquire(API_URL)
        result = await gate.acquire(OTHER_URL)
        again = await gate.acquire(OTHER_URL)

        assert result is None and again is None
        assert fake_clock.sleeps == []
        assert gate.last_call == 100.0

    @pytest.mark.asyncio
    async def test_reset_clears_last_call(self, fake_clock):
        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)

        await gate.acquire(API_URL)
        gate.reset()
        await gate.acquire(API_URL)

        assert fake_clock.sleeps == []

    def test_applies_to_matches_hostname_case_insensitively(self):
        gate = ThrottleGate(hosts=["API.Jikan.moe"])
        assert gate.applies_to("https://api.jikan.moe/v4/anime?page=1")
        assert gate.applies_to("https://API.JIKAN.MOE/v4/anime/1/full")
        assert not gate.applies_to("https://example.com/api.jikan.moe")
        assert not gate.applies_to("not a url")

    def test_rejects_negative_interval(self):
        with pytest.raises(ValueError):
            ThrottleGate(-1)


class TestThrottledBackend:
    """Test ThrottledBackend with a real clock and a mock transport."""

    @pytest.mark.asyncio
    async def test_requests_are_issued_at_least_interval_apart(self):
        issued: list[float] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api.jikan.moe":
                issued.append(time.monotonic())
            return httpx.Response(200, json={"data": []})

        gate = ThrottleGate(100)
        backend = ThrottledBackend(HttpBackend(transport=httpx.MockTransport(handler)), gate)

        async with backend:
            # Unthrottled warm-up so client creation is not timed
            await backend.fetch(RequestSpec(url=OTHER_URL))
            await asyncio.gather(*(backend.fetch(RequestSpec(url=API_URL)) for _ in range(4)))

        assert len(issued) == 4
        gaps = [b - a for a, b in zip(issued, issued[1:])]
        assert all(gap >= 0.1 for gap in gaps), gaps

    @pytest.mark.asyncio
    async def test_results_pass_through_unmodified(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="down")

        backend = ThrottledBackend(HttpBackend(transport=httpx.MockTransport(handler)), ThrottleGate(0))

        async with backend:
            result = await backend.fetch(RequestSpec(url=API_URL))

        assert result.status_code == 503
        assert result.text == "down"
        assert not result.ok
        assert backend.name == "throttled_http"

    @pytest.mark.asyncio
    async def test_errors_pass_through_and_still_consume_a_slot(self, fake_clock):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gate = ThrottleGate(1000, clock=fake_clock, sleep=fake_clock.sleep)
        backend = ThrottledBackend(HttpBackend(transport=httpx.MockTransport(handler)), gate)

        async with backend:
            with pytest.raises(FetchError):
                await backend.fetch(RequestSpec(url=API_URL))

        assert gate.last_call == 100.0
