"""
Tests for the schedule planner
"""

import random
from datetime import datetime, time, timedelta
from unittest.mock import AsyncMock, Mock, patch

import pytest

from commutecalc.core.errors import NotFoundError, RoutingError, ValidationError
from commutecalc.core.models import CommuteResult, Coordinate, RouteCandidate, ScheduleMode
from commutecalc.planner.schedule import (
    SchedulePlanner,
    arrive_by_scenarios,
    leave_now_scenarios,
    resolve_target_arrival,
)
from commutecalc.planner.traffic import TrafficModel

SEATTLE = Coordinate(latitude=47.6038, longitude=-122.3301)


def fixed_model(extra_minutes=0):
    """Traffic model adding a fixed number of minutes"""
    model = Mock(spec=TrafficModel)
    model.adjust.side_effect = lambda base, hour, minute: base + extra_minutes
    return model


class TestLeaveNowScenarios:
    """Test leave-now scenario generation"""

    def test_three_offsets_from_now(self, sample_routes, frozen_now):
        scenarios = leave_now_scenarios(sample_routes, frozen_now, TrafficModel())

        assert [s.departure_time for s in scenarios] == [
            frozen_now,
            frozen_now + timedelta(minutes=15),
            frozen_now + timedelta(minutes=30),
        ]
        assert all(s.target_arrival is None and s.buffer_minutes is None for s in scenarios)
        assert all(len(s.routes) == len(sample_routes) for s in scenarios)

    def test_one_adjustment_per_route_per_scenario(self, sample_routes, frozen_now):
        model = fixed_model(extra_minutes=5)

        scenarios = leave_now_scenarios(sample_routes, frozen_now, model)

        assert model.adjust.call_count == 3 * len(sample_routes)
        for scenario in scenarios:
            for route, candidate in zip(scenario.routes, sample_routes):
                assert route.adjusted_duration_minutes == candidate.duration_minutes + 5
                assert route.duration_display == f"{route.adjusted_duration_minutes} min"
                assert route.estimated_arrival is None
                assert route.on_time is None

    def test_uses_departure_hour_and_minute(self, sample_routes):
        model = fixed_model()
        now = datetime(2024, 5, 6, 16, 50)

        leave_now_scenarios(sample_routes[:1], now, model)

        assert [c.args[1:] for c in model.adjust.call_args_list] == [(16, 50), (17, 5), (17, 20)]

    def test_candidates_are_not_mutated(self, sample_routes, frozen_now):
        before = [r.model_dump() for r in sample_routes]

        leave_now_scenarios(sample_routes, frozen_now, TrafficModel())

        assert [r.model_dump() for r in sample_routes] == before


class TestResolveTargetArrival:
    """Test pinning arrival clock times to a date"""

    def test_later_today(self, frozen_now):
        assert resolve_target_arrival("09:00", frozen_now) == datetime(2024, 5, 6, 9, 0)

    def test_rolls_to_tomorrow_when_past(self):
        now = datetime(2024, 5, 6, 9, 30)

        assert resolve_target_arrival("09:00", now) == datetime(2024, 5, 7, 9, 0)

    def test_accepts_time_object(self, frozen_now):
        assert resolve_target_arrival(time(17, 30), frozen_now) == datetime(2024, 5, 6, 17, 30)

    def test_now_exactly_is_not_rolled(self):
        now = datetime(2024, 5, 6, 9, 0)

        assert resolve_target_arrival("09:00", now) == now

    def test_invalid_format(self, frozen_now):
        with pytest.raises(ValidationError):
            resolve_target_arrival("nine", frozen_now)


class TestArriveByScenarios:
    """Test arrive-by scenario generation"""

    def test_departures_before_target_ordered_by_buffer(self, sample_routes):
        target = datetime(2024, 5, 6, 9, 0)

        scenarios = arrive_by_scenarios(sample_routes, target, TrafficModel())

        assert [s.buffer_minutes for s in scenarios] == [0, 10, 20]
        departures = [s.departure_time for s in scenarios]
        assert all(d <= target for d in departures)
        # Larger buffers leave earlier
        assert departures[0] > departures[1] > departures[2]
        assert all(s.target_arrival == target for s in scenarios)

    def test_lead_time_is_mean_duration_plus_buffer(self, sample_routes):
        target = datetime(2024, 5, 6, 9, 0)

        scenarios = arrive_by_scenarios(sample_routes, target, fixed_model())

        # Mean of 20 and 24 minutes
        assert scenarios[0].departure_time == datetime(2024, 5, 6, 8, 38)
        assert scenarios[1].departure_time == datetime(2024, 5, 6, 8, 28)
        assert scenarios[2].departure_time == datetime(2024, 5, 6, 8, 18)

    def test_estimated_arrival_and_on_time(self, sample_routes):
        target = datetime(2024, 5, 6, 9, 0)

        scenarios = arrive_by_scenarios(sample_routes, target, fixed_model(extra_minutes=3))

        for scenario in scenarios:
            for route in scenario.routes:
                expected = scenario.departure_time + timedelta(minutes=route.adjusted_duration_minutes)
                assert route.estimated_arrival == expected
                assert route.on_time == (expected <= target)

    def test_equal_arrival_counts_as_on_time(self):
        route = RouteCandidate(label="Fastest Route", duration_minutes=30, distance_km=20.0)
        target = datetime(2024, 5, 6, 9, 0)

        scenarios = arrive_by_scenarios([route], target, fixed_model())

        assert scenarios[0].departure_time == datetime(2024, 5, 6, 8, 30)
        assert scenarios[0].routes[0].estimated_arrival == target
        assert scenarios[0].routes[0].on_time is True

    def test_one_minute_late_is_not_on_time(self):
        route = RouteCandidate(label="Fastest Route", duration_minutes=30, distance_km=20.0)
        target = datetime(2024, 5, 6, 9, 0)

        scenarios = arrive_by_scenarios([route], target, fixed_model(extra_minutes=1))

        assert scenarios[0].routes[0].on_time is False
        # 10 minute buffer absorbs the delay
        assert scenarios[1].routes[0].on_time is True

    def test_uses_departure_time_for_traffic(self):
        model = fixed_model()
        route = RouteCandidate(label="Fastest Route", duration_minutes=30, distance_km=20.0)

        arrive_by_scenarios([route], datetime(2024, 5, 6, 9, 0), model)

        assert [c.args[1:] for c in model.adjust.call_args_list] == [(8, 30), (8, 20), (8, 10)]


class TestSchedulePlanner:
    """Test planner orchestration"""

    def make_planner(self, geocoder, provider, now, rng=None):
        return SchedulePlanner(
            geocoder=geocoder,
            route_provider=provider,
            traffic_model=TrafficModel(rng=rng or random.Random(1)),
            clock=lambda: now,
            geocode_delay=0,
        )

    @pytest.mark.asyncio
    async def test_leave_now_end_to_end(self, mock_geocoder, mock_route_provider, sample_routes, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        result = await planner.calculate("Seattle, WA", "Bellevue, WA")

        assert isinstance(result, CommuteResult)
        assert result.mode == ScheduleMode.NOW
        assert len(result.to_destination) == 3
        assert len(result.to_origin) == 3
        assert result.origin_address == "Seattle, WA"
        assert result.destination_address == "Bellevue, WA"

        base = {r.label: r.duration_minutes for r in sample_routes}
        for scenario in result.to_destination + result.to_origin:
            for route in scenario.routes:
                assert route.adjusted_duration_minutes >= base[route.label]

    @pytest.mark.asyncio
    async def test_routes_fetched_once_per_direction(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        await planner.calculate("Seattle, WA", "Bellevue, WA")

        assert mock_geocoder.resolve.await_count == 2
        assert mock_route_provider.routes.await_count == 2

        seattle = await mock_geocoder.resolve("Seattle, WA")
        bellevue = await mock_geocoder.resolve("Bellevue, WA")
        directions = [c.args for c in mock_route_provider.routes.call_args_list]
        assert (seattle, bellevue) in directions
        assert (bellevue, seattle) in directions

    @pytest.mark.asyncio
    async def test_arrive_by_outbound_only(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        result = await planner.calculate("Seattle, WA", "Bellevue, WA", mode="arrival", arrival_time="09:00")

        assert result.mode == ScheduleMode.ARRIVAL
        assert all(s.target_arrival == datetime(2024, 5, 6, 9, 0) for s in result.to_destination)
        assert all(r.on_time is not None for s in result.to_destination for r in s.routes)

        # Return leg is leave-now
        assert [s.departure_time for s in result.to_origin] == [
            frozen_now + timedelta(minutes=offset) for offset in (0, 15, 30)
        ]
        assert all(s.target_arrival is None for s in result.to_origin)

    @pytest.mark.asyncio
    async def test_arrive_by_rolls_to_tomorrow(self, mock_geocoder, mock_route_provider):
        planner = self.make_planner(mock_geocoder, mock_route_provider, datetime(2024, 5, 6, 9, 30))

        result = await planner.calculate("Seattle, WA", "Bellevue, WA", mode="arrival", arrival_time="09:00")

        assert result.to_destination[0].target_arrival == datetime(2024, 5, 7, 9, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("home,office", [("", "Bellevue, WA"), ("Seattle, WA", "  "), (None, "Bellevue, WA")])
    async def test_missing_address(self, mock_geocoder, mock_route_provider, frozen_now, home, office):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        with pytest.raises(ValidationError, match="both addresses"):
            await planner.calculate(home, office)

        mock_geocoder.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_arrival_mode_requires_time(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        with pytest.raises(ValidationError, match="arrival time"):
            await planner.calculate("Seattle, WA", "Bellevue, WA", mode=ScheduleMode.ARRIVAL)

        with pytest.raises(ValidationError):
            await planner.calculate("Seattle, WA", "Bellevue, WA", mode="arrival", arrival_time="25:00")

        mock_geocoder.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_mode(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        with pytest.raises(ValidationError, match="Unknown schedule mode"):
            await planner.calculate("Seattle, WA", "Bellevue, WA", mode="tomorrow")

    @pytest.mark.asyncio
    async def test_unresolvable_address_aborts(self, mock_route_provider, frozen_now):
        geocoder = Mock()

        async def resolve(address):
            if address == "Atlantis":
                raise NotFoundError(address)
            return SEATTLE

        geocoder.resolve = AsyncMock(side_effect=resolve)
        planner = self.make_planner(geocoder, mock_route_provider, frozen_now)

        with pytest.raises(NotFoundError) as exc_info:
            await planner.calculate("Seattle, WA", "Atlantis")

        assert exc_info.value.address == "Atlantis"
        assert "Atlantis" in exc_info.value.message
        mock_route_provider.routes.assert_not_called()

    @pytest.mark.asyncio
    async def test_routing_failure_aborts(self, mock_geocoder, sample_routes, frozen_now):
        provider = Mock()
        provider.routes = AsyncMock(side_effect=[sample_routes, RoutingError("Routing failed: NoRoute")])
        planner = self.make_planner(mock_geocoder, provider, frozen_now)

        with pytest.raises(RoutingError):
            await planner.calculate("Seattle, WA", "Bellevue, WA")

    @pytest.mark.asyncio
    async def test_geocode_delay_applied_per_address(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = SchedulePlanner(
            geocoder=mock_geocoder,
            route_provider=mock_route_provider,
            clock=lambda: frozen_now,
            geocode_delay=1.0,
        )

        with patch("commutecalc.planner.schedule.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await planner.calculate("Seattle, WA", "Bellevue, WA")

        assert mock_sleep.await_count == 2
        assert all(c.args == (1.0,) for c in mock_sleep.await_args_list)

    @pytest.mark.asyncio
    async def test_independent_results(self, mock_geocoder, mock_route_provider, frozen_now):
        planner = self.make_planner(mock_geocoder, mock_route_provider, frozen_now)

        first = await planner.calculate("Seattle, WA", "Bellevue, WA")
        second = await planner.calculate("Seattle, WA", "Bellevue, WA")

        assert first is not second
        assert first.to_destination is not second.to_destination
