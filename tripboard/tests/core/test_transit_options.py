"""
Tests for travel option generation.

These are pure functions of the distance.
"""

import pytest

from tripboard.core.tools.transit_options import (
    describe_option,
    format_duration,
    generate_transit_options,
)


def modes(distance):
    return [option.mode for option in generate_transit_options(distance)]


class TestGenerateTransitOptions:
    @pytest.mark.parametrize(
        "distance, expected",
        [
            (0, ["drive", "bus"]),
            (10, ["drive", "bus"]),
            (40, ["bus", "transit", "drive"]),
            (50, ["bus", "transit", "drive"]),
            (900, ["drive", "flight"]),
            (1500, ["flight"]),
        ],
    )
    def test_available_modes_by_cost(self, distance, expected):
        assert modes(distance) == expected

    @pytest.mark.parametrize(
        "distance, mode, available",
        [
            (19.99, "transit", False),
            (20, "transit", True),
            (299, "flight", False),
            (300, "flight", True),
            (499, "bus", True),
            (500, "bus", False),
            (799, "transit", True),
            (800, "transit", False),
            (999, "drive", True),
            (1000, "drive", False),
        ],
    )
    def test_mode_thresholds(self, distance, mode, available):
        assert (mode in modes(distance)) is available

    def test_costs_and_durations(self):
        bus, transit, drive = generate_transit_options(40)
        assert (bus.duration, bus.cost) == (1.0, 2.0)
        assert (transit.duration, transit.cost) == (0.5, 3.2)
        assert drive.cost == 6.0

        (flight,) = generate_transit_options(1500)
        assert flight.duration == pytest.approx(3.875)
        assert flight.cost == 350.0

    def test_equal_costs_keep_generation_order(self):
        # at 20 km driving and public transit both cost 3.00
        options = generate_transit_options(20)
        assert [o.mode for o in options] == ["bus", "drive", "transit"]
        assert options[1].cost == options[2].cost == 3.0

    def test_sorted_ascending(self):
        for distance in (5, 35, 299, 300, 499, 500, 799, 800, 999, 1000):
            costs = [o.cost for o in generate_transit_options(distance)]
            assert costs == sorted(costs)


class TestFormatting:
    def test_format_duration(self):
        assert format_duration(0.5) == "30m"
        assert format_duration(1.5) == "1h 30m"
        assert format_duration(3.875) == "3h 52m"

    def test_describe_option(self):
        bus = generate_transit_options(40)[0]
        assert describe_option(bus) == "Bus  1h 0m  $2.00"
