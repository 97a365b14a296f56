"""Tests for guidance waypoint construction."""

import pytest

from taxiroute.departure.waypoints import (
    CLIMB_FLAGS,
    DEFAULT_CLIMB_PROFILE,
    ClimbStep,
    WaypointFlags,
    climb_waypoint,
    lineup_waypoint,
    pushback_waypoint,
    takeoff_climb,
    taxi_waypoint,
)
from taxiroute.geo.coordinates import geodetic_to_offset


class TestWaypointFlags:
    """Test flag bit values."""

    def test_simulator_bits(self) -> None:
        """Test the flags match the simulator's wire values."""
        assert WaypointFlags.SPEED_REQUESTED == 0x04
        assert WaypointFlags.THROTTLE_REQUESTED == 0x08
        assert WaypointFlags.COMPUTE_VERTICAL_SPEED == 0x10
        assert WaypointFlags.ALTITUDE_IS_AGL == 0x20
        assert WaypointFlags.ON_GROUND == 0x100000
        assert WaypointFlags.REVERSE == 0x200000
        assert WaypointFlags.WRAP_TO_FIRST == 0x400000

    def test_climb_flags_not_on_ground(self) -> None:
        """Test the climb flag set never includes ON_GROUND."""
        assert WaypointFlags.ON_GROUND not in CLIMB_FLAGS
        assert WaypointFlags.ALTITUDE_IS_AGL in CLIMB_FLAGS


class TestWaypointFactories:
    """Test waypoint factory functions."""

    def test_pushback(self) -> None:
        """Test pushback is a slow reverse ground waypoint."""
        wp = pushback_waypoint(50.0, 14.0, 1246.7)

        assert wp.on_ground
        assert wp.reverse
        assert wp.speed_kts == 3.0
        assert WaypointFlags.SPEED_REQUESTED in wp.flags

    def test_taxi(self) -> None:
        """Test taxi is a forward ground waypoint."""
        wp = taxi_waypoint(50.0, 14.0, 1246.7)

        assert wp.on_ground
        assert not wp.reverse
        assert wp.speed_kts == 15.0
        assert wp.altitude_ft == 1246.7

    def test_lineup(self) -> None:
        """Test lineup is a slow forward ground waypoint."""
        wp = lineup_waypoint(50.0, 14.0, 1246.7)

        assert wp.on_ground
        assert not wp.reverse
        assert wp.speed_kts == 5.0

    def test_custom_speed(self) -> None:
        """Test speeds can be overridden."""
        assert taxi_waypoint(50.0, 14.0, 0.0, speed_kts=20.0).speed_kts == 20.0

    def test_climb(self) -> None:
        """Test climb waypoints are airborne with throttle and AGL altitude."""
        wp = climb_waypoint(50.0, 14.0, 1500.0, 200.0, 100.0)

        assert not wp.on_ground
        assert wp.flags == CLIMB_FLAGS
        assert wp.altitude_ft == 1500.0
        assert wp.throttle_pct == 100.0


class TestTakeoffClimb:
    """Test takeoff_climb."""

    def test_default_profile(self) -> None:
        """Test the default profile climbs and accelerates ahead of the threshold."""
        waypoints = takeoff_climb(50.0, 14.0, 90.0)

        assert len(waypoints) == len(DEFAULT_CLIMB_PROFILE) == 3
        assert [wp.altitude_ft for wp in waypoints] == [1500.0, 4000.0, 9000.0]
        assert [wp.speed_kts for wp in waypoints] == [200.0, 240.0, 280.0]
        assert [wp.throttle_pct for wp in waypoints] == [100.0, 90.0, 85.0]
        assert not any(wp.on_ground for wp in waypoints)

    def test_positions_along_heading(self) -> None:
        """Test each waypoint sits at its profile distance along the heading."""
        waypoints = takeoff_climb(50.0, 14.0, 90.0)

        for wp, step in zip(waypoints, DEFAULT_CLIMB_PROFILE, strict=True):
            east, north = geodetic_to_offset(50.0, 14.0, wp.latitude, wp.longitude)
            assert east == pytest.approx(step.distance_m, rel=1e-6)
            assert north == pytest.approx(0.0, abs=1e-6)

    def test_profile_distances(self) -> None:
        """Test the default profile is 1.5, 5 and 12 nautical miles out."""
        assert [step.distance_m for step in DEFAULT_CLIMB_PROFILE] == pytest.approx(
            [2778.0, 9260.0, 22224.0]
        )

    def test_custom_profile(self) -> None:
        """Test a custom profile is followed step by step."""
        profile = [ClimbStep(1000.0, 500.0, 150.0, 95.0)]

        waypoints = takeoff_climb(50.0, 14.0, 0.0, profile)

        assert len(waypoints) == 1
        assert waypoints[0].altitude_ft == 500.0
        assert waypoints[0].latitude > 50.0
