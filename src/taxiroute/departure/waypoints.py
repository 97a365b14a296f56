"""Guidance waypoints for AI aircraft.

Waypoint flags use the simulator's bit values so a Waypoint can be packed
straight into its wire struct by the protocol layer. The ON_GROUND flag
carries meaning beyond the single waypoint: the first waypoint without it
is where the AI starts its takeoff roll.

Typical usage:
    from taxiroute.departure.waypoints import lineup_waypoint, takeoff_climb

    chain = [lineup_waypoint(lat, lon, field_alt_ft)]
    chain.extend(takeoff_climb(lat, lon, runway.heading))
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntFlag

from taxiroute.geo.coordinates import ahead_of, nautical_miles_to_meters

PUSHBACK_SPEED_KTS = 3.0
TAXI_SPEED_KTS = 15.0
LINEUP_SPEED_KTS = 5.0


class WaypointFlags(IntFlag):
    """Waypoint behavior flags (simulator bit values)."""

    NONE = 0
    SPEED_REQUESTED = 0x04
    THROTTLE_REQUESTED = 0x08
    COMPUTE_VERTICAL_SPEED = 0x10
    ALTITUDE_IS_AGL = 0x20
    ON_GROUND = 0x00100000
    REVERSE = 0x00200000
    WRAP_TO_FIRST = 0x00400000


GROUND_FLAGS = WaypointFlags.ON_GROUND | WaypointFlags.SPEED_REQUESTED
PUSHBACK_FLAGS = GROUND_FLAGS | WaypointFlags.REVERSE
CLIMB_FLAGS = (
    WaypointFlags.SPEED_REQUESTED
    | WaypointFlags.THROTTLE_REQUESTED
    | WaypointFlags.COMPUTE_VERTICAL_SPEED
    | WaypointFlags.ALTITUDE_IS_AGL
)


@dataclass(frozen=True)
class Waypoint:
    """A single guidance waypoint.

    Attributes:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        altitude_ft: Altitude in feet; MSL, or AGL when ALTITUDE_IS_AGL is set.
        flags: Behavior flags.
        speed_kts: Target speed, honored with SPEED_REQUESTED.
        throttle_pct: Target throttle 0-100, honored with THROTTLE_REQUESTED.
    """

    latitude: float
    longitude: float
    altitude_ft: float
    flags: WaypointFlags
    speed_kts: float = 0.0
    throttle_pct: float = 0.0

    @property
    def on_ground(self) -> bool:
        """Whether this is a ground movement waypoint."""
        return WaypointFlags.ON_GROUND in self.flags

    @property
    def reverse(self) -> bool:
        """Whether the aircraft backs up to this waypoint."""
        return WaypointFlags.REVERSE in self.flags


@dataclass(frozen=True)
class ClimbStep:
    """One step of the departure climb profile.

    Attributes:
        distance_m: Distance ahead of the threshold along the runway heading.
        altitude_ft_agl: Target height above ground.
        speed_kts: Target speed.
        throttle_pct: Throttle setting 0-100.
    """

    distance_m: float
    altitude_ft_agl: float
    speed_kts: float
    throttle_pct: float


DEFAULT_CLIMB_PROFILE: tuple[ClimbStep, ...] = (
    ClimbStep(nautical_miles_to_meters(1.5), 1500.0, 200.0, 100.0),
    ClimbStep(nautical_miles_to_meters(5.0), 4000.0, 240.0, 90.0),
    ClimbStep(nautical_miles_to_meters(12.0), 9000.0, 280.0, 85.0),
)


def pushback_waypoint(
    lat: float, lon: float, altitude_ft: float, speed_kts: float = PUSHBACK_SPEED_KTS
) -> Waypoint:
    """Reverse ground waypoint the aircraft is pushed back to."""
    return Waypoint(lat, lon, altitude_ft, PUSHBACK_FLAGS, speed_kts)


def taxi_waypoint(
    lat: float, lon: float, altitude_ft: float, speed_kts: float = TAXI_SPEED_KTS
) -> Waypoint:
    """Forward ground waypoint along the taxi route."""
    return Waypoint(lat, lon, altitude_ft, GROUND_FLAGS, speed_kts)


def lineup_waypoint(
    lat: float, lon: float, altitude_ft: float, speed_kts: float = LINEUP_SPEED_KTS
) -> Waypoint:
    """Last ground waypoint, at the runway threshold, taken slowly for lineup."""
    return Waypoint(lat, lon, altitude_ft, GROUND_FLAGS, speed_kts)


def climb_waypoint(
    lat: float, lon: float, altitude_ft_agl: float, speed_kts: float, throttle_pct: float
) -> Waypoint:
    """Airborne waypoint; the simulator derives the vertical speed to reach it.

    Args:
        lat: Latitude in degrees.
        lon: Longitude in degrees.
        altitude_ft_agl: Target height above ground in feet.
        speed_kts: Target speed.
        throttle_pct: Throttle 0-100.

    Returns:
        Waypoint without ON_GROUND.
    """
    return Waypoint(lat, lon, altitude_ft_agl, CLIMB_FLAGS, speed_kts, throttle_pct)


def takeoff_climb(
    threshold_lat: float,
    threshold_lon: float,
    heading: float,
    profile: Sequence[ClimbStep] = DEFAULT_CLIMB_PROFILE,
) -> list[Waypoint]:
    """Build the climb-out chain ahead of a runway threshold.

    Args:
        threshold_lat: Threshold latitude in degrees.
        threshold_lon: Threshold longitude in degrees.
        heading: Runway heading in degrees true.
        profile: Climb steps, nearest first.

    Returns:
        One climb waypoint per profile step.
    """
    waypoints = []
    for step in profile:
        lat, lon = ahead_of(threshold_lat, threshold_lon, heading, step.distance_m)
        waypoints.append(
            climb_waypoint(lat, lon, step.altitude_ft_agl, step.speed_kts, step.throttle_pct)
        )
    return waypoints
