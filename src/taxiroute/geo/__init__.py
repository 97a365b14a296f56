"""Geodesy helpers for airport-local coordinates."""

from taxiroute.geo.coordinates import (
    ahead_of,
    bearing_deg,
    geodetic_to_offset,
    meters_to_feet,
    nautical_miles_to_meters,
    offset_to_geodetic,
)

__all__ = [
    "ahead_of",
    "bearing_deg",
    "geodetic_to_offset",
    "meters_to_feet",
    "nautical_miles_to_meters",
    "offset_to_geodetic",
]
