"""Local metric offsets <-> geodetic positions on the WGS-84 ellipsoid.

Facility data places every parking spot and taxi node as an (east, north)
offset in meters from the airport reference point. This module converts
those offsets to latitude/longitude and back using the meridian and
prime-vertical radii of curvature evaluated at the reference latitude.

The conversion is first order. It stays within a centimeter over the tens
of kilometers an airport and its departure climb span, which is all the
router needs; it is not a geodesic solver.

Typical usage:
    from taxiroute.geo.coordinates import geodetic_to_offset, offset_to_geodetic

    lat, lon = offset_to_geodetic(50.1008, 14.26, east=120.0, north=-45.0)
    east, north = geodetic_to_offset(50.1008, 14.26, lat, lon)
"""

import logging
import math

logger = logging.getLogger(__name__)

# WGS-84 ellipsoid
SEMI_MAJOR_AXIS_M = 6378137.0
SEMI_MINOR_AXIS_M = 6356752.314245
ECCENTRICITY_SQ = (SEMI_MAJOR_AXIS_M**2 - SEMI_MINOR_AXIS_M**2) / SEMI_MAJOR_AXIS_M**2

METERS_PER_FOOT = 0.3048
METERS_PER_NAUTICAL_MILE = 1852.0


def radii_of_curvature(ref_lat: float) -> tuple[float, float]:
    """Calculate the ellipsoid radii of curvature at a latitude.

    Args:
        ref_lat: Reference latitude in degrees.

    Returns:
        Tuple of (meridian radius M, prime-vertical radius N) in meters.
    """
    sin_lat = math.sin(math.radians(ref_lat))
    w = math.sqrt(1.0 - ECCENTRICITY_SQ * sin_lat * sin_lat)
    meridian = SEMI_MAJOR_AXIS_M * (1.0 - ECCENTRICITY_SQ) / (w * w * w)
    prime_vertical = SEMI_MAJOR_AXIS_M / w
    return meridian, prime_vertical


def offset_to_geodetic(
    ref_lat: float, ref_lon: float, east: float, north: float
) -> tuple[float, float]:
    """Convert a local (east, north) offset to latitude/longitude.

    At the poles the east axis is undefined, so the longitude is returned
    unchanged instead of dividing by cos(90°).

    Args:
        ref_lat: Reference latitude in degrees.
        ref_lon: Reference longitude in degrees.
        east: Eastward offset in meters.
        north: Northward offset in meters.

    Returns:
        Tuple of (latitude, longitude) in degrees.

    Examples:
        >>> lat, lon = offset_to_geodetic(50.0, 14.0, 0.0, 1000.0)
        >>> round(lat, 4)
        50.009
    """
    meridian, prime_vertical = radii_of_curvature(ref_lat)

    lat = ref_lat + math.degrees(north / meridian)
    if abs(ref_lat) < 90.0:
        lon = ref_lon + math.degrees(east / (prime_vertical * math.cos(math.radians(ref_lat))))
    else:
        if east:
            logger.debug("Ignoring east offset %.1fm at pole latitude %.1f", east, ref_lat)
        lon = ref_lon

    return lat, lon


def geodetic_to_offset(
    ref_lat: float, ref_lon: float, lat: float, lon: float
) -> tuple[float, float]:
    """Convert latitude/longitude to a local (east, north) offset.

    Inverse of offset_to_geodetic for the same reference point.

    Args:
        ref_lat: Reference latitude in degrees.
        ref_lon: Reference longitude in degrees.
        lat: Target latitude in degrees.
        lon: Target longitude in degrees.

    Returns:
        Tuple of (east, north) offset in meters.
    """
    meridian, prime_vertical = radii_of_curvature(ref_lat)

    north = math.radians(lat - ref_lat) * meridian
    east = 0.0
    if abs(ref_lat) < 90.0:
        east = math.radians(lon - ref_lon) * prime_vertical * math.cos(math.radians(ref_lat))

    return east, north


def ahead_of(lat: float, lon: float, heading: float, meters: float) -> tuple[float, float]:
    """Displace a position along a true heading.

    Args:
        lat: Start latitude in degrees.
        lon: Start longitude in degrees.
        heading: True heading in degrees (0 = north, 90 = east).
        meters: Distance to move in meters.

    Returns:
        Tuple of (latitude, longitude) of the displaced position.
    """
    rad = math.radians(heading)
    return offset_to_geodetic(lat, lon, meters * math.sin(rad), meters * math.cos(rad))


def bearing_deg(d_east: float, d_north: float) -> float:
    """Calculate the true bearing of a local displacement, 0-360."""
    return math.degrees(math.atan2(d_east, d_north)) % 360.0


def meters_to_feet(meters: float) -> float:
    """Convert meters to feet."""
    return meters / METERS_PER_FOOT


def nautical_miles_to_meters(nm: float) -> float:
    """Convert nautical miles to meters."""
    return nm * METERS_PER_NAUTICAL_MILE
