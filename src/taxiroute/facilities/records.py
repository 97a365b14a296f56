"""Airport facility records and the immutable snapshot built from them.

Parking spots, taxi points and runways are delivered by the simulator's
facility stream. Taxi path edges reference their endpoints by index; the
same flat index space is shared by taxi points and parking spots, so an
index that is valid for one table is not automatically valid for the other.
TaxiNodeId and ParkingSpotId keep the two apart at the type level and
as_taxi_node() is the only checked way to turn a raw edge index into a
taxi node.

Typical usage:
    from taxiroute.facilities.records import FacilitySnapshot, TaxiPathType

    snapshot = accumulator.snapshot()
    taxi_edges = [e for e in snapshot.taxi_paths if e.type is TaxiPathType.TAXI]
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NewType

from taxiroute.geo.coordinates import ahead_of

TaxiNodeId = NewType("TaxiNodeId", int)
ParkingSpotId = NewType("ParkingSpotId", int)


class TaxiPathType(IntEnum):
    """Taxi path surface type, using the simulator's numeric codes."""

    NONE = 0
    TAXI = 1
    RUNWAY = 2
    PARKING = 3
    PATH = 4
    CLOSED = 5
    VEHICLE = 6
    ROAD = 7
    PAINTED_LINE = 8


def as_taxi_node(index: int, node_count: int) -> TaxiNodeId:
    """Convert a raw path index to a taxi node index, with bounds check.

    Args:
        index: Raw index from a TaxiPathEdge endpoint.
        node_count: Number of entries in the taxi point table.

    Returns:
        The index as a TaxiNodeId.

    Raises:
        IndexError: If the index does not address a taxi point.
    """
    if not 0 <= index < node_count:
        raise IndexError(f"index {index} outside taxi point table of {node_count}")
    return TaxiNodeId(index)


@dataclass(frozen=True)
class AirportReference:
    """Airport reference point, the origin for every local offset.

    Attributes:
        latitude: Reference latitude in degrees.
        longitude: Reference longitude in degrees.
        altitude_m: Field elevation in meters MSL.
        icao: Airport ICAO code.
        name: Airport name, if known.
    """

    latitude: float
    longitude: float
    altitude_m: float
    icao: str
    name: str = ""


@dataclass(frozen=True)
class ParkingSpot:
    """A parking position (gate, ramp stand).

    Attributes:
        number: Spot number; 0 means unassigned and the spot is unusable.
        heading: Parked aircraft heading in degrees true.
        east: East offset from the airport reference in meters.
        north: North offset from the airport reference in meters.
        type_code: Simulator parking usage type.
        name_code: Simulator parking name enumerant.
    """

    number: ParkingSpotId
    heading: float
    east: float
    north: float
    type_code: int = 0
    name_code: int = 0

    @property
    def is_valid(self) -> bool:
        """Whether the spot has a gate number assigned."""
        return self.number > 0


@dataclass(frozen=True)
class TaxiPoint:
    """A node of the taxi network. Its index is its table position.

    Attributes:
        east: East offset from the airport reference in meters.
        north: North offset from the airport reference in meters.
        type_code: Simulator taxi point type.
        orientation: Simulator orientation code.
    """

    east: float
    north: float
    type_code: int = 0
    orientation: int = 0


@dataclass(frozen=True)
class TaxiPathEdge:
    """A typed connection between two taxi network indices.

    start and end are raw indices. For PARKING edges one side can address
    the parking spot table instead of the taxi point table.

    Attributes:
        type: Surface type of the path.
        start: Raw index of the first endpoint.
        end: Raw index of the second endpoint.
        name_index: Index into the taxi name table.
    """

    type: TaxiPathType
    start: int
    end: int
    name_index: int = 0

    def taxi_endpoints(self, node_count: int) -> tuple[TaxiNodeId, TaxiNodeId] | None:
        """Get both endpoints as taxi nodes, or None if either is out of range."""
        try:
            return as_taxi_node(self.start, node_count), as_taxi_node(self.end, node_count)
        except IndexError:
            return None


@dataclass(frozen=True)
class TaxiName:
    """Taxiway label (e.g., "A", "B2") addressed by TaxiPathEdge.name_index."""

    name: str


@dataclass(frozen=True)
class Runway:
    """Runway geometry.

    Attributes:
        latitude: Runway center latitude in degrees.
        longitude: Runway center longitude in degrees.
        altitude_m: Runway elevation in meters MSL.
        heading: Primary direction heading in degrees true.
        length_m: Runway length in meters.
    """

    latitude: float
    longitude: float
    altitude_m: float
    heading: float
    length_m: float

    @property
    def threshold(self) -> tuple[float, float]:
        """Primary threshold: the center moved half a length against the heading."""
        return ahead_of(self.latitude, self.longitude, self.heading + 180.0, self.length_m / 2)

    @property
    def is_usable(self) -> bool:
        """Whether the runway has a heading and a length to depart along."""
        return self.heading != 0 and self.length_m > 0


@dataclass(frozen=True)
class FacilitySnapshot:
    """Complete, immutable set of facility records for one airport.

    Attributes:
        airport: Airport reference point.
        parking: Parking spots in delivery order.
        taxi_paths: Taxi path edges in delivery order.
        taxi_points: Taxi points; the tuple position is the node index.
        taxi_names: Taxiway names; the tuple position is the name index.
        runways: Runways in delivery order.
    """

    airport: AirportReference
    parking: tuple[ParkingSpot, ...] = field(default_factory=tuple)
    taxi_paths: tuple[TaxiPathEdge, ...] = field(default_factory=tuple)
    taxi_points: tuple[TaxiPoint, ...] = field(default_factory=tuple)
    taxi_names: tuple[TaxiName, ...] = field(default_factory=tuple)
    runways: tuple[Runway, ...] = field(default_factory=tuple)

    @property
    def has_taxi_network(self) -> bool:
        """Whether there are both taxi points and taxi paths to route over."""
        return bool(self.taxi_points) and bool(self.taxi_paths)

    def taxi_name(self, name_index: int) -> str:
        """Look up a taxiway name, empty string when the index is out of range."""
        if 0 <= name_index < len(self.taxi_names):
            return self.taxi_names[name_index].name
        return ""

