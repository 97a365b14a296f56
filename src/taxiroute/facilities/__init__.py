"""Airport facility records and their accumulation from the simulator stream."""

from taxiroute.facilities.accumulator import FacilityAccumulator, FacilityRequest
from taxiroute.facilities.records import (
    AirportReference,
    FacilitySnapshot,
    ParkingSpot,
    ParkingSpotId,
    Runway,
    TaxiName,
    TaxiNodeId,
    TaxiPathEdge,
    TaxiPathType,
    TaxiPoint,
    as_taxi_node,
)

__all__ = [
    "AirportReference",
    "FacilityAccumulator",
    "FacilityRequest",
    "FacilitySnapshot",
    "ParkingSpot",
    "ParkingSpotId",
    "Runway",
    "TaxiName",
    "TaxiNodeId",
    "TaxiPathEdge",
    "TaxiPathType",
    "TaxiPoint",
    "as_taxi_node",
]
