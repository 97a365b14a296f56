"""Aggregation of streamed facility batches into a FacilitySnapshot.

The simulator answers each facility request with a stream of records
tagged by request identifier, terminated by an end-of-batch message. The
accumulator collects records per table, counts outstanding batches, and
hands out an immutable snapshot once every batch has ended.

Typical usage:
    from taxiroute.facilities.accumulator import FacilityAccumulator, FacilityRequest

    acc = FacilityAccumulator()
    acc.add_record(FacilityRequest.AIRPORT, airport_ref)
    acc.add_record(FacilityRequest.TAXI_POINT, point)
    ...
    acc.end_batch()  # once per FACILITY_DATA_END
    if acc.is_complete:
        snapshot = acc.snapshot()
"""

import logging
from enum import IntEnum
from typing import Any

from taxiroute.errors import FacilityDataError
from taxiroute.facilities.records import (
    AirportReference,
    FacilitySnapshot,
    ParkingSpot,
    Runway,
    TaxiName,
    TaxiPathEdge,
    TaxiPathType,
    TaxiPoint,
)

logger = logging.getLogger(__name__)


class FacilityRequest(IntEnum):
    """Request identifiers tagging each facility record stream."""

    AIRPORT = 100
    PARKING = 101
    TAXI_PATH = 102
    TAXI_POINT = 103
    RUNWAY = 104
    TAXI_NAME = 105


# Record type expected on each request stream
RECORD_TYPES: dict[FacilityRequest, type] = {
    FacilityRequest.AIRPORT: AirportReference,
    FacilityRequest.PARKING: ParkingSpot,
    FacilityRequest.TAXI_PATH: TaxiPathEdge,
    FacilityRequest.TAXI_POINT: TaxiPoint,
    FacilityRequest.RUNWAY: Runway,
    FacilityRequest.TAXI_NAME: TaxiName,
}


class FacilityAccumulator:
    """Collects facility records until every requested batch has ended.

    Attributes:
        batches_expected: Number of end-of-batch signals that complete the set.
        discarded: Count of malformed records dropped during accumulation.

    Examples:
        >>> acc = FacilityAccumulator(batches_expected=1)
        >>> acc.add_record(FacilityRequest.AIRPORT, AirportReference(50.1, 14.26, 380.0, "LKPR"))
        >>> acc.end_batch()
        0
        >>> acc.snapshot().airport.icao
        'LKPR'
    """

    def __init__(self, batches_expected: int = len(FacilityRequest)) -> None:
        """Initialize an empty accumulator.

        Args:
            batches_expected: Number of batches that will be delivered.
                Defaults to one per FacilityRequest.
        """
        if batches_expected < 1:
            raise ValueError(f"batches_expected must be positive, got {batches_expected}")

        self.batches_expected = batches_expected
        self.discarded = 0
        self._batches_remaining = batches_expected
        self._airport: AirportReference | None = None
        self._parking: list[ParkingSpot] = []
        self._taxi_paths: list[TaxiPathEdge] = []
        self._taxi_points: list[TaxiPoint] = []
        self._taxi_names: list[TaxiName] = []
        self._runways: list[Runway] = []

    @property
    def batches_remaining(self) -> int:
        """Number of batches that have not yet ended."""
        return self._batches_remaining

    @property
    def is_complete(self) -> bool:
        """Whether every expected batch has ended."""
        return self._batches_remaining == 0

    def add_record(self, request: FacilityRequest | int, record: Any) -> None:
        """Store one facility record.

        Args:
            request: Request identifier the record was delivered under.
            record: The decoded record.

        Raises:
            FacilityDataError: If the request identifier is unknown, the record
                type does not belong to that request, or accumulation is complete.
        """
        if self.is_complete:
            raise FacilityDataError("record received after all facility batches completed")

        try:
            request = FacilityRequest(request)
        except ValueError as e:
            raise FacilityDataError(f"unknown facility request id {request}") from e

        expected = RECORD_TYPES[request]
        if not isinstance(record, expected):
            raise FacilityDataError(
                f"{request.name} expects {expected.__name__}, got {type(record).__name__}"
            )

        if request is FacilityRequest.AIRPORT:
            self._airport = record
        elif request is FacilityRequest.PARKING:
            self._parking.append(record)
        elif request is FacilityRequest.TAXI_PATH:
            self._add_taxi_path(record)
        elif request is FacilityRequest.TAXI_POINT:
            self._taxi_points.append(record)
        elif request is FacilityRequest.RUNWAY:
            self._runways.append(record)
        elif request is FacilityRequest.TAXI_NAME:
            self._taxi_names.append(record)

    def _add_taxi_path(self, edge: TaxiPathEdge) -> None:
        """Store a taxi path, dropping edges whose type code is not recognised."""
        try:
            path_type = TaxiPathType(edge.type)
        except ValueError:
            self.discarded += 1
            logger.warning("Discarding taxi path with unknown type %r", edge.type)
            return

        if path_type is not edge.type:
            edge = TaxiPathEdge(path_type, edge.start, edge.end, edge.name_index)
        self._taxi_paths.append(edge)

    def end_batch(self) -> int:
        """Record an end-of-batch signal.

        Returns:
            Number of batches still outstanding.

        Raises:
            FacilityDataError: If every batch has already ended.
        """
        if self.is_complete:
            raise FacilityDataError("end-of-batch received with no batches outstanding")

        self._batches_remaining -= 1
        logger.info("Facility batch complete (%d remaining)", self._batches_remaining)
        return self._batches_remaining

    def snapshot(self) -> FacilitySnapshot:
        """Freeze the accumulated records.

        Returns:
            Immutable FacilitySnapshot; later accumulation cannot alter it.

        Raises:
            FacilityDataError: If batches are outstanding or no airport
                reference was received.
        """
        if not self.is_complete:
            raise FacilityDataError(
                f"snapshot requested with {self._batches_remaining} batches outstanding"
            )
        if self._airport is None:
            raise FacilityDataError("no airport reference record received")

        snapshot = FacilitySnapshot(
            airport=self._airport,
            parking=tuple(self._parking),
            taxi_paths=tuple(self._taxi_paths),
            taxi_points=tuple(self._taxi_points),
            taxi_names=tuple(self._taxi_names),
            runways=tuple(self._runways),
        )
        logger.info(
            "Facility snapshot for %s: %d parking, %d taxi points, %d taxi paths, %d runways",
            snapshot.airport.icao,
            len(snapshot.parking),
            len(snapshot.taxi_points),
            len(snapshot.taxi_paths),
            len(snapshot.runways),
        )
        return snapshot
