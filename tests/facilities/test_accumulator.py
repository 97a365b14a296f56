"""Tests for facility batch accumulation."""

import pytest

from taxiroute.errors import FacilityDataError
from taxiroute.facilities.accumulator import FacilityAccumulator, FacilityRequest
from taxiroute.facilities.records import (
    AirportReference,
    ParkingSpot,
    ParkingSpotId,
    Runway,
    TaxiName,
    TaxiPathEdge,
    TaxiPathType,
    TaxiPoint,
)


@pytest.fixture
def airport() -> AirportReference:
    """Create airport reference fixture."""
    return AirportReference(50.1008, 14.26, 380.0, "LKPR")


class TestFacilityAccumulator:
    """Test FacilityAccumulator."""

    def test_initial_state(self) -> None:
        """Test a new accumulator expects one batch per request type."""
        acc = FacilityAccumulator()

        assert acc.batches_remaining == 6
        assert not acc.is_complete

    def test_invalid_batch_count(self) -> None:
        """Test zero expected batches is rejected."""
        with pytest.raises(ValueError):
            FacilityAccumulator(batches_expected=0)

    def test_full_stream(self, airport: AirportReference) -> None:
        """Test every record type lands in its table."""
        acc = FacilityAccumulator()
        acc.add_record(FacilityRequest.AIRPORT, airport)
        acc.add_record(FacilityRequest.PARKING, ParkingSpot(ParkingSpotId(10), 60.0, 100.0, -50.0))
        acc.add_record(FacilityRequest.TAXI_POINT, TaxiPoint(0.0, 0.0))
        acc.add_record(FacilityRequest.TAXI_POINT, TaxiPoint(50.0, 0.0))
        acc.add_record(FacilityRequest.TAXI_PATH, TaxiPathEdge(TaxiPathType.TAXI, 0, 1, 0))
        acc.add_record(FacilityRequest.TAXI_NAME, TaxiName("A"))
        acc.add_record(FacilityRequest.RUNWAY, Runway(50.1, 14.26, 380.0, 240.0, 3000.0))

        for expected_remaining in range(5, -1, -1):
            assert acc.end_batch() == expected_remaining

        snapshot = acc.snapshot()
        assert snapshot.airport.icao == "LKPR"
        assert len(snapshot.parking) == 1
        assert len(snapshot.taxi_points) == 2
        assert snapshot.taxi_paths[0].type is TaxiPathType.TAXI
        assert snapshot.taxi_names[0].name == "A"
        assert snapshot.runways[0].heading == 240.0

    def test_raw_request_id(self, airport: AirportReference) -> None:
        """Test raw integer request identifiers are accepted."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.add_record(100, airport)
        acc.end_batch()

        assert acc.snapshot().airport == airport

    def test_unknown_request_id(self, airport: AirportReference) -> None:
        """Test an unknown request identifier raises."""
        acc = FacilityAccumulator()

        with pytest.raises(FacilityDataError, match="unknown facility request"):
            acc.add_record(999, airport)

    def test_wrong_record_type(self) -> None:
        """Test a record delivered on the wrong stream raises."""
        acc = FacilityAccumulator()

        with pytest.raises(FacilityDataError, match="expects TaxiPoint"):
            acc.add_record(FacilityRequest.TAXI_POINT, TaxiName("A"))

    def test_raw_path_type_normalised(self, airport: AirportReference) -> None:
        """Test integer path types are converted to TaxiPathType."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.add_record(FacilityRequest.AIRPORT, airport)
        acc.add_record(FacilityRequest.TAXI_PATH, TaxiPathEdge(4, 0, 1))  # type: ignore[arg-type]
        acc.end_batch()

        assert acc.snapshot().taxi_paths[0].type is TaxiPathType.PATH

    def test_unknown_path_type_discarded(self, airport: AirportReference) -> None:
        """Test a malformed path type is dropped without stopping accumulation."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.add_record(FacilityRequest.AIRPORT, airport)
        acc.add_record(FacilityRequest.TAXI_PATH, TaxiPathEdge(42, 0, 1))  # type: ignore[arg-type]
        acc.add_record(FacilityRequest.TAXI_PATH, TaxiPathEdge(TaxiPathType.TAXI, 0, 1))
        acc.end_batch()

        assert acc.discarded == 1
        assert len(acc.snapshot().taxi_paths) == 1

    def test_snapshot_before_complete(self, airport: AirportReference) -> None:
        """Test snapshot refuses while batches are outstanding."""
        acc = FacilityAccumulator()
        acc.add_record(FacilityRequest.AIRPORT, airport)
        acc.end_batch()

        with pytest.raises(FacilityDataError, match="5 batches outstanding"):
            acc.snapshot()

    def test_snapshot_without_airport(self) -> None:
        """Test snapshot needs an airport reference."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.end_batch()

        with pytest.raises(FacilityDataError, match="no airport reference"):
            acc.snapshot()

    def test_end_batch_past_zero(self) -> None:
        """Test an extra end-of-batch raises."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.end_batch()

        with pytest.raises(FacilityDataError):
            acc.end_batch()

    def test_record_after_complete(self, airport: AirportReference) -> None:
        """Test records after completion are rejected."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.end_batch()

        with pytest.raises(FacilityDataError, match="after all facility batches"):
            acc.add_record(FacilityRequest.AIRPORT, airport)

    def test_snapshot_unaffected_by_later_changes(self, airport: AirportReference) -> None:
        """Test the snapshot does not share the accumulator's lists."""
        acc = FacilityAccumulator(batches_expected=1)
        acc.add_record(FacilityRequest.AIRPORT, airport)
        acc.add_record(FacilityRequest.TAXI_POINT, TaxiPoint(0.0, 0.0))
        acc.end_batch()
        snapshot = acc.snapshot()

        acc._taxi_points.append(TaxiPoint(1.0, 1.0))

        assert len(snapshot.taxi_points) == 1
