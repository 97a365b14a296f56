"""Departure planning: gate -> pushback -> taxi -> lineup -> climb.

Combines the routing pieces into one waypoint chain for a departing AI
aircraft:

1. Pushback (reverse, 3 kt) from the gate to the taxiway node past the spur.
2. Taxi (15 kt) along the shortest-distance path to the holding-short node.
3. Lineup (5 kt) at the runway threshold, the last ground waypoint.
4. Climb-out ahead along the runway heading; no ON_GROUND flag, which is
   what starts the takeoff roll.

Planning never raises for missing or disconnected taxi data. It returns a
shorter chain and records what was skipped in RouteDiagnostics.

Typical usage:
    from taxiroute.departure.planner import DeparturePlanner

    planner = DeparturePlanner(DepartureSettings.load("config/departure.yaml"))
    plan = planner.plan(snapshot)
    if plan and plan.diagnostics.degraded:
        logger.warning("Degraded route: %s", plan.diagnostics.notes)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from taxiroute.departure.waypoints import (
    Waypoint,
    lineup_waypoint,
    pushback_waypoint,
    takeoff_climb,
    taxi_waypoint,
)
from taxiroute.facilities.records import FacilitySnapshot, ParkingSpot, Runway, TaxiNodeId
from taxiroute.geo.coordinates import geodetic_to_offset, meters_to_feet, offset_to_geodetic
from taxiroute.routing.gate_spur import GateSpurResolution
from taxiroute.routing.holding_short import find_holding_short
from taxiroute.routing.node_finder import nearest_reachable_node
from taxiroute.routing.path_planner import (
    path_length,
    route_taxiway_names,
    shortest_distance_path,
)
from taxiroute.routing.taxi_graph import build_unweighted_graph, build_weighted_graph
from taxiroute.settings.departure_settings import DepartureSettings

logger = logging.getLogger(__name__)


@dataclass
class RouteDiagnostics:
    """What the planner could and could not route.

    Attributes:
        omitted_waypoints: Planned waypoints that could not be emitted.
        degraded: Whether the chain is shorter than a fully routed one.
        no_facility_data: No taxi points or paths; gate went straight to lineup.
        unverified_holding_point: The taxi end node came from the nearest
            reachable fallback, not from a runway connector.
        entry_node: Gate spur node, if resolved.
        start_node: Pushback end node, if resolved.
        end_node: Taxi route end node, if resolved.
        taxiway_names: Taxiways along the route, in order.
        taxi_distance_m: Length of the taxi route in meters.
        notes: Human readable remarks for an operator.
    """

    omitted_waypoints: int = 0
    degraded: bool = False
    no_facility_data: bool = False
    unverified_holding_point: bool = False
    entry_node: TaxiNodeId | None = None
    start_node: TaxiNodeId | None = None
    end_node: TaxiNodeId | None = None
    taxiway_names: list[str] = field(default_factory=list)
    taxi_distance_m: float = 0.0
    notes: list[str] = field(default_factory=list)

    def degrade(self, note: str, omitted: int = 0) -> None:
        """Mark the route degraded and record why."""
        self.degraded = True
        self.omitted_waypoints += omitted
        self.notes.append(note)


@dataclass
class DeparturePlan:
    """A complete departure for one aircraft.

    Attributes:
        gate: Departure parking spot.
        runway: Departure runway.
        spawn_heading: Heading to spawn the aircraft with at the gate.
        waypoints: Ordered guidance waypoints.
        diagnostics: Routing diagnostics.
    """

    gate: ParkingSpot
    runway: Runway
    spawn_heading: float
    waypoints: list[Waypoint]
    diagnostics: RouteDiagnostics

    @property
    def ground_waypoints(self) -> list[Waypoint]:
        """Waypoints flown on the ground, pushback through lineup."""
        return [wp for wp in self.waypoints if wp.on_ground]

    @property
    def climb_waypoints(self) -> list[Waypoint]:
        """Airborne waypoints."""
        return [wp for wp in self.waypoints if not wp.on_ground]


def valid_parking_spots(spots: Sequence[ParkingSpot]) -> list[ParkingSpot]:
    """Keep spots with a gate number assigned, in delivery order."""
    return [spot for spot in spots if spot.is_valid]


def select_runway(runways: Sequence[Runway]) -> Runway | None:
    """Pick the first runway with a heading and length, else the first runway."""
    for runway in runways:
        if runway.is_usable:
            return runway
    return runways[0] if runways else None


def select_departure_gate(
    valid_spots: Sequence[ParkingSpot],
    preferred_number: int,
    static_gate_count: int = 5,
) -> ParkingSpot | None:
    """Pick the departure gate among valid spots.

    Args:
        valid_spots: Spots with a gate number, in delivery order.
        preferred_number: Gate number to use when present.
        static_gate_count: Spots reserved for parked traffic; the fallback
            is the first spot after them.

    Returns:
        The preferred gate, else the spot at static_gate_count, else the
        first spot; None when there are no spots.
    """
    if not valid_spots:
        return None
    for spot in valid_spots:
        if spot.number == preferred_number:
            return spot
    if static_gate_count < len(valid_spots):
        return valid_spots[static_gate_count]
    return valid_spots[0]


class DeparturePlanner:
    """Builds departure waypoint chains from facility snapshots.

    Stateless between calls; each plan is computed fresh from the snapshot
    it is given.

    Attributes:
        settings: Departure settings.

    Examples:
        >>> planner = DeparturePlanner()
        >>> plan = planner.build(gate, runway, snapshot)
        >>> [wp.speed_kts for wp in plan.ground_waypoints][:2]
        [3.0, 15.0]
    """

    def __init__(self, settings: DepartureSettings | None = None) -> None:
        """Initialize the planner.

        Args:
            settings: Optional settings; defaults when omitted.
        """
        self.settings = settings or DepartureSettings()

    def plan(self, snapshot: FacilitySnapshot) -> DeparturePlan | None:
        """Select a gate and runway and build the departure.

        Args:
            snapshot: Complete facility snapshot.

        Returns:
            DeparturePlan, or None when there is no runway or no valid gate.
        """
        runway = select_runway(snapshot.runways)
        if runway is None:
            logger.warning("No runways at %s, cannot plan departure", snapshot.airport.icao)
            return None

        gate = select_departure_gate(
            valid_parking_spots(snapshot.parking),
            self.settings.preferred_gate_number,
            self.settings.static_gate_count,
        )
        if gate is None:
            logger.warning("No usable gate spots at %s", snapshot.airport.icao)
            return None

        return self.build(gate, runway, snapshot)

    def build(
        self, gate: ParkingSpot, runway: Runway, snapshot: FacilitySnapshot
    ) -> DeparturePlan:
        """Build the waypoint chain from a gate to climb-out.

        Args:
            gate: Departure parking spot.
            runway: Departure runway.
            snapshot: Facility snapshot providing the taxi network.

        Returns:
            DeparturePlan with waypoints, spawn heading and diagnostics.
        """
        airport = snapshot.airport
        field_alt_ft = meters_to_feet(airport.altitude_m)
        thresh_lat, thresh_lon = runway.threshold
        diagnostics = RouteDiagnostics()
        waypoints: list[Waypoint] = []
        spawn_heading = gate.heading

        if snapshot.has_taxi_network:
            spawn_heading = self._add_ground_route(
                gate, snapshot, thresh_lat, thresh_lon, field_alt_ft, waypoints, diagnostics
            )
        else:
            diagnostics.no_facility_data = True
            diagnostics.degrade("no taxi network; routing gate directly to threshold", omitted=2)
            logger.warning(
                "No taxi points/paths at %s, skipping pushback and taxi", airport.icao
            )

        waypoints.append(
            lineup_waypoint(thresh_lat, thresh_lon, field_alt_ft, self.settings.lineup_speed_kts)
        )
        waypoints.extend(
            takeoff_climb(thresh_lat, thresh_lon, runway.heading, self.settings.climb_profile)
        )

        logger.info(
            "Departure from gate #%d: %d waypoints (%d omitted), spawn heading %.1f",
            gate.number,
            len(waypoints),
            diagnostics.omitted_waypoints,
            spawn_heading,
        )
        return DeparturePlan(gate, runway, spawn_heading, waypoints, diagnostics)

    def _add_ground_route(
        self,
        gate: ParkingSpot,
        snapshot: FacilitySnapshot,
        thresh_lat: float,
        thresh_lon: float,
        field_alt_ft: float,
        waypoints: list[Waypoint],
        diagnostics: RouteDiagnostics,
    ) -> float:
        """Append the pushback and taxi waypoints.

        Returns:
            Spawn heading for the gate.
        """
        airport = snapshot.airport
        nodes = snapshot.taxi_points
        max_segment_m = self.settings.max_segment_m

        graph = build_unweighted_graph(snapshot.taxi_paths, nodes, max_segment_m)
        weighted = build_weighted_graph(snapshot.taxi_paths, nodes, max_segment_m)

        resolution = GateSpurResolution(graph, nodes)
        gate_exit = resolution.resolve(gate)
        if gate_exit is None:
            diagnostics.degrade("gate exit could not be resolved", omitted=2)
            return gate.heading

        start = gate_exit.start_node
        diagnostics.entry_node = gate_exit.entry_node
        diagnostics.start_node = start
        if not gate_exit.has_taxiway_hop:
            diagnostics.notes.append("no taxiway hop past the gate spur; pushing back to spur node")

        push_lat, push_lon = offset_to_geodetic(
            airport.latitude, airport.longitude, nodes[start].east, nodes[start].north
        )
        waypoints.append(
            pushback_waypoint(push_lat, push_lon, field_alt_ft, self.settings.pushback_speed_kts)
        )

        thresh_east, thresh_north = geodetic_to_offset(
            airport.latitude, airport.longitude, thresh_lat, thresh_lon
        )
        end = find_holding_short(snapshot.taxi_paths, nodes, thresh_east, thresh_north)
        if end is None:
            end = nearest_reachable_node(start, graph, thresh_east, thresh_north, nodes)
            diagnostics.unverified_holding_point = True
            diagnostics.notes.append(
                f"unverified holding point: node {end} is nearest reachable, not a runway entry"
            )
        diagnostics.end_node = end

        path = shortest_distance_path(weighted, start, end)
        if path is None:
            diagnostics.degrade(f"no taxi path from node {start} to node {end}", omitted=1)
            logger.warning("Taxi route %d -> %d disconnected, omitting taxi segment", start, end)
            path = []
        else:
            diagnostics.taxiway_names = route_taxiway_names(
                path, snapshot.taxi_paths, snapshot.taxi_names
            )
            diagnostics.taxi_distance_m = path_length(path, nodes)
            logger.info(
                "Taxi path: %d nodes, %.0f m (%d -> %d) via %s",
                len(path),
                diagnostics.taxi_distance_m,
                start,
                end,
                " -> ".join(diagnostics.taxiway_names) or "unnamed paths",
            )

        for node in path:
            lat, lon = offset_to_geodetic(
                airport.latitude, airport.longitude, nodes[node].east, nodes[node].north
            )
            waypoints.append(taxi_waypoint(lat, lon, field_alt_ft, self.settings.taxi_speed_kts))

        return resolution.heading_for_exit(gate, gate_exit)


def build_departure(
    gate: ParkingSpot,
    runway: Runway,
    snapshot: FacilitySnapshot,
    settings: DepartureSettings | None = None,
) -> DeparturePlan:
    """Build a departure for a chosen gate and runway. See DeparturePlanner.build."""
    return DeparturePlanner(settings).build(gate, runway, snapshot)


def plan_departure(
    snapshot: FacilitySnapshot, settings: DepartureSettings | None = None
) -> DeparturePlan | None:
    """Select a gate and runway and build the departure. See DeparturePlanner.plan."""
    return DeparturePlanner(settings).plan(snapshot)
