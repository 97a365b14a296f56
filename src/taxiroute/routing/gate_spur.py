"""Gate spur resolution: where a pushback ends and how the aircraft spawns.

A gate connects to the taxi network through a short spur. The taxi node
nearest the gate in the pushback direction is usually the spur stub, not
the taxiway centerline, so the policy takes one further hop: to the
neighbor of the spur node that lies furthest along the pushback direction.
If no neighbor lies ahead, the spur node is kept and the caller is told
there was no usable hop.

Typical usage:
    from taxiroute.routing.gate_spur import GateSpurResolution

    resolution = GateSpurResolution(graph, snapshot.taxi_points)
    gate_exit = resolution.resolve(gate)
    heading = resolution.spawn_heading(gate)
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from taxiroute.facilities.records import ParkingSpot, TaxiNodeId, TaxiPathEdge, TaxiPoint
from taxiroute.geo.coordinates import bearing_deg
from taxiroute.routing.node_finder import nearest_node_in_direction
from taxiroute.routing.taxi_graph import MAX_SEGMENT_METERS, AdjacencyList, build_unweighted_graph

logger = logging.getLogger(__name__)


def push_direction(gate_heading: float) -> tuple[float, float]:
    """Unit (east, north) vector pointing opposite the gate heading."""
    rad = math.radians(gate_heading + 180.0)
    return math.sin(rad), math.cos(rad)


def next_node_in_direction(
    from_node: TaxiNodeId,
    graph: AdjacencyList,
    dir_east: float,
    dir_north: float,
    nodes: Sequence[TaxiPoint],
) -> TaxiNodeId:
    """Pick the neighbor of from_node most aligned with a direction.

    Args:
        from_node: Node to step from.
        graph: Unweighted adjacency list.
        dir_east: Direction vector, east component.
        dir_north: Direction vector, north component.
        nodes: Taxi point table.

    Returns:
        The neighbor with the largest positive dot product, or from_node
        when no neighbor lies ahead.
    """
    best = from_node
    best_dot = 0.0
    origin = nodes[from_node]
    for neighbor in graph[from_node]:
        dot = (nodes[neighbor].east - origin.east) * dir_east + (
            nodes[neighbor].north - origin.north
        ) * dir_north
        if dot > best_dot:
            best_dot = dot
            best = neighbor
    return best


@dataclass(frozen=True)
class GateExit:
    """Result of resolving a gate's pushback target.

    Attributes:
        entry_node: Spur node nearest the gate in the push direction.
        start_node: Taxiway node the pushback ends on.
        push_dir_east: Push direction unit vector, east component.
        push_dir_north: Push direction unit vector, north component.
    """

    entry_node: TaxiNodeId
    start_node: TaxiNodeId
    push_dir_east: float
    push_dir_north: float

    @property
    def has_taxiway_hop(self) -> bool:
        """Whether the pushback steps past the spur node."""
        return self.start_node != self.entry_node


class GateSpurResolution:
    """Resolves gate pushback targets and spawn headings over one taxi graph.

    Attributes:
        graph: Unweighted adjacency list.
        nodes: Taxi point table the graph indexes.

    Examples:
        >>> resolution = GateSpurResolution(graph, points)
        >>> gate_exit = resolution.resolve(gate)
        >>> gate_exit.start_node
        7
    """

    def __init__(self, graph: AdjacencyList, nodes: Sequence[TaxiPoint]) -> None:
        """Initialize the resolver.

        Args:
            graph: Unweighted adjacency list built from nodes.
            nodes: Taxi point table.
        """
        self.graph = graph
        self.nodes = nodes

    def resolve(self, gate: ParkingSpot) -> GateExit | None:
        """Find the spur entry node and the pushback end node for a gate.

        Args:
            gate: Departure parking spot.

        Returns:
            GateExit, or None if there are no taxi nodes.
        """
        dir_east, dir_north = push_direction(gate.heading)
        entry = nearest_node_in_direction(gate.east, gate.north, dir_east, dir_north, self.nodes)
        if entry is None:
            return None

        start = next_node_in_direction(entry, self.graph, dir_east, dir_north, self.nodes)
        logger.debug("Gate #%d exit: entry node %d -> start node %d", gate.number, entry, start)
        return GateExit(entry, start, dir_east, dir_north)

    def spawn_heading(self, gate: ParkingSpot) -> float:
        """Heading to spawn with so the pushback leaves the nose toward the taxiway.

        The aircraft faces opposite the entry -> start bearing, so after
        reversing to start_node it points along the taxiway. Without a usable
        hop the gate's published heading is returned.

        Args:
            gate: Departure parking spot.

        Returns:
            Heading in degrees true, 0-360.
        """
        return self.heading_for_exit(gate, self.resolve(gate))

    def heading_for_exit(self, gate: ParkingSpot, gate_exit: GateExit | None) -> float:
        """Spawn heading for a gate whose exit has already been resolved.

        Args:
            gate: Departure parking spot.
            gate_exit: Result of resolve for this gate.

        Returns:
            Heading in degrees true, 0-360.
        """
        if gate_exit is None or not gate_exit.has_taxiway_hop:
            return gate.heading

        entry = self.nodes[gate_exit.entry_node]
        start = self.nodes[gate_exit.start_node]
        bearing = bearing_deg(start.east - entry.east, start.north - entry.north)
        return (bearing + 180.0) % 360.0


def resolve_exit(
    gate: ParkingSpot, graph: AdjacencyList, nodes: Sequence[TaxiPoint]
) -> GateExit | None:
    """Resolve a gate's pushback target. See GateSpurResolution.resolve."""
    return GateSpurResolution(graph, nodes).resolve(gate)


def gate_spawn_heading(
    gate: ParkingSpot,
    edges: Sequence[TaxiPathEdge],
    nodes: Sequence[TaxiPoint],
    max_segment_m: float = MAX_SEGMENT_METERS,
) -> float:
    """Spawn heading for a gate, building the unweighted graph as needed.

    Args:
        gate: Departure parking spot.
        edges: Taxi path edges.
        nodes: Taxi point table.
        max_segment_m: Longest segment admitted to the graph.

    Returns:
        Heading in degrees true; the gate heading when there is no network.
    """
    if not edges or not nodes:
        return gate.heading
    graph = build_unweighted_graph(edges, nodes, max_segment_m)
    return GateSpurResolution(graph, nodes).spawn_heading(gate)
