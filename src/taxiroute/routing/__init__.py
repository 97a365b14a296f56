"""Taxi network graphs, node selection and path search."""

from taxiroute.routing.gate_spur import GateExit, GateSpurResolution, resolve_exit
from taxiroute.routing.holding_short import find_holding_short
from taxiroute.routing.node_finder import (
    nearest_node,
    nearest_node_in_direction,
    nearest_reachable_node,
)
from taxiroute.routing.path_planner import shortest_distance_path, shortest_hop_path
from taxiroute.routing.taxi_graph import (
    MAX_SEGMENT_METERS,
    build_unweighted_graph,
    build_weighted_graph,
)

__all__ = [
    "GateExit",
    "GateSpurResolution",
    "MAX_SEGMENT_METERS",
    "build_unweighted_graph",
    "build_weighted_graph",
    "find_holding_short",
    "nearest_node",
    "nearest_node_in_direction",
    "nearest_reachable_node",
    "resolve_exit",
    "shortest_distance_path",
    "shortest_hop_path",
]
