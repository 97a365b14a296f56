"""Adjacency graphs over the taxi point table.

Two undirected views of the same taxi path set are built:

* the unweighted graph, TAXI and PATH surfaces only, used for
  reachability and spur resolution;
* the weighted graph, which also admits PARKING connectors, used for
  shortest-distance routing to a holding-short node.

PARKING edges are kept out of the unweighted graph because their endpoints
can address the parking spot table; an index that happens to fall inside
the taxi point range would wire an unrelated taxi node into the network.

Both builders drop edges with an endpoint outside the taxi point table and
edges longer than MAX_SEGMENT_METERS. Simulator taxi networks carry long
PATH shortcuts spanning the whole field; they are fine for the simulator's
own AI but would send a waypoint-following aircraft across grass.

Typical usage:
    from taxiroute.routing.taxi_graph import build_unweighted_graph, build_weighted_graph

    graph = build_unweighted_graph(snapshot.taxi_paths, snapshot.taxi_points)
    weighted = build_weighted_graph(snapshot.taxi_paths, snapshot.taxi_points)
"""

import logging
import math
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from taxiroute.facilities.records import TaxiNodeId, TaxiPathEdge, TaxiPathType, TaxiPoint

logger = logging.getLogger(__name__)

MAX_SEGMENT_METERS = 500.0

UNWEIGHTED_EDGE_TYPES = frozenset({TaxiPathType.TAXI, TaxiPathType.PATH})
WEIGHTED_EDGE_TYPES = frozenset({TaxiPathType.TAXI, TaxiPathType.PARKING, TaxiPathType.PATH})


@dataclass(frozen=True)
class WeightedEdge:
    """Adjacency entry carrying the segment length.

    Attributes:
        to: Neighbor node index.
        distance: Euclidean length of the segment in meters.
    """

    to: TaxiNodeId
    distance: float


AdjacencyList = list[list[TaxiNodeId]]
WeightedAdjacencyList = list[list[WeightedEdge]]


def node_distance(nodes: Sequence[TaxiPoint], a: int, b: int) -> float:
    """Euclidean distance between two taxi nodes in meters."""
    return math.hypot(nodes[a].east - nodes[b].east, nodes[a].north - nodes[b].north)


def _routable_edges(
    edges: Iterable[TaxiPathEdge],
    nodes: Sequence[TaxiPoint],
    allowed: frozenset[TaxiPathType],
    max_segment_m: float,
) -> Iterator[tuple[TaxiNodeId, TaxiNodeId, float]]:
    """Yield (start, end, length) for every edge passing the type, bounds and length filters."""
    node_count = len(nodes)
    for edge in edges:
        if edge.type not in allowed:
            continue
        endpoints = edge.taxi_endpoints(node_count)
        if endpoints is None:
            continue
        start, end = endpoints
        length = node_distance(nodes, start, end)
        # NaN geometry fails this comparison too
        if not length <= max_segment_m:
            continue
        yield start, end, length


def build_unweighted_graph(
    edges: Iterable[TaxiPathEdge],
    nodes: Sequence[TaxiPoint],
    max_segment_m: float = MAX_SEGMENT_METERS,
) -> AdjacencyList:
    """Build the undirected TAXI/PATH adjacency list.

    Args:
        edges: Taxi path edges.
        nodes: Taxi point table; its length bounds the node index space.
        max_segment_m: Longest segment admitted, in meters.

    Returns:
        Adjacency list indexed by node, neighbors in edge order.
    """
    adj: AdjacencyList = [[] for _ in nodes]
    for start, end, _ in _routable_edges(edges, nodes, UNWEIGHTED_EDGE_TYPES, max_segment_m):
        adj[start].append(end)
        adj[end].append(start)

    logger.info("Built unweighted taxi graph: %d nodes, %d edges", len(adj), edge_count(adj))
    return adj


def build_weighted_graph(
    edges: Iterable[TaxiPathEdge],
    nodes: Sequence[TaxiPoint],
    max_segment_m: float = MAX_SEGMENT_METERS,
) -> WeightedAdjacencyList:
    """Build the undirected TAXI/PARKING/PATH adjacency list with segment lengths.

    Args:
        edges: Taxi path edges.
        nodes: Taxi point table; its length bounds the node index space.
        max_segment_m: Longest segment admitted, in meters.

    Returns:
        Weighted adjacency list indexed by node, neighbors in edge order.
    """
    adj: WeightedAdjacencyList = [[] for _ in nodes]
    for start, end, length in _routable_edges(edges, nodes, WEIGHTED_EDGE_TYPES, max_segment_m):
        adj[start].append(WeightedEdge(end, length))
        adj[end].append(WeightedEdge(start, length))

    logger.info("Built weighted taxi graph: %d nodes, %d edges", len(adj), edge_count(adj))
    return adj


def edge_count(graph: AdjacencyList | WeightedAdjacencyList) -> int:
    """Count undirected edges in an adjacency list."""
    return sum(len(neighbors) for neighbors in graph) // 2


def path_type_summary(edges: Iterable[TaxiPathEdge]) -> dict[TaxiPathType, int]:
    """Count taxi paths by surface type.

    Args:
        edges: Taxi path edges.

    Returns:
        Mapping of path type to count, in type-code order, zero counts omitted.
    """
    counts = Counter(edge.type for edge in edges)
    summary = {path_type: counts[path_type] for path_type in TaxiPathType if counts[path_type]}

    logger.debug(
        "Path types: %s (routed: %s)",
        ", ".join(f"{t.name}={n}" for t, n in summary.items()),
        ", ".join(sorted(t.name for t in WEIGHTED_EDGE_TYPES)),
    )
    return summary
