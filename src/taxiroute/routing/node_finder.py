"""Nearest-node queries over the taxi point table.

All searches are linear scans in index order with a strict less-than
comparison, so equal distances resolve to the lowest node index.

Typical usage:
    from taxiroute.routing.node_finder import nearest_node, nearest_reachable_node

    node = nearest_node(gate.east, gate.north, snapshot.taxi_points)
"""

import logging
from collections import deque
from collections.abc import Sequence

from taxiroute.facilities.records import TaxiNodeId, TaxiPoint
from taxiroute.routing.taxi_graph import AdjacencyList

logger = logging.getLogger(__name__)


def _squared_distance(node: TaxiPoint, east: float, north: float) -> float:
    de = node.east - east
    dn = node.north - north
    return de * de + dn * dn


def nearest_node(
    target_east: float, target_north: float, nodes: Sequence[TaxiPoint]
) -> TaxiNodeId | None:
    """Find the taxi node closest to a local position.

    Args:
        target_east: East offset in meters.
        target_north: North offset in meters.
        nodes: Taxi point table.

    Returns:
        Index of the nearest node, or None if the table is empty.
    """
    best: int | None = None
    best_dist = float("inf")
    for i, node in enumerate(nodes):
        dist = _squared_distance(node, target_east, target_north)
        if dist < best_dist:
            best_dist = dist
            best = i

    return TaxiNodeId(best) if best is not None else None


def nearest_node_in_direction(
    origin_east: float,
    origin_north: float,
    dir_east: float,
    dir_north: float,
    nodes: Sequence[TaxiPoint],
) -> TaxiNodeId | None:
    """Find the nearest taxi node lying ahead of an origin along a direction.

    Only nodes whose displacement from the origin has a strictly positive
    dot product with the direction are considered. If none qualifies the
    search falls back to nearest_node.

    Args:
        origin_east: Origin east offset in meters.
        origin_north: Origin north offset in meters.
        dir_east: Direction vector, east component.
        dir_north: Direction vector, north component.
        nodes: Taxi point table.

    Returns:
        Index of the selected node, or None if the table is empty.

    Examples:
        >>> points = [TaxiPoint(-10.0, 0.0), TaxiPoint(30.0, 0.0)]
        >>> nearest_node_in_direction(0.0, 0.0, 1.0, 0.0, points)
        1
    """
    best: int | None = None
    best_dist = float("inf")
    for i, node in enumerate(nodes):
        de = node.east - origin_east
        dn = node.north - origin_north
        if de * dir_east + dn * dir_north <= 0:
            continue
        dist = de * de + dn * dn
        if dist < best_dist:
            best_dist = dist
            best = i

    if best is None:
        return nearest_node(origin_east, origin_north, nodes)
    return TaxiNodeId(best)


def reachable_nodes(from_node: TaxiNodeId, graph: AdjacencyList) -> list[bool]:
    """Flood-fill the graph breadth-first from a node.

    Args:
        from_node: Start node index.
        graph: Unweighted adjacency list.

    Returns:
        Visited flags indexed by node; from_node is always reachable.
    """
    visited = [False] * len(graph)
    visited[from_node] = True
    queue = deque([from_node])
    while queue:
        current = queue.popleft()
        for neighbor in graph[current]:
            if not visited[neighbor]:
                visited[neighbor] = True
                queue.append(neighbor)
    return visited


def nearest_reachable_node(
    from_node: TaxiNodeId,
    graph: AdjacencyList,
    target_east: float,
    target_north: float,
    nodes: Sequence[TaxiPoint],
) -> TaxiNodeId:
    """Find the node reachable from from_node that is closest to a target.

    Args:
        from_node: Start node index.
        graph: Unweighted adjacency list.
        target_east: Target east offset in meters.
        target_north: Target north offset in meters.
        nodes: Taxi point table.

    Returns:
        Index of the nearest reachable node; from_node itself when nothing
        else is connected.
    """
    visited = reachable_nodes(from_node, graph)

    best = from_node
    best_dist = float("inf")
    for i, node in enumerate(nodes):
        if not visited[i]:
            continue
        dist = _squared_distance(node, target_east, target_north)
        if dist < best_dist:
            best_dist = dist
            best = TaxiNodeId(i)

    logger.debug(
        "Nearest reachable node from %d: %d (%d reachable)", from_node, best, sum(visited)
    )
    return best
