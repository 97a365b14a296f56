"""Shortest-path search over the taxi graphs.

Typical usage:
    from taxiroute.routing.path_planner import shortest_distance_path

    path = shortest_distance_path(weighted, start_node, hold_node)
    if path is None:
        ...  # disconnected
"""

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from taxiroute.facilities.records import TaxiName, TaxiNodeId, TaxiPathEdge, TaxiPoint
from taxiroute.routing.taxi_graph import AdjacencyList, WeightedAdjacencyList, node_distance

logger = logging.getLogger(__name__)


def _reconstruct_path(prev: list[int], start: int, end: int) -> list[TaxiNodeId]:
    """Walk predecessor links from end back to start.

    Args:
        prev: Predecessor index per node.
        start: Start node.
        end: End node.

    Returns:
        Node indices from start to end.
    """
    path = [TaxiNodeId(end)]
    current = end
    while current != start:
        current = prev[current]
        path.append(TaxiNodeId(current))
    path.reverse()
    return path


def shortest_hop_path(
    graph: AdjacencyList, start: TaxiNodeId, end: TaxiNodeId
) -> list[TaxiNodeId] | None:
    """Find the path with the fewest edges using breadth-first search.

    Args:
        graph: Unweighted adjacency list.
        start: Start node.
        end: End node.

    Returns:
        Node indices from start to end, or None if disconnected or either
        node is outside the graph.
    """
    n = len(graph)
    if not (0 <= start < n and 0 <= end < n):
        return None
    if start == end:
        return [start]

    prev = [-1] * n
    prev[start] = start
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            return _reconstruct_path(prev, start, end)
        for neighbor in graph[current]:
            if prev[neighbor] == -1:
                prev[neighbor] = current
                queue.append(neighbor)

    logger.debug("No hop path from %d to %d", start, end)
    return None


def shortest_distance_path(
    graph: WeightedAdjacencyList, start: TaxiNodeId, end: TaxiNodeId
) -> list[TaxiNodeId] | None:
    """Find the shortest-distance path using Dijkstra's algorithm.

    The next node to settle is found by scanning every unvisited node, which
    is O(V^2) overall and fine for a single airport's network. The scan
    keeps the first minimum it meets, so distance ties go to the lowest
    index. The search stops as soon as end is settled.

    Args:
        graph: Weighted adjacency list.
        start: Start node.
        end: End node.

    Returns:
        Node indices from start to end, or None if disconnected or either
        node is outside the graph.
    """
    n = len(graph)
    if not (0 <= start < n and 0 <= end < n):
        return None
    if start == end:
        return [start]

    inf = float("inf")
    dist = [inf] * n
    prev = [-1] * n
    visited = [False] * n
    dist[start] = 0.0
    prev[start] = start

    while True:
        u = -1
        for i in range(n):
            if not visited[i] and dist[i] < inf and (u == -1 or dist[i] < dist[u]):
                u = i
        if u == -1 or u == end:
            break

        visited[u] = True
        for edge in graph[u]:
            candidate = dist[u] + edge.distance
            if candidate < dist[edge.to]:
                dist[edge.to] = candidate
                prev[edge.to] = u

    if prev[end] == -1:
        logger.debug("No distance path from %d to %d", start, end)
        return None
    return _reconstruct_path(prev, start, end)


def path_length(path: Sequence[TaxiNodeId], nodes: Sequence[TaxiPoint]) -> float:
    """Sum the segment lengths along a path, in meters."""
    return sum(node_distance(nodes, a, b) for a, b in zip(path, path[1:], strict=False))


def route_taxiway_names(
    path: Sequence[TaxiNodeId],
    edges: Iterable[TaxiPathEdge],
    names: Sequence[TaxiName],
) -> list[str]:
    """Name the taxiways a path travels along, in order.

    Consecutive segments on the same taxiway collapse to one entry and
    unnamed segments are skipped.

    Args:
        path: Node indices from start to end.
        edges: Taxi path edges, used to map node pairs to name indices.
        names: Taxi name table.

    Returns:
        Taxiway names, e.g. ["B", "A", "A4"].

    Examples:
        >>> route_taxiway_names(path, snapshot.taxi_paths, snapshot.taxi_names)
        ['F', 'B']
    """
    edge_names: dict[tuple[int, int], str] = {}
    for edge in edges:
        name = names[edge.name_index].name if 0 <= edge.name_index < len(names) else ""
        edge_names[(edge.start, edge.end)] = name
        edge_names[(edge.end, edge.start)] = name

    result: list[str] = []
    prev_name = ""
    for a, b in zip(path, path[1:], strict=False):
        name = edge_names.get((a, b), "")
        if name and name != prev_name:
            result.append(name)
        if name:
            prev_name = name

    return result
