"""Holding-short node detection.

The facility data has no explicit hold-short marker. Runway entries show
up as PARKING-type connectors with exactly one endpoint on a runway
surface path; the other endpoint is the taxiway node where an aircraft
holds before entering.
"""

import logging
from collections.abc import Iterable, Sequence

from taxiroute.facilities.records import TaxiNodeId, TaxiPathEdge, TaxiPathType, TaxiPoint

logger = logging.getLogger(__name__)


def runway_nodes(edges: Iterable[TaxiPathEdge]) -> set[int]:
    """Collect every raw index that is an endpoint of a RUNWAY path."""
    nodes: set[int] = set()
    for edge in edges:
        if edge.type == TaxiPathType.RUNWAY:
            nodes.add(edge.start)
            nodes.add(edge.end)
    return nodes


def holding_short_candidates(
    edges: Sequence[TaxiPathEdge], node_count: int
) -> list[TaxiNodeId]:
    """List holding-short nodes in edge order.

    A candidate is the non-runway endpoint of a PARKING path whose other
    endpoint is a runway node. Candidates outside the taxi point table are
    skipped. A node reached through several connectors appears once per
    connector.

    Args:
        edges: Taxi path edges.
        node_count: Size of the taxi point table.

    Returns:
        Candidate node indices.
    """
    on_runway = runway_nodes(edges)
    candidates: list[TaxiNodeId] = []

    for edge in edges:
        if edge.type != TaxiPathType.PARKING:
            continue

        start_on = edge.start in on_runway
        end_on = edge.end in on_runway
        if start_on and not end_on:
            candidate = edge.end
        elif end_on and not start_on:
            candidate = edge.start
        else:
            continue

        if 0 <= candidate < node_count:
            candidates.append(TaxiNodeId(candidate))

    return candidates


def find_holding_short(
    edges: Sequence[TaxiPathEdge],
    nodes: Sequence[TaxiPoint],
    thresh_east: float,
    thresh_north: float,
) -> TaxiNodeId | None:
    """Find the holding-short node nearest a runway threshold.

    Args:
        edges: Taxi path edges.
        nodes: Taxi point table.
        thresh_east: Threshold east offset in meters.
        thresh_north: Threshold north offset in meters.

    Returns:
        The nearest holding-short node, or None if the network has none.
        Callers fall back to nearest_reachable_node.
    """
    best: TaxiNodeId | None = None
    best_dist = float("inf")
    for candidate in holding_short_candidates(edges, len(nodes)):
        de = nodes[candidate].east - thresh_east
        dn = nodes[candidate].north - thresh_north
        dist = de * de + dn * dn
        if dist < best_dist:
            best_dist = dist
            best = candidate

    if best is None:
        logger.warning("No holding-short node found in %d taxi paths", len(edges))
    return best
