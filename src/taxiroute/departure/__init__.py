"""Departure waypoint synthesis.

Typical usage:
    from taxiroute.departure.planner import DeparturePlanner
    from taxiroute.departure.waypoints import Waypoint, WaypointFlags
"""
