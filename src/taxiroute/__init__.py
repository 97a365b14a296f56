"""Ground departure routing for simulated AI aircraft.

Turns a snapshot of airport facility records (parking spots, taxi nodes,
taxi paths, runways) into a gate -> runway -> climb waypoint chain.

Typical usage:
    from taxiroute.departure.planner import DeparturePlanner

    plan = DeparturePlanner().plan(snapshot)
    if plan:
        send_to_simulator(plan.waypoints)
"""

from taxiroute.version import __version__

__all__ = ["__version__"]
