"""Departure routing settings.

Speeds, the climb profile, the routing graph segment cap and the gate
selection preferences are tunable through a YAML file. Missing keys keep
their defaults.

Example departure.yaml:
    speeds:
      pushback_kts: 3
      taxi_kts: 15
      lineup_kts: 5
    climb_profile:
      - {distance_m: 2778, altitude_ft_agl: 1500, speed_kts: 200, throttle_pct: 100}
    routing:
      max_segment_m: 500
    gate_selection:
      preferred_gate_number: 10
      static_gate_count: 5

Typical usage:
    from taxiroute.settings import DepartureSettings

    settings = DepartureSettings.load("config/departure.yaml")
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from taxiroute.departure.waypoints import (
    DEFAULT_CLIMB_PROFILE,
    LINEUP_SPEED_KTS,
    PUSHBACK_SPEED_KTS,
    TAXI_SPEED_KTS,
    ClimbStep,
)
from taxiroute.errors import ConfigurationError
from taxiroute.routing.taxi_graph import MAX_SEGMENT_METERS

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_GATE_NUMBER = 10
DEFAULT_STATIC_GATE_COUNT = 5


@dataclass
class DepartureSettings:
    """Tunables for building a departure.

    Attributes:
        pushback_speed_kts: Pushback speed.
        taxi_speed_kts: Taxi speed along the routed path.
        lineup_speed_kts: Speed onto the runway threshold.
        climb_profile: Climb steps, nearest first.
        max_segment_m: Longest taxi path admitted to the routing graphs.
        preferred_gate_number: Gate number to depart from when present.
        static_gate_count: Valid spots reserved ahead of the fallback gate.
    """

    pushback_speed_kts: float = PUSHBACK_SPEED_KTS
    taxi_speed_kts: float = TAXI_SPEED_KTS
    lineup_speed_kts: float = LINEUP_SPEED_KTS
    climb_profile: list[ClimbStep] = field(default_factory=lambda: list(DEFAULT_CLIMB_PROFILE))
    max_segment_m: float = MAX_SEGMENT_METERS
    preferred_gate_number: int = DEFAULT_PREFERRED_GATE_NUMBER
    static_gate_count: int = DEFAULT_STATIC_GATE_COUNT

    def validate(self) -> None:
        """Check the settings are usable.

        Raises:
            ConfigurationError: If a speed or the segment cap is not positive,
                the climb profile is empty, or the profile is not monotonic
                (distance, altitude and speed strictly increasing, throttle
                non-increasing).
        """
        for name in ("pushback_speed_kts", "taxi_speed_kts", "lineup_speed_kts", "max_segment_m"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")

        if not self.climb_profile:
            raise ConfigurationError("climb_profile must have at least one step")

        for prev, step in zip(self.climb_profile, self.climb_profile[1:], strict=False):
            if not (
                step.distance_m > prev.distance_m
                and step.altitude_ft_agl > prev.altitude_ft_agl
                and step.speed_kts > prev.speed_kts
            ):
                raise ConfigurationError("climb_profile distance, altitude and speed must increase")
            if step.throttle_pct > prev.throttle_pct:
                raise ConfigurationError("climb_profile throttle must not increase")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "speeds": {
                "pushback_kts": self.pushback_speed_kts,
                "taxi_kts": self.taxi_speed_kts,
                "lineup_kts": self.lineup_speed_kts,
            },
            "climb_profile": [
                {
                    "distance_m": step.distance_m,
                    "altitude_ft_agl": step.altitude_ft_agl,
                    "speed_kts": step.speed_kts,
                    "throttle_pct": step.throttle_pct,
                }
                for step in self.climb_profile
            ],
            "routing": {"max_segment_m": self.max_segment_m},
            "gate_selection": {
                "preferred_gate_number": self.preferred_gate_number,
                "static_gate_count": self.static_gate_count,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DepartureSettings":
        """Create from a dictionary, keeping defaults for missing keys.

        Raises:
            ConfigurationError: If a value has the wrong shape or fails validation.
        """
        defaults = cls()
        speeds = data.get("speeds") or {}
        routing = data.get("routing") or {}
        gates = data.get("gate_selection") or {}

        try:
            profile = defaults.climb_profile
            if "climb_profile" in data:
                profile = [
                    ClimbStep(
                        distance_m=float(step["distance_m"]),
                        altitude_ft_agl=float(step["altitude_ft_agl"]),
                        speed_kts=float(step["speed_kts"]),
                        throttle_pct=float(step["throttle_pct"]),
                    )
                    for step in data["climb_profile"] or []
                ]

            settings = cls(
                pushback_speed_kts=float(speeds.get("pushback_kts", defaults.pushback_speed_kts)),
                taxi_speed_kts=float(speeds.get("taxi_kts", defaults.taxi_speed_kts)),
                lineup_speed_kts=float(speeds.get("lineup_kts", defaults.lineup_speed_kts)),
                climb_profile=profile,
                max_segment_m=float(routing.get("max_segment_m", defaults.max_segment_m)),
                preferred_gate_number=int(
                    gates.get("preferred_gate_number", defaults.preferred_gate_number)
                ),
                static_gate_count=int(gates.get("static_gate_count", defaults.static_gate_count)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Invalid departure settings: {e}") from e

        settings.validate()
        return settings

    @classmethod
    def load(cls, path: Path | str) -> "DepartureSettings":
        """Load settings from a YAML file.

        Args:
            path: Settings file path.

        Returns:
            Loaded settings; defaults when the file does not exist.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or the
                values are invalid.
        """
        settings_path = Path(path)
        if not settings_path.exists():
            logger.debug("No departure settings at %s, using defaults", settings_path)
            return cls()

        try:
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {settings_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{settings_path} must contain a mapping")

        settings = cls.from_dict(data)
        logger.info("Loaded departure settings from %s", settings_path)
        return settings

    def save(self, path: Path | str) -> None:
        """Write settings to a YAML file, creating parent directories.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        settings_path = Path(path)
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(settings_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to write {settings_path}: {e}") from e

        logger.info("Saved departure settings to %s", settings_path)
