"""Configuration for departure routing."""

from taxiroute.settings.departure_settings import DepartureSettings

__all__ = ["DepartureSettings"]
