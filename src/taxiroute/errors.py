"""Exceptions raised at the taxiroute input boundaries.

Route computation itself does not raise for missing or disconnected
taxi data; it degrades and reports through RouteDiagnostics instead.
These exceptions cover misuse of the facility accumulator and bad
configuration files.
"""


class TaxiRouteError(Exception):
    """Base class for all taxiroute errors."""


class FacilityDataError(TaxiRouteError):
    """Facility records were delivered or consumed out of protocol.

    Examples: a record tagged with an unknown request identifier, a batch
    end signalled after every batch already completed, or a snapshot taken
    while batches are still outstanding.
    """


class ConfigurationError(TaxiRouteError):
    """A departure settings file could not be read or failed validation."""
