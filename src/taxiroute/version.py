"""Version information for taxiroute."""

__version__ = "0.1.0"
__license__ = "MIT"


def get_about_info() -> dict[str, str]:
    """Get package metadata.

    Returns:
        Dictionary with name, version, license and description.
    """
    return {
        "name": "taxiroute",
        "version": __version__,
        "license": __license__,
        "description": "Gate to runway departure routing over airport taxi networks",
    }
