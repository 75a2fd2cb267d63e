"""Version management for tubeproxy."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the installed distribution version."""
    try:
        return version("tubeproxy")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
