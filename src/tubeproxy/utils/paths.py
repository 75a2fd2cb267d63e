"""Path resolution utilities."""

from pathlib import Path


def package_root() -> Path:
    return Path(__file__).parent.parent


def static_root() -> Path:
    """Directory holding the bundled browser UI."""
    return package_root() / "static"
