"""tubeproxy: pick the best MP4/MP3 encoding of a video and proxy the download."""

from .version import __version__

__all__ = ["__version__"]
