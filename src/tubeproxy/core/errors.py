"""Error types raised by the resolver and the download proxy."""


class TubeProxyError(Exception):
    """Base class for tubeproxy failures."""


class FetchFailure(TubeProxyError):
    """The extraction client could not produce metadata for a video."""


class InvalidFormat(TubeProxyError):
    """The requested encoding is not offered for the video."""

    def __init__(self, video_id: str, itag):
        super().__init__(f"Encoding {itag!r} is not available for video {video_id!r}")
        self.video_id = video_id
        self.itag = itag


class DownloadFailed(TubeProxyError):
    """The byte stream for an encoding could not be opened or broke off."""
