"""Core functionality for tubeproxy."""

from .errors import TubeProxyError, FetchFailure, InvalidFormat, DownloadFailed
from .models import (
    EncodingDescriptor,
    VideoDetails,
    VideoInfo,
    VideoSummary,
    PreparedDownload,
)
from .selection import parse_quality, select_candidates
from .youtube_client import YouTubeClient
from .streamer import EncodingStream
from .resolver import MetadataResolver
from .proxy import DownloadProxy, derive_filename

__all__ = [
    "TubeProxyError",
    "FetchFailure",
    "InvalidFormat",
    "DownloadFailed",
    "EncodingDescriptor",
    "VideoDetails",
    "VideoInfo",
    "VideoSummary",
    "PreparedDownload",
    "parse_quality",
    "select_candidates",
    "YouTubeClient",
    "EncodingStream",
    "MetadataResolver",
    "DownloadProxy",
    "derive_filename",
]
