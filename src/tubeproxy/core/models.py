"""Data models for video metadata and encodings."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Tuple, Union
from urllib.parse import quote


Itag = Union[int, str]


@dataclass(frozen=True)
class EncodingDescriptor:
    """One encoding (container/codec/quality combination) of a video."""
    itag: Itag
    container: str      # e.g. "mp4"
    has_video: bool
    has_audio: bool
    quality_label: Optional[str] = None     # e.g. "1080p"
    audio_bitrate_kbps: Optional[int] = None
    content_length: Optional[int] = None
    url: Optional[str] = field(default=None, repr=False)
    http_headers: Optional[Dict[str, str]] = field(default=None, repr=False, compare=False)

    @property
    def is_audio_only(self) -> bool:
        return self.has_audio and not self.has_video

    def to_dict(self) -> dict:
        """Wire representation used by the video-info endpoint."""
        if self.has_video:
            quality = self.quality_label or "Highest Quality"
        else:
            quality = f"{self.audio_bitrate_kbps}kbps Audio" if self.audio_bitrate_kbps else "Audio"
        return {
            "itag": self.itag,
            "container": self.container,
            "hasVideo": self.has_video,
            "hasAudio": self.has_audio,
            "quality": quality,
            "contentLength": str(self.content_length) if self.content_length else None,
        }


@dataclass(frozen=True)
class VideoDetails:
    """Descriptive metadata for a single video."""
    title: str
    author: str
    duration_seconds: int
    thumbnail_url: str


@dataclass(frozen=True)
class VideoInfo:
    """Everything the extraction client reports for a video."""
    details: VideoDetails
    encodings: Tuple[EncodingDescriptor, ...]

    def find(self, itag: Itag) -> Optional[EncodingDescriptor]:
        """Look up an encoding by id; ids compare as strings."""
        wanted = str(itag)
        for encoding in self.encodings:
            if str(encoding.itag) == wanted:
                return encoding
        return None


@dataclass(frozen=True)
class VideoSummary:
    """Video details reduced to the best video and best audio encodings."""
    details: VideoDetails
    candidate_encodings: Tuple[EncodingDescriptor, ...]

    def to_dict(self) -> dict:
        return {
            "title": self.details.title,
            "formats": [e.to_dict() for e in self.candidate_encodings],
            "thumbnail": self.details.thumbnail_url,
            "duration": self.details.duration_seconds,
            "author": self.details.author,
        }


@dataclass
class PreparedDownload:
    """Headers and body for a proxied download."""
    filename: str
    content_type: str
    chunks: Iterator[bytes]
    content_length: Optional[int] = None
    content_encoding: Optional[str] = None
    close: Callable[[], None] = field(default=lambda: None, repr=False)

    @property
    def content_disposition(self) -> str:
        try:
            self.filename.encode('latin-1')
        except UnicodeEncodeError:
            # Header values must be latin-1, so send an ASCII name plus the RFC 5987 form
            fallback = self.filename.encode('ascii', 'ignore').decode('ascii').strip()
            if fallback.startswith('.'):
                fallback = "download" + fallback
            return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(self.filename)}'
        return f'attachment; filename="{self.filename}"'
