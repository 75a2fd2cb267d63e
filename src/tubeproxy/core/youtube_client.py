"""YouTube metadata extraction using yt-dlp."""

import logging
from typing import Dict, Optional

import requests
import yt_dlp

from .errors import FetchFailure
from .models import EncodingDescriptor, VideoDetails, VideoInfo
from .streamer import DEFAULT_CHUNK_SIZE, EncodingStream

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
}


DIRECT_PROTOCOLS = ('http', 'https')


def _has_codec(codec: Optional[str]) -> bool:
    return codec not in (None, 'none')


def _container(f: dict) -> str:
    ext = (f.get('ext') or '').lower()
    # m4a audio is an MP4 container
    return 'mp4' if ext == 'm4a' else ext


def _itag(format_id):
    format_id = str(format_id)
    return int(format_id) if format_id.isdigit() else format_id


def _quality_label(f: dict) -> Optional[str]:
    note = f.get('format_note') or ''
    if note[:1].isdigit():
        return note
    if f.get('height'):
        return f"{f['height']}p"
    return None


def to_encoding(f: dict) -> Optional[EncodingDescriptor]:
    """Map a yt-dlp format dict to an EncodingDescriptor, or None if unusable."""
    has_video = _has_codec(f.get('vcodec'))
    has_audio = _has_codec(f.get('acodec'))
    if not has_video and not has_audio:
        return None
    if f.get('format_id') is None:
        return None
    # HLS/DASH manifests are playlists, not a single byte stream
    if f.get('protocol', 'https') not in DIRECT_PROTOCOLS:
        return None

    abr = f.get('abr')
    return EncodingDescriptor(
        itag=_itag(f['format_id']),
        container=_container(f),
        has_video=has_video,
        has_audio=has_audio,
        quality_label=_quality_label(f),
        audio_bitrate_kbps=int(round(abr)) if abr else None,
        content_length=f.get('filesize') or f.get('filesize_approx'),
        url=f.get('url'),
        http_headers=f.get('http_headers'),
    )


def to_details(info: dict) -> VideoDetails:
    thumbnails = info.get('thumbnails') or []
    thumbnail = thumbnails[0].get('url') if thumbnails else None
    return VideoDetails(
        title=info.get('title') or '',
        author=info.get('uploader') or info.get('channel') or '',
        duration_seconds=int(info.get('duration') or 0),
        thumbnail_url=thumbnail or info.get('thumbnail') or '',
    )


class YouTubeClient:
    """Handles interaction with YouTube to extract metadata and open streams."""

    def __init__(self, headers: Optional[Dict[str, str]] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)
        self.chunk_size = chunk_size
        self._ydl_opts = {
            'quiet': True,
            'no_warnings': True,
            'noplaylist': True,
            'http_headers': self.headers,
        }

    def get_info(self, video_id: str) -> VideoInfo:
        """Extracts video details and every available encoding."""
        url = WATCH_URL.format(video_id=video_id)
        with yt_dlp.YoutubeDL(self._ydl_opts) as ydl:
            try:
                info = ydl.extract_info(url, download=False)
            except Exception as e:
                raise FetchFailure(f"Failed to fetch metadata for {video_id!r}: {e}") from e

        if not info:
            raise FetchFailure(f"No metadata returned for {video_id!r}")

        encodings = []
        for f in info.get('formats') or []:
            encoding = to_encoding(f)
            if encoding is not None:
                encodings.append(encoding)

        logger.debug(f"{video_id}: {len(encodings)} encodings available")
        return VideoInfo(details=to_details(info), encodings=tuple(encodings))

    def stream(self, encoding: EncodingDescriptor, session: Optional[requests.Session] = None) -> EncodingStream:
        """Returns an unopened byte stream for one encoding."""
        return EncodingStream(encoding, session=session, chunk_size=self.chunk_size, headers=self.headers)
