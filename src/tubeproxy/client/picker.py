"""Client-side format picker: fetch video info, offer MP4/MP3, start the download."""

import logging
import webbrowser
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlencode, urljoin, urlparse

import requests

from .formatting import format_duration, format_file_size
from .schema import (
    ClientDataError,
    ErrorKind,
    FormatEntry,
    downloadable_formats,
    parse_video_info,
)

logger = logging.getLogger(__name__)

EMBED_URL = "https://www.youtube.com/embed/{video_id}"


class FormatOption(Enum):
    VIDEO = "video"
    AUDIO = "audio"

    @property
    def label(self) -> str:
        return "Highest Quality MP4" if self is FormatOption.VIDEO else "Highest Quality MP3"

    @property
    def extension(self) -> str:
        return "mp4" if self is FormatOption.VIDEO else "mp3"


@dataclass
class PickerView:
    """What the picker renders once the video info has loaded."""
    video_id: str
    title: str
    meta: str
    thumbnail: Optional[str]
    embed_url: str
    formats: List[FormatEntry] = field(default_factory=list)

    @property
    def options(self) -> List[FormatOption]:
        return [FormatOption.VIDEO, FormatOption.AUDIO]

    def format_for(self, option: FormatOption) -> Optional[FormatEntry]:
        for entry in self.formats:
            if (entry.has_video if option is FormatOption.VIDEO else not entry.has_video):
                return entry
        return None


@dataclass
class DownloadAction:
    """The enabled download button: its label and where it navigates."""
    label: str
    url: str
    suggested_filename: str


def video_id_from_location(location: str) -> Optional[str]:
    values = parse_qs(urlparse(location or "").query).get("v")
    return values[0] if values and values[0] else None


class FormatPicker:
    """Talks to the video-info endpoint and builds the download choice."""

    def __init__(self, server_url: str = "http://127.0.0.1:3000",
                 session: Optional[requests.Session] = None,
                 opener: Callable[[str], bool] = webbrowser.open):
        self.server_url = server_url.rstrip("/") + "/"
        self.session = session or requests.Session()
        self.opener = opener

    def initialize(self, location: str) -> PickerView:
        """Load the picker for the video named in ``location``'s query string."""
        video_id = video_id_from_location(location)
        if not video_id:
            raise ClientDataError(ErrorKind.MISSING_ID, "No video ID provided")

        payload = self._fetch_info(video_id)
        response = parse_video_info(payload)
        formats = downloadable_formats(response)
        logger.debug(f"Filtered formats: {formats}")

        return PickerView(
            video_id=video_id,
            title=response.title or "Untitled",
            meta=f"{response.author or 'Unknown'} • {format_duration(response.duration or 0)}",
            thumbnail=response.thumbnail,
            embed_url=EMBED_URL.format(video_id=video_id),
            formats=formats,
        )

    def _fetch_info(self, video_id: str) -> Dict:
        try:
            r = self.session.get(urljoin(self.server_url, "api/video-info"), params={"v": video_id})
        except requests.RequestException as e:
            raise ClientDataError(ErrorKind.HTTP_ERROR, "Failed to load video information") from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if not r.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise ClientDataError(ErrorKind.HTTP_ERROR, message or "Failed to fetch video info")
        return data

    def select(self, view: PickerView, option: FormatOption) -> DownloadAction:
        """Enable the download action for one of the two options."""
        entry = view.format_for(option)
        if entry is None:
            raise ClientDataError(ErrorKind.NO_FORMAT_FOR_OPTION, f"No {option.value} format available")

        quality = entry.quality or "Best Quality"
        size = format_file_size(entry.content_length)
        label = f"Download {quality}" + (f" ({size})" if size else "")
        query = urlencode({"v": view.video_id, "itag": entry.itag})
        return DownloadAction(
            label=label,
            url=urljoin(self.server_url, f"api/download?{query}"),
            suggested_filename=f"{view.title}.{option.extension}",
        )

    def download(self, action: DownloadAction) -> bool:
        """Hand the download URL to the browser; it does the streaming."""
        logger.info(f"Opening {action.url}")
        return self.opener(action.url)
