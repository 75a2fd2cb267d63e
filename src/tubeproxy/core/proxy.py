"""Download proxy: re-resolve an encoding and stream its bytes."""

import logging

from .errors import InvalidFormat
from .models import EncodingDescriptor, Itag, PreparedDownload

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = '<>:"/\\|?*'
DEFAULT_FILENAME = "download"

_UNSAFE_TABLE = str.maketrans('', '', UNSAFE_FILENAME_CHARS)


def sanitize_title(title: str) -> str:
    """Strip characters that are not allowed in filenames."""
    cleaned = (title or '').translate(_UNSAFE_TABLE)
    return cleaned or DEFAULT_FILENAME


def file_extension(encoding: EncodingDescriptor) -> str:
    # Declared extension only, the bytes are not transcoded.
    return 'mp4' if encoding.has_video else 'mp3'


def content_type(encoding: EncodingDescriptor) -> str:
    return 'video/mp4' if encoding.has_video else 'audio/mpeg'


def derive_filename(title: str, encoding: EncodingDescriptor) -> str:
    return f"{sanitize_title(title)}.{file_extension(encoding)}"


class DownloadProxy:
    """Prepares the response for one encoding of one video."""

    def __init__(self, client):
        self.client = client

    def download(self, video_id: str, itag: Itag) -> PreparedDownload:
        """Look the encoding up again and open its stream.

        Raises FetchFailure when metadata cannot be fetched, InvalidFormat
        when ``itag`` is not offered right now, and DownloadFailed when the
        stream cannot be opened. Once this returns, headers can be sent.
        """
        info = self.client.get_info(video_id)
        encoding = info.find(itag)
        if encoding is None:
            raise InvalidFormat(video_id, itag)

        stream = self.client.stream(encoding).open()
        filename = derive_filename(info.details.title, encoding)
        logger.info(f"Streaming {video_id} encoding {encoding.itag} as {filename!r}")
        return PreparedDownload(
            filename=filename,
            content_type=content_type(encoding),
            chunks=stream.iter_chunks(),
            content_length=stream.content_length,
            content_encoding=stream.content_encoding,
            close=stream.close,
        )
