"""Chunked pass-through of an encoding's bytes."""

import logging
from typing import Dict, Iterator, Optional

import requests
import urllib3

from .errors import DownloadFailed
from .models import EncodingDescriptor

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 64


class EncodingStream:
    """Streams the media bytes of one encoding from its source URL.

    The upstream request is opened by :meth:`open` so that connection and
    status errors surface before any response headers go out. The bytes are
    then pulled lazily by :meth:`iter_chunks`.
    """

    def __init__(self, encoding: EncodingDescriptor, session: Optional[requests.Session] = None,
                 chunk_size: int = DEFAULT_CHUNK_SIZE, headers: Optional[Dict[str, str]] = None):
        self.encoding = encoding
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)
        if encoding.http_headers:
            self.session.headers.update(encoding.http_headers)

        self._response: Optional[requests.Response] = None

    @property
    def content_length(self) -> Optional[int]:
        if self._response is None:
            return None
        content_length = self._response.headers.get('content-length')
        return int(content_length) if content_length and content_length.isdigit() else None

    @property
    def content_encoding(self) -> Optional[str]:
        if self._response is None:
            return None
        return self._response.headers.get('content-encoding')

    def open(self) -> "EncodingStream":
        """Connect to the media URL. Raises DownloadFailed on any failure."""
        if not self.encoding.url:
            raise DownloadFailed(f"Encoding {self.encoding.itag} has no media URL")
        r = None
        try:
            r = self.session.get(self.encoding.url, stream=True)
            r.raise_for_status()
        except requests.RequestException as e:
            if r is not None:
                r.close()
            raise DownloadFailed(f"Could not open stream for encoding {self.encoding.itag}: {e}") from e
        self._response = r
        return self

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield the body in order, as sent by the source (no content decoding).

        Raises DownloadFailed if the transfer breaks.
        """
        if self._response is None:
            self.open()
        sent = 0
        try:
            for chunk in self._response.raw.stream(self.chunk_size, decode_content=False):
                if chunk:
                    sent += len(chunk)
                    yield chunk
        except (requests.RequestException, urllib3.exceptions.HTTPError, OSError) as e:
            logger.error(f"Stream for encoding {self.encoding.itag} broke off after {sent} bytes: {e}")
            raise DownloadFailed(f"Stream interrupted after {sent} bytes") from e
        finally:
            self.close()
        logger.debug(f"Streamed {sent} bytes for encoding {self.encoding.itag}")

    def close(self):
        """Release the upstream connection. Safe to call more than once."""
        if self._response is not None:
            self._response.close()
            self._response = None
