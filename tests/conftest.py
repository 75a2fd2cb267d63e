import pytest
import requests

from tubeproxy.core import DownloadFailed, EncodingDescriptor, VideoDetails, VideoInfo
from tubeproxy.utils import ServerSettings, static_root


def make_encoding(itag, container="mp4", video=True, audio=True, quality=None, abr=None, size=None):
    return EncodingDescriptor(
        itag=itag,
        container=container,
        has_video=video,
        has_audio=audio,
        quality_label=quality,
        audio_bitrate_kbps=abr,
        content_length=size,
        url=f"https://media.example/{itag}",
    )


def make_info(encodings, title="Test Video"):
    details = VideoDetails(
        title=title,
        author="Some Channel",
        duration_seconds=213,
        thumbnail_url="https://img.example/thumb.jpg",
    )
    return VideoInfo(details=details, encodings=tuple(encodings))


class FakeStream:
    def __init__(self, chunks=(b"abc", b"def"), fail_open=False, fail_after=None, content_length=None,
                 content_encoding=None):
        self.chunks = list(chunks)
        self.content_encoding = content_encoding
        self.closed = False
        self.fail_open = fail_open
        self.fail_after = fail_after
        self.content_length = content_length
        self.opened = False

    def open(self):
        if self.fail_open:
            raise DownloadFailed("upstream refused")
        self.opened = True
        return self

    def iter_chunks(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise DownloadFailed("connection reset")
            yield chunk

    def close(self):
        self.closed = True


class FakeClient:
    """Stands in for YouTubeClient; records calls."""

    def __init__(self, info=None, error=None, stream=None):
        self.info = info
        self.error = error
        self.fake_stream = stream or FakeStream()
        self.info_calls = []
        self.streamed = []

    def get_info(self, video_id):
        self.info_calls.append(video_id)
        if self.error is not None:
            raise self.error
        return self.info

    def stream(self, encoding):
        self.streamed.append(encoding)
        return self.fake_stream


@pytest.fixture
def standard_encodings():
    return [
        make_encoding(18, quality="360p", size=1000),
        make_encoding(22, quality="720p", size=5000),
        make_encoding(137, video=True, audio=False, quality="1080p"),
        make_encoding(140, video=False, audio=True, abr=128, size=3 * 1024 * 1024),
        make_encoding(139, video=False, audio=True, abr=48),
        make_encoding(251, container="webm", video=False, audio=True, abr=160),
    ]


@pytest.fixture
def settings():
    return ServerSettings(
        host="127.0.0.1",
        port=3000,
        static_root=static_root(),
        user_agent=None,
        chunk_size=1024,
    )


class FakeRaw:
    """The urllib3 side of a FakeMediaResponse."""

    def __init__(self, response):
        self.response = response
        self.decode_requests = []

    def stream(self, amt=None, decode_content=None):
        self.decode_requests.append(decode_content)
        for i, chunk in enumerate(self.response.chunks):
            if self.response.break_after is not None and i == self.response.break_after:
                raise requests.ConnectionError("reset by peer")
            yield chunk


class FakeMediaResponse:
    def __init__(self, chunks, status=200, headers=None, break_after=None):
        self.chunks = chunks
        self.status = status
        self.headers = headers or {}
        self.break_after = break_after
        self.closed = False
        self.raw = FakeRaw(self)

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def close(self):
        self.closed = True


class FakeMediaSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.headers = {}
        self.requests = []

    def get(self, url, stream=False):
        self.requests.append((url, stream, dict(self.headers)))
        if self.error:
            raise self.error
        return self.response
