import pytest
import requests

from tubeproxy.client import ClientDataError, ErrorKind, FormatOption, FormatPicker
from tubeproxy.client.cli import build_location, main as pick_main
from tubeproxy.client.formatting import format_duration, format_file_size

GOOD_BODY = {
    "title": "Test Video",
    "author": "Some Channel",
    "duration": 3725,
    "thumbnail": "https://img.example/thumb.jpg",
    "formats": [
        {"itag": 22, "container": "mp4", "hasVideo": True, "hasAudio": True,
         "quality": "720p", "contentLength": "1572864"},
        {"itag": 140, "container": "mp4", "hasVideo": False, "hasAudio": True,
         "quality": "128kbps Audio", "contentLength": None},
    ],
}


class FakeResponse:
    def __init__(self, body, status=200):
        self.body = body
        self.status_code = status

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error:
            raise self.error
        return self.response


def picker_for(body, status=200, opened=None):
    session = FakeSession(FakeResponse(body, status))
    opener = (opened.append if opened is not None else lambda url: True)
    return FormatPicker("http://localhost:3000", session=session, opener=opener), session


@pytest.mark.parametrize("value,expected", [
    (0, ""),
    (None, ""),
    ("", ""),
    (500, "500.0 B"),
    (1024, "1.0 KB"),
    (1536, "1.5 KB"),
    (1048576, "1.0 MB"),
    ("1048576", "1.0 MB"),
    (5 * 1024 ** 3, "5.0 GB"),
    (3 * 1024 ** 4, "3072.0 GB"),
])
def test_format_file_size(value, expected):
    assert format_file_size(value) == expected


@pytest.mark.parametrize("value,expected", [
    (65, "1:05"),
    (3725, "1:02:05"),
    (5, "0:05"),
    (0, "0:00"),
    (600, "10:00"),
])
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_initialize_builds_view():
    picker, session = picker_for(GOOD_BODY)
    view = picker.initialize("http://localhost:3000/?v=abc123")

    assert session.calls == [("http://localhost:3000/api/video-info", {"v": "abc123"})]
    assert view.title == "Test Video"
    assert view.meta == "Some Channel • 1:02:05"
    assert view.embed_url == "https://www.youtube.com/embed/abc123"
    assert [o.label for o in view.options] == ["Highest Quality MP4", "Highest Quality MP3"]
    assert view.format_for(FormatOption.VIDEO).itag == 22
    assert view.format_for(FormatOption.AUDIO).itag == 140


def test_missing_video_id():
    picker, session = picker_for(GOOD_BODY)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("http://localhost:3000/")
    assert exc.value.kind is ErrorKind.MISSING_ID
    assert session.calls == []


def test_server_error_message_is_shown():
    picker, _ = picker_for({"error": "Failed to fetch video information"}, status=500)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("/?v=abc123")
    assert exc.value.kind is ErrorKind.HTTP_ERROR
    assert exc.value.message == "Failed to fetch video information"


def test_server_error_without_body():
    picker, _ = picker_for(ValueError("not json"), status=502)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("/?v=abc123")
    assert exc.value.message == "Failed to fetch video info"


def test_connection_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    picker = FormatPicker(session=session)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("/?v=abc123")
    assert exc.value.kind is ErrorKind.HTTP_ERROR


@pytest.mark.parametrize("body", [
    {"title": "x"},
    {"title": "x", "formats": "nope"},
    ["not", "an", "object"],
])
def test_invalid_shape(body):
    picker, _ = picker_for(body)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("/?v=abc123")
    assert exc.value.kind is ErrorKind.INVALID_DATA
    assert exc.value.message == "Invalid format data received"


def test_no_valid_formats():
    body = dict(GOOD_BODY, formats=[
        {"container": "mp4", "hasVideo": True, "hasAudio": True},
        {"itag": 43, "container": "webm", "hasVideo": True, "hasAudio": True},
        {"itag": 137, "container": "mp4", "hasVideo": True, "hasAudio": False},
        "garbage",
    ])
    picker, _ = picker_for(body)
    with pytest.raises(ClientDataError) as exc:
        picker.initialize("/?v=abc123")
    assert exc.value.kind is ErrorKind.NO_VALID_FORMATS


def test_select_and_download_audio():
    opened = []
    picker, _ = picker_for(GOOD_BODY, opened=opened)
    view = picker.initialize("/?v=abc123")

    action = picker.select(view, FormatOption.AUDIO)
    assert action.label == "Download 128kbps Audio"
    assert action.url == "http://localhost:3000/api/download?v=abc123&itag=140"
    assert action.suggested_filename == "Test Video.mp3"

    picker.download(action)
    assert opened == [action.url]


def test_select_video_label_has_size():
    picker, _ = picker_for(GOOD_BODY)
    view = picker.initialize("/?v=abc123")
    assert picker.select(view, FormatOption.VIDEO).label == "Download 720p (1.5 MB)"


def test_select_unavailable_option():
    body = dict(GOOD_BODY, formats=GOOD_BODY["formats"][1:])
    picker, _ = picker_for(body)
    view = picker.initialize("/?v=abc123")
    with pytest.raises(ClientDataError) as exc:
        picker.select(view, FormatOption.VIDEO)
    assert exc.value.kind is ErrorKind.NO_FORMAT_FOR_OPTION


def test_untitled_fallbacks():
    body = {"formats": GOOD_BODY["formats"]}
    picker, _ = picker_for(body)
    view = picker.initialize("/?v=abc123")
    assert view.title == "Untitled"
    assert view.meta == "Unknown • 0:00"


def test_build_location():
    assert build_location("http://localhost:3000/", "abc123") == "http://localhost:3000/?v=abc123"
    assert build_location("http://x", "http://host/?v=zz") == "http://host/?v=zz"


def test_cli_reports_missing_server(monkeypatch, capsys):
    def refuse(self, url, params=None):
        raise requests.ConnectionError("refused")
    monkeypatch.setattr(requests.Session, "get", refuse)

    assert pick_main(["abc123", "--server", "http://127.0.0.1:1"]) == 1
    assert "Failed to load video information" in capsys.readouterr().err
