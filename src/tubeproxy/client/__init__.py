"""Format picker client for tubeproxy."""

from .formatting import format_duration, format_file_size
from .schema import ClientDataError, ErrorKind, FormatEntry, VideoInfoResponse
from .picker import DownloadAction, FormatOption, FormatPicker, PickerView

__all__ = [
    "format_duration",
    "format_file_size",
    "ClientDataError",
    "ErrorKind",
    "FormatEntry",
    "VideoInfoResponse",
    "DownloadAction",
    "FormatOption",
    "FormatPicker",
    "PickerView",
]
