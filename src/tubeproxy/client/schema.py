"""Declared shape of the video-info response, checked at the client boundary."""

import logging
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    MISSING_ID = "missing_id"
    HTTP_ERROR = "http_error"
    INVALID_DATA = "invalid_data"
    NO_VALID_FORMATS = "no_valid_formats"
    NO_FORMAT_FOR_OPTION = "no_format_for_option"


class ClientDataError(Exception):
    """A problem the picker shows to the user instead of the download options."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class FormatEntry(BaseModel):
    """One downloadable encoding as listed by the server."""
    model_config = ConfigDict(populate_by_name=True)

    itag: Union[int, str]
    container: str = Field(min_length=1)
    has_video: bool = Field(alias="hasVideo")
    has_audio: bool = Field(alias="hasAudio")
    quality: Optional[str] = None
    content_length: Optional[Union[int, str]] = Field(default=None, alias="contentLength")

    @field_validator("itag")
    @classmethod
    def itag_not_empty(cls, v):
        if v == "" or v == 0:
            raise ValueError("itag must be set")
        return v

    @property
    def is_video(self) -> bool:
        return self.has_video and self.has_audio

    @property
    def is_audio(self) -> bool:
        return self.has_audio and not self.has_video

    @property
    def is_downloadable(self) -> bool:
        return self.container == "mp4" and (self.is_video or self.is_audio)


class VideoInfoResponse(BaseModel):
    """Body of a successful ``/api/video-info`` call."""
    title: Optional[str] = None
    author: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: Optional[float] = None
    formats: List[Any]


def parse_video_info(payload: Any) -> VideoInfoResponse:
    """Validate the top-level shape. Raises ClientDataError(INVALID_DATA)."""
    try:
        return VideoInfoResponse.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Rejected video info payload: {e}")
        raise ClientDataError(ErrorKind.INVALID_DATA, "Invalid format data received") from e


def downloadable_formats(response: VideoInfoResponse) -> List[FormatEntry]:
    """Entries that validate and are mp4 video+audio or mp4 audio-only."""
    formats = []
    for raw in response.formats:
        try:
            entry = FormatEntry.model_validate(raw)
        except ValidationError:
            logger.debug(f"Invalid format: {raw!r}")
            continue
        if entry.is_downloadable:
            formats.append(entry)
    if not formats:
        raise ClientDataError(ErrorKind.NO_VALID_FORMATS, "No valid formats available for this video")
    return formats
