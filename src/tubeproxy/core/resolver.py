"""Reduces a video's encodings to the best video and best audio choice."""

import logging

from .models import VideoSummary
from .selection import select_candidates

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Resolves a video id to a :class:`VideoSummary`.

    Every call goes back to the extraction client; nothing is cached.
    A :class:`~tubeproxy.core.errors.FetchFailure` from the client is
    passed through untouched.
    """

    def __init__(self, client):
        self.client = client

    def resolve(self, video_id: str) -> VideoSummary:
        info = self.client.get_info(video_id)
        candidates = select_candidates(info.encodings)
        logger.debug(f"{video_id}: candidates {[e.itag for e in candidates]}")
        return VideoSummary(details=info.details, candidate_encodings=candidates)
