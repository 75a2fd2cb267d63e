"""Rules for picking the best video and audio encodings."""

import re
from typing import Iterable, List, Optional, Tuple

from .models import EncodingDescriptor

MP4 = "mp4"

_DIGIT_RUN = re.compile(r"\d+")


def parse_quality(label: Optional[str]) -> int:
    """Turn a quality label into a number for ranking.

    The first run of digits in the label is the value, so ``"1080p"`` and
    ``"1080p60"`` both give 1080. A missing label or one without digits
    gives 0.
    """
    if not label:
        return 0
    match = _DIGIT_RUN.search(label)
    return int(match.group()) if match else 0


def partition_mp4(encodings: Iterable[EncodingDescriptor]) -> Tuple[List[EncodingDescriptor], List[EncodingDescriptor]]:
    """Split mp4 encodings into (video with audio, audio only), keeping order."""
    video, audio = [], []
    for encoding in encodings:
        if encoding.container != MP4 or not encoding.has_audio:
            continue
        if encoding.has_video:
            video.append(encoding)
        else:
            audio.append(encoding)
    return video, audio


def _first_max(encodings: List[EncodingDescriptor], key) -> Optional[EncodingDescriptor]:
    # max() returns the first maximal element, which keeps input order on ties
    if not encodings:
        return None
    return max(encodings, key=key)


def best_video(encodings: Iterable[EncodingDescriptor]) -> Optional[EncodingDescriptor]:
    video, _ = partition_mp4(encodings)
    return _first_max(video, key=lambda e: parse_quality(e.quality_label))


def best_audio(encodings: Iterable[EncodingDescriptor]) -> Optional[EncodingDescriptor]:
    _, audio = partition_mp4(encodings)
    return _first_max(audio, key=lambda e: e.audio_bitrate_kbps or 0)


def select_candidates(encodings: Iterable[EncodingDescriptor]) -> Tuple[EncodingDescriptor, ...]:
    """Return the best video encoding then the best audio encoding, if any."""
    encodings = list(encodings)
    picked = (best_video(encodings), best_audio(encodings))
    return tuple(e for e in picked if e is not None)
