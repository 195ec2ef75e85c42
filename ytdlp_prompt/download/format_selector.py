"""
Stream format selection utilities
Single responsibility: Split yt-dlp formats into video and audio candidates and label them
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import StreamFormat

AUDIO_ONLY_MARKER = "audio only"

VIDEO_HINT = "may or may not have audio included"
AUDIO_HINT = "You can select multiple audio streams"


@dataclass(frozen=True)
class FormatOption:
    """One selectable entry for the prompt layer"""
    value: str
    label: str
    hint: str


def is_audio_only(fmt: StreamFormat) -> bool:
    """No resolution (or yt-dlp's ``audio only`` marker) and no frame rate"""
    return (fmt.resolution is None or fmt.resolution == AUDIO_ONLY_MARKER) and not fmt.fps


def sort_video_formats(formats: Iterable[StreamFormat]) -> List[StreamFormat]:
    """
    Highest first: by height, then by bitrate. Missing values count as 0.
    Equal keys keep their input order.
    """
    return sorted(formats, key=lambda f: (f.height or 0, f.tbr or 0), reverse=True)


def classify_formats(formats: Sequence[StreamFormat]) -> Tuple[List[StreamFormat], List[StreamFormat]]:
    """
    Partition formats into video-capable and audio-only candidates

    Every format lands in exactly one of the two lists.

    Args:
        formats (sequence): Formats as reported by yt-dlp

    Returns:
        tuple: (video formats sorted best first, audio-only formats in input order)
    """
    video = [f for f in formats if not is_audio_only(f)]
    audio = [f for f in formats if is_audio_only(f)]
    return sort_video_formats(video), audio


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join_present(parts: Sequence[Optional[object]]) -> str:
    return " - ".join(
        _format_number(p) if isinstance(p, (int, float)) else p
        for p in parts
        if p
    )


def video_option(fmt: StreamFormat) -> FormatOption:
    label = _join_present([
        fmt.format_note, fmt.resolution, fmt.tbr, fmt.vcodec, fmt.acodec, fmt.format_id, "Video",
    ])
    return FormatOption(value=fmt.format_id, label=label, hint=VIDEO_HINT)


def audio_option(fmt: StreamFormat) -> FormatOption:
    label = _join_present([
        fmt.format_note, fmt.language, fmt.acodec, fmt.tbr, fmt.format_id, "Audio",
    ])
    return FormatOption(value=fmt.format_id, label=label, hint=AUDIO_HINT)


def get_video_options(formats: Iterable[StreamFormat]) -> List[FormatOption]:
    return [video_option(f) for f in formats]


def get_audio_options(formats: Iterable[StreamFormat]) -> List[FormatOption]:
    return [audio_option(f) for f in formats]
