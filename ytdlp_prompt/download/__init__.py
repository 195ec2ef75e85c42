"""
Download module - format choice, title composition and the yt-dlp invocation
Follows Single Responsibility Principle with separated concerns
"""

from .models import StreamFormat, VideoInfo, Selection
from .filename_utils import sanitize_tag_title, validate_filename_safety
from .format_selector import (
    FormatOption,
    is_audio_only,
    sort_video_formats,
    classify_formats,
    get_video_options,
    get_audio_options,
)
from .title_composer import TitlePart, initial_title, get_title_parts, compose_title
from .download_manager import DownloadManager, DownloadConfig

__all__ = [
    'StreamFormat',
    'VideoInfo',
    'Selection',
    'sanitize_tag_title',
    'validate_filename_safety',
    'FormatOption',
    'is_audio_only',
    'sort_video_formats',
    'classify_formats',
    'get_video_options',
    'get_audio_options',
    'TitlePart',
    'initial_title',
    'get_title_parts',
    'compose_title',
    'DownloadManager',
    'DownloadConfig',
]
