"""
Tagging module - container metadata written after the download
"""

from .post_tagger import (
    OutputState,
    detect_output,
    parse_upload_date,
    build_atomicparsley_command,
    build_mkvpropedit_command,
    tag_output,
)

__all__ = [
    'OutputState',
    'detect_output',
    'parse_upload_date',
    'build_atomicparsley_command',
    'build_mkvpropedit_command',
    'tag_output',
]
