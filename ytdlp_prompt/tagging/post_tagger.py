"""
Container metadata tagging after download
Single responsibility: Find the file yt-dlp produced and tag it with the matching tool

The output is looked up as ``<base>.mp4`` first, then ``<base>.mkv``. Only the
first match is tagged. The downloaded file is never removed, even when tagging
fails.
"""

import os
import re
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ytdlp_prompt.download.models import VideoInfo
from ytdlp_prompt.utils.dependencies import verify_atomicparsley, verify_mkvpropedit
from ytdlp_prompt.utils.error_handler import ErrorCategory, Outcome
from ytdlp_prompt.utils.observability import log_event, time_block
from ytdlp_prompt.utils.shell import run_command

_UPLOAD_DATE_RE = re.compile(r'^(\d{4})(\d{2})(\d{2})')


class OutputState(Enum):
    AWAITING_OUTPUT = "awaiting_output"
    MP4_FOUND = "mp4_found"
    MKV_FOUND = "mkv_found"
    NOT_FOUND = "not_found"


def detect_output(output_base: str) -> Tuple[OutputState, Optional[str]]:
    """
    Check which container yt-dlp produced

    Returns:
        tuple: (state, path of the found file or None)
    """
    for state, ext in ((OutputState.MP4_FOUND, 'mp4'), (OutputState.MKV_FOUND, 'mkv')):
        path = f'{output_base}.{ext}'
        if os.path.exists(path):
            return state, path
    return OutputState.NOT_FOUND, None


def parse_upload_date(upload_date: Optional[str]) -> Tuple[str, str, str]:
    """``YYYYMMDD...`` to (year, month, day); empty strings when absent or malformed"""
    match = _UPLOAD_DATE_RE.match(upload_date or '')
    if not match:
        return '', '', ''
    return match.group(1), match.group(2), match.group(3)


def build_atomicparsley_command(tool: str, path: str, tag_title: str, info: VideoInfo) -> List[str]:
    year, month, day = parse_upload_date(info.upload_date)
    return [
        tool,
        path,
        '--overWrite',
        '--title', tag_title,
        '--TVNetwork', info.extractor or '',
        '--year', f'{year}-{month}-{day}',
    ]


def build_mkvpropedit_command(tool: str, path: str, tag_title: str) -> List[str]:
    return [tool, path, '--edit', 'info', '--set', f'title={tag_title}']


def _run_tagger(cmd: List[str], on_command: Optional[Callable[[List[str]], None]],
                echo: Optional[Callable[[str], None]]) -> Outcome:
    if on_command:
        on_command(cmd)
    with time_block("tag", stage="tag", op=os.path.basename(cmd[0])):
        outcome = run_command(cmd, cwd=os.getcwd(), echo=echo)
    if not outcome.ok:
        error = outcome.error
        return Outcome.failure(
            ErrorCategory.SUBPROCESS,
            "Failed to tag the video.",
            command=cmd,
            returncode=error.returncode,
            stdout=error.stdout,
            stderr=error.stderr,
            cause=error.cause,
        )
    return Outcome.success(cmd[1])


def tag_output(
    output_base: str,
    tag_title: str,
    info: VideoInfo,
    on_command: Optional[Callable[[List[str]], None]] = None,
    echo: Optional[Callable[[str], None]] = None,
) -> Outcome:
    """
    Tag the downloaded file according to its container

    Args:
        output_base (str): Output path without extension
        tag_title (str): Unsanitized title to embed
        info (VideoInfo): Source metadata (extractor, upload date)
        on_command (callable, optional): Called with the tagging command before it runs
        echo (callable, optional): Receives the tool's output lines

    Returns:
        Outcome: path of the tagged file, or a failure
    """
    state, path = detect_output(output_base)
    log_event("info", f"{OutputState.AWAITING_OUTPUT.value} -> {state.value}", stage="tag")

    if state is OutputState.MP4_FOUND:
        resolved = verify_atomicparsley()
        if not resolved.ok:
            return resolved
        return _run_tagger(build_atomicparsley_command(resolved.value, path, tag_title, info),
                           on_command, echo)

    if state is OutputState.MKV_FOUND:
        resolved = verify_mkvpropedit()
        if not resolved.ok:
            return resolved
        return _run_tagger(build_mkvpropedit_command(resolved.value, path, tag_title),
                           on_command, echo)

    return Outcome.failure(ErrorCategory.NO_OUTPUT, "Failed to download the video.")
