"""
Main download manager - Talks to yt-dlp
Single responsibility: Fetch video info and run the download for a finished Selection
"""

import json
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ytdlp_prompt.utils.config_utils import load_key
from ytdlp_prompt.utils.error_handler import ErrorCategory, Outcome
from ytdlp_prompt.utils.observability import log_event, time_block
from ytdlp_prompt.utils.shell import run_command

from .filename_utils import sanitize_tag_title
from .models import Selection, VideoInfo

# Fixed feature flags passed to every download
DOWNLOAD_FLAGS = [
    '--audio-multistreams',
    '--embed-subs',
    '--embed-thumbnail',
    '--embed-metadata',
    '--embed-info-json',
]

# yt-dlp substitutes the real container extension here
EXT_TEMPLATE = '.%(ext)s'


@dataclass
class DownloadConfig:
    """Configuration for download operations"""
    ytdlp: str = field(default_factory=lambda: load_key("tools.ytdlp"))
    output_dir: Optional[str] = None


class DownloadManager:
    """
    Runs yt-dlp twice per session: once for ``-j`` info, once for the download
    """

    def __init__(self, config: Optional[DownloadConfig] = None):
        self.config = config or DownloadConfig()

    @property
    def output_dir(self) -> str:
        return self.config.output_dir or os.getcwd()

    def fetch_video_info(self, url: str) -> Outcome:
        """
        Ask yt-dlp for the JSON description of ``url``

        Returns:
            Outcome: VideoInfo, or an INFO_FETCH failure
        """
        cmd = [self.config.ytdlp, '-j', url]
        with time_block("fetch video info", stage="info", op="ytdlp"):
            outcome = run_command(cmd, cwd=self.output_dir)

        if not outcome.ok:
            error = outcome.error
            return Outcome.failure(
                ErrorCategory.INFO_FETCH,
                "Failed to get video info with yt-dlp",
                command=cmd,
                returncode=error.returncode,
                stdout=error.stdout,
                stderr=error.stderr,
                cause=error.cause,
            )

        try:
            data = json.loads(outcome.value.stdout)
        except json.JSONDecodeError as e:
            return Outcome.failure(
                ErrorCategory.INFO_FETCH,
                "yt-dlp returned malformed video info",
                command=cmd,
                cause=e,
            )
        if not isinstance(data, dict):
            return Outcome.failure(
                ErrorCategory.INFO_FETCH,
                "yt-dlp video info is not a JSON object",
                command=cmd,
            )

        info = VideoInfo.from_dict(data)
        log_event("info", f"{len(info.formats)} formats reported", stage="info", op="ytdlp")
        return Outcome.success(info)

    def output_base(self, selection: Selection) -> str:
        """Output path without extension: ``<output_dir>/<sanitized title>``"""
        return f"{self.output_dir}/{sanitize_tag_title(selection.tag_title)}"

    def build_download_command(self, url: str, selection: Selection) -> List[str]:
        return [
            self.config.ytdlp,
            *DOWNLOAD_FLAGS,
            '-f', selection.format_spec,
            '-o', f'{self.output_base(selection)}{EXT_TEMPLATE}',
            url,
        ]

    def download(
        self,
        url: str,
        selection: Selection,
        echo: Optional[Callable[[str], None]] = None,
    ) -> Outcome:
        """
        Download ``url`` with the user's selection

        The download is all-or-nothing: a nonzero exit is a SUBPROCESS failure
        and is not retried.

        Returns:
            Outcome: the output base path (no extension) on success
        """
        cmd = self.build_download_command(url, selection)
        with time_block("download", stage="download", op="ytdlp"):
            outcome = run_command(cmd, cwd=self.output_dir, echo=echo)

        if not outcome.ok:
            error = outcome.error
            return Outcome.failure(
                ErrorCategory.SUBPROCESS,
                "Failed to download the video.",
                command=cmd,
                returncode=error.returncode,
                stdout=error.stdout,
                stderr=error.stderr,
                cause=error.cause,
            )
        return Outcome.success(self.output_base(selection))
