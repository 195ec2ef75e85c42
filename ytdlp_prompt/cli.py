"""
yt-dlp-prompt command line entry point

Sequence: verify yt-dlp, fetch info, classify formats, three prompts, download,
tag the produced container. Only this module turns a failure into an exit code.
"""

import argparse
import shlex
import sys
from typing import List, Optional

from rich.markup import escape

from ytdlp_prompt import __version__
from ytdlp_prompt.download import DownloadConfig, DownloadManager, classify_formats
from ytdlp_prompt.prompts import collect_selection
from ytdlp_prompt.tagging import tag_output
from ytdlp_prompt.utils import (
    ErrorCategory,
    Outcome,
    console,
    err_console,
    get_error_suggestion,
    init_logging,
    log_event,
    verify_ytdlp,
)


def _print_command(cmd: List[str]):
    console.print(escape(shlex.join(cmd)), style="cyan")


def _echo(line: str):
    console.print(escape(line), highlight=False)


def run(source_url: str) -> Outcome:
    """Run the whole interactive session for one URL"""
    if not source_url.strip():
        return Outcome.failure(ErrorCategory.INVALID_ARGUMENT, "No source URL provided.")

    ytdlp = verify_ytdlp()
    if not ytdlp.ok:
        return ytdlp

    manager = DownloadManager(DownloadConfig(ytdlp=ytdlp.value))

    console.print(f"Fetching video info from {escape(source_url)}")
    fetched = manager.fetch_video_info(source_url)
    if not fetched.ok:
        return fetched
    info = fetched.value

    video_formats, audio_formats = classify_formats(info.formats)
    log_event(
        "info",
        f"{len(video_formats)} video / {len(audio_formats)} audio formats",
        stage="classify",
    )

    selected = collect_selection(info, video_formats, audio_formats)
    if not selected.ok:
        return selected
    selection = selected.value

    _print_command(manager.build_download_command(source_url, selection))
    downloaded = manager.download(source_url, selection, echo=_echo)
    if not downloaded.ok:
        return downloaded

    return tag_output(downloaded.value, selection.tag_title, info, on_command=_print_command, echo=_echo)


def report_failure(outcome: Outcome):
    error = outcome.error
    err_console.print(f"[bold red]❌ {escape(error.message)}[/bold red]")
    for line in error.details():
        err_console.print(escape(line), style="red", highlight=False)
    err_console.print(f"[yellow]{escape(get_error_suggestion(error))}[/yellow]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yt-dlp-prompt",
        description="Pick yt-dlp streams and title interactively, then tag the downloaded file.",
    )
    parser.add_argument("source_url", metavar="source-url", help="The source URL to download the video from.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging()

    try:
        outcome = run(args.source_url)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
        return 130

    if not outcome.ok:
        log_event("error", outcome.error.message, stage=outcome.error.category.value)
        report_failure(outcome)
        return 1

    console.print(f"[bold green]✅ Tagged {escape(outcome.value)}[/bold green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
