"""
Interactive prompts for stream and title selection

Each prompt returns an Outcome. ``questionary`` returns ``None`` when the user
cancels (Ctrl-C), which becomes a CANCELLED failure.
"""

from typing import List, Sequence

import questionary

from ytdlp_prompt.download.format_selector import FormatOption, get_audio_options, get_video_options
from ytdlp_prompt.download.models import Selection, StreamFormat, VideoInfo
from ytdlp_prompt.download.title_composer import compose_title, get_title_parts
from ytdlp_prompt.utils.error_handler import ErrorCategory, Outcome

VIDEO_MESSAGE = "Select video quality"
AUDIO_MESSAGE = (
    "Select audio streams to add to the video "
    "(Only necessary if the video has no audio, or you need more than one audio streams)"
)
TITLE_MESSAGE = "Select title parts from the video info to use for title and filename."
CHECKBOX_INSTRUCTION = "(press SPACE to select, ENTER to confirm)"


def _cancelled() -> Outcome:
    return Outcome.failure(ErrorCategory.CANCELLED, "Selection cancelled.")


def _choice(option: FormatOption) -> questionary.Choice:
    return questionary.Choice(title=option.label, value=option.value, description=option.hint)


def prompt_video_stream(video_formats: Sequence[StreamFormat]) -> Outcome:
    if not video_formats:
        return Outcome.failure(ErrorCategory.NO_FORMATS, "No video formats available.")

    options = get_video_options(video_formats)
    answer = questionary.select(
        VIDEO_MESSAGE,
        choices=[_choice(o) for o in options],
        default=options[0].value,
    ).ask()
    if answer is None:
        return _cancelled()
    return Outcome.success(answer)


def prompt_audio_streams(audio_formats: Sequence[StreamFormat]) -> Outcome:
    # nothing to offer, the video stream stands alone
    if not audio_formats:
        return Outcome.success([])

    answer = questionary.checkbox(
        AUDIO_MESSAGE,
        choices=[_choice(o) for o in get_audio_options(audio_formats)],
        instruction=CHECKBOX_INSTRUCTION,
    ).ask()
    if answer is None:
        return _cancelled()
    return Outcome.success(list(answer))


def prompt_title_parts(info: VideoInfo) -> Outcome:
    parts = get_title_parts(info)
    if not parts:
        return Outcome.success([])

    answer = questionary.checkbox(
        TITLE_MESSAGE,
        choices=[questionary.Choice(title=p.label, value=p.value, checked=p.checked) for p in parts],
        instruction=CHECKBOX_INSTRUCTION,
    ).ask()
    if answer is None:
        return _cancelled()
    return Outcome.success(list(answer))


def collect_selection(
    info: VideoInfo,
    video_formats: Sequence[StreamFormat],
    audio_formats: Sequence[StreamFormat],
) -> Outcome:
    """
    Run the three prompts in order and build the Selection

    Stops at the first failed or cancelled prompt.
    """
    video = prompt_video_stream(video_formats)
    if not video.ok:
        return video

    audio = prompt_audio_streams(audio_formats)
    if not audio.ok:
        return audio

    title_parts = prompt_title_parts(info)
    if not title_parts.ok:
        return title_parts

    audio_ids: List[str] = audio.value
    return Outcome.success(Selection(
        video_format_id=video.value,
        audio_format_ids=audio_ids,
        tag_title=compose_title(title_parts.value),
    ))
