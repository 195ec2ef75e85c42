"""
Records parsed from yt-dlp's ``-j`` JSON output

Optional fields are normalized once, here: a field is either present with a
value of the expected JSON type or ``None``. A value of the wrong type counts
as absent, so the classifier and title logic never see mixed types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

Number = Union[int, float]


def _opt_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _opt_num(data: Dict[str, Any], key: str) -> Optional[Number]:
    value = data.get(key)
    # bool is an int subclass but never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


@dataclass(frozen=True)
class StreamFormat:
    """One entry of the ``formats`` list"""
    format_id: str
    format_note: Optional[str] = None
    resolution: Optional[str] = None
    height: Optional[Number] = None
    width: Optional[Number] = None
    fps: Optional[Number] = None
    tbr: Optional[Number] = None
    vcodec: Optional[str] = None
    acodec: Optional[str] = None
    language: Optional[str] = None
    ext: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamFormat":
        format_id = data.get("format_id")
        return cls(
            format_id="" if format_id is None else str(format_id),
            format_note=_opt_str(data, "format_note"),
            resolution=_opt_str(data, "resolution"),
            height=_opt_num(data, "height"),
            width=_opt_num(data, "width"),
            fps=_opt_num(data, "fps"),
            tbr=_opt_num(data, "tbr"),
            vcodec=_opt_str(data, "vcodec"),
            acodec=_opt_str(data, "acodec"),
            language=_opt_str(data, "language"),
            ext=_opt_str(data, "ext"),
        )


@dataclass(frozen=True)
class VideoInfo:
    """Metadata for the whole source, fetched once per run"""
    title: Optional[str] = None
    alt_title: Optional[str] = None
    fulltitle: Optional[str] = None
    upload_date: Optional[str] = None
    extractor: Optional[str] = None
    formats: Tuple[StreamFormat, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoInfo":
        raw_formats = data.get("formats")
        if not isinstance(raw_formats, list):
            raw_formats = []
        return cls(
            title=_opt_str(data, "title"),
            alt_title=_opt_str(data, "alt_title"),
            fulltitle=_opt_str(data, "fulltitle"),
            upload_date=_opt_str(data, "upload_date"),
            extractor=_opt_str(data, "extractor"),
            formats=tuple(StreamFormat.from_dict(f) for f in raw_formats if isinstance(f, dict)),
        )


@dataclass
class Selection:
    """What the user picked across the three prompts"""
    video_format_id: str
    audio_format_ids: List[str] = field(default_factory=list)
    tag_title: str = ""

    @property
    def format_spec(self) -> str:
        """yt-dlp ``-f`` value: video id and every audio id joined with ``+``"""
        return "+".join([self.video_format_id, *self.audio_format_ids])
