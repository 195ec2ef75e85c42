"""
Tag title candidates from the video metadata
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import VideoInfo

TITLE_PLACEHOLDER = "could not find title in video info"
TITLE_SEPARATOR = " - "


@dataclass(frozen=True)
class TitlePart:
    field: str
    value: str
    checked: bool = False

    @property
    def label(self) -> str:
        return f"{self.field}: {self.value}"


def initial_title(info: VideoInfo) -> str:
    """First non-empty of fulltitle, title, alt_title, else a placeholder"""
    return info.fulltitle or info.title or info.alt_title or TITLE_PLACEHOLDER


def get_title_parts(info: VideoInfo) -> List[TitlePart]:
    """
    Distinct non-empty title candidates in field order

    ``fulltitle`` is only offered when it differs from ``title``. Candidates
    equal to ``initial_title(info)`` come preselected.
    """
    fields = [("title", info.title), ("alt_title", info.alt_title)]
    if info.fulltitle and info.fulltitle != info.title:
        fields.append(("fulltitle", info.fulltitle))

    initial = initial_title(info)
    parts: List[TitlePart] = []
    seen = set()
    for name, value in fields:
        if not value or value in seen:
            continue
        seen.add(value)
        parts.append(TitlePart(field=name, value=value, checked=value == initial))
    return parts


def compose_title(selected: Optional[Iterable[str]]) -> str:
    """Join the chosen parts in the order given; no parts gives ``""``"""
    return TITLE_SEPARATOR.join(part for part in (selected or []) if part)
