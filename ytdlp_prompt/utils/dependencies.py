"""
External tool lookup
Single responsibility: Make sure a required binary is on PATH before using it
"""

import shutil
from typing import Iterable, Optional

from .config_utils import load_key
from .error_handler import ErrorCategory, Outcome
from .observability import log_event

YTDLP_HINT = "Please install yt-dlp: https://github.com/yt-dlp/yt-dlp"
MKVPROPEDIT_HINT = "Please install MKVToolNix: https://mkvtoolnix.download/."
ATOMICPARSLEY_HINT = "Please install AtomicParsley: https://github.com/wez/atomicparsley."


def command_exists(name: str) -> Optional[str]:
    """Absolute path of ``name`` if it resolves on PATH, else None"""
    return shutil.which(name)


def verify_dependency(name: str, hint: str) -> Outcome:
    """
    Resolve one executable

    Returns:
        Outcome: the resolved path, or a MISSING_DEPENDENCY failure carrying ``hint``
    """
    path = command_exists(name)
    if path:
        log_event("debug", f"{name} found at {path}", op="dependency")
        return Outcome.success(path)
    return Outcome.failure(ErrorCategory.MISSING_DEPENDENCY, f"{name} not found.", hint=hint)


def verify_first_available(names: Iterable[str], hint: str) -> Outcome:
    """Try each candidate name in order; the first one found wins"""
    names = list(names)
    for index, name in enumerate(names):
        outcome = verify_dependency(name, hint)
        if outcome.ok:
            return outcome
        if index + 1 < len(names):
            log_event("warning", f"{name} not found. Trying {names[index + 1]}.", op="dependency")
    return Outcome.failure(
        ErrorCategory.MISSING_DEPENDENCY,
        f"{names[-1] if names else 'tool'} not found.",
        hint=hint,
    )


def verify_ytdlp() -> Outcome:
    return verify_dependency(load_key("tools.ytdlp"), YTDLP_HINT)


def verify_mkvpropedit() -> Outcome:
    return verify_dependency(load_key("tools.mkvpropedit"), MKVPROPEDIT_HINT)


def verify_atomicparsley() -> Outcome:
    candidates = load_key("tools.atomicparsley")
    if isinstance(candidates, str):
        candidates = [candidates]
    return verify_first_available(candidates, ATOMICPARSLEY_HINT)
