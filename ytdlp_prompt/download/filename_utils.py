"""
Filename utilities for download output
Single responsibility: Turn a user-composed tag title into a safe filename stem
"""

import re

# Characters replaced with an underscore
BLOCKLIST = " /\\%[]{}!~$?\"',:;*^`=|"

_DOT_RUN_RE = re.compile(r"\.{2,}")
_BLOCKLIST_RE = re.compile("[" + re.escape(BLOCKLIST) + "]")
_UNDERSCORE_RUN_RE = re.compile(r"_{2,}")


def sanitize_tag_title(title):
    """
    Sanitize a tag title for use as a filename stem

    Dot runs become ``_`` first, then every blocklisted character becomes
    ``_``, then underscore runs collapse to one.

    Args:
        title (str): Tag title as composed by the user

    Returns:
        str: Sanitized filename stem (may be empty)
    """
    title = _DOT_RUN_RE.sub("_", title)
    title = _BLOCKLIST_RE.sub("_", title)
    return _UNDERSCORE_RUN_RE.sub("_", title)


def validate_filename_safety(filename):
    """
    Validate that a filename stem is safe to hand to yt-dlp's ``-o``

    Args:
        filename (str): Filename stem to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    for char in filename:
        if char in BLOCKLIST:
            return False, f"Filename contains illegal character: {char!r}"
    if _DOT_RUN_RE.search(filename):
        return False, "Filename contains a run of dots"
    if _UNDERSCORE_RUN_RE.search(filename):
        return False, "Filename contains a run of underscores"
    return True, "Filename is valid"
