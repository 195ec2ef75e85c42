"""
Error handling for the prompt pipeline
Single responsibility: Describe failures as values so only the CLI decides to exit

Every external call is attempted exactly once. Operations that can fail return
an ``Outcome`` instead of raising or terminating the process.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """Categories of pipeline errors"""
    MISSING_DEPENDENCY = "missing_dependency"
    INFO_FETCH = "info_fetch"
    SUBPROCESS = "subprocess"
    NO_OUTPUT = "no_output"
    NO_FORMATS = "no_formats"
    CANCELLED = "cancelled"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class ToolError:
    """A failure with enough context to explain it to the user"""
    category: ErrorCategory
    message: str
    hint: Optional[str] = None
    command: Optional[List[str]] = None
    returncode: Optional[int] = None
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    cause: Optional[BaseException] = None

    def details(self) -> List[str]:
        """Diagnostic lines, most useful first"""
        lines = []
        if self.hint:
            lines.append(self.hint)
        if self.command:
            lines.append(f"Command: {' '.join(self.command)}")
        if self.returncode is not None:
            lines.append(f"Exit code: {self.returncode}")
        if self.cause is not None:
            lines.append(f"Cause: {self.cause}")
        if self.stderr and self.stderr.strip():
            lines.append(f"stderr: {self.stderr.strip()}")
        if self.stdout and self.stdout.strip():
            lines.append(f"stdout: {self.stdout.strip()}")
        return lines


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged result: either ``value`` (ok) or ``error`` (failure)"""
    ok: bool
    value: Optional[T] = None
    error: Optional[ToolError] = None

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, category: ErrorCategory, message: str, **context) -> "Outcome":
        return cls(ok=False, error=ToolError(category=category, message=message, **context))


_SUGGESTIONS = {
    ErrorCategory.MISSING_DEPENDENCY: "Install the missing tool and make sure it is on your PATH.",
    ErrorCategory.INFO_FETCH: "Check the source URL and that yt-dlp supports the site.",
    ErrorCategory.SUBPROCESS: "Check the command output above for the reason it failed.",
    ErrorCategory.NO_OUTPUT: "yt-dlp did not produce an .mp4 or .mkv file for the chosen formats.",
    ErrorCategory.NO_FORMATS: "yt-dlp reported no video formats for this URL.",
    ErrorCategory.CANCELLED: "Nothing was downloaded.",
    ErrorCategory.INVALID_ARGUMENT: "Run with --help to see the usage.",
}


def get_error_suggestion(error: ToolError) -> str:
    """
    Get user-friendly suggestion based on error category

    Args:
        error (ToolError): Failure to explain

    Returns:
        str: User-friendly suggestion
    """
    return _SUGGESTIONS.get(error.category, "An unexpected error occurred.")
