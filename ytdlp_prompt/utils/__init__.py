# Core utilities module
"""
Shared utilities for the ytdlp_prompt modules.
"""

# Config management
from .config_utils import load_key, load_all_config

# Error values
from .error_handler import ErrorCategory, Outcome, ToolError, get_error_suggestion

# Logging
from .observability import init_logging, log_event, time_block

# External processes
from .shell import CommandResult, run_command
from .dependencies import (
    command_exists,
    verify_dependency,
    verify_ytdlp,
    verify_mkvpropedit,
    verify_atomicparsley,
)

# Rich console printing
from rich.console import Console

# Create default console instances
console = Console()
err_console = Console(stderr=True)


__all__ = [
    "load_key",
    "load_all_config",
    "ErrorCategory",
    "Outcome",
    "ToolError",
    "get_error_suggestion",
    "init_logging",
    "log_event",
    "time_block",
    "CommandResult",
    "run_command",
    "command_exists",
    "verify_dependency",
    "verify_ytdlp",
    "verify_mkvpropedit",
    "verify_atomicparsley",
    "console",
    "err_console",
]
