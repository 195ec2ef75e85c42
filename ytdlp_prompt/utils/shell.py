"""
Subprocess execution
Single responsibility: Run one external command and report how it went
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional

from .error_handler import ErrorCategory, Outcome
from .observability import log_event


@dataclass(frozen=True)
class CommandResult:
    """Captured result of a finished command"""
    command: List[str]
    returncode: int
    stdout: str
    stderr: Optional[str]


def run_command(
    cmd: List[str],
    cwd: Optional[str] = None,
    echo: Optional[Callable[[str], None]] = None,
) -> Outcome:
    """
    Run ``cmd`` (an argument list, never a shell string) in ``cwd``

    Args:
        cmd (list): Program and arguments
        cwd (str, optional): Working directory, defaults to the current one
        echo (callable, optional): Called with each output line while the
            command runs. stderr is merged into stdout in this mode.

    Returns:
        Outcome: CommandResult on exit status 0, SUBPROCESS failure otherwise
    """
    cwd = cwd or os.getcwd()
    log_event("debug", f"run: {' '.join(cmd)} (cwd={cwd})", op="shell")

    try:
        if echo is None:
            completed = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True,
                                       encoding="utf-8", errors="replace")
            result = CommandResult(cmd, completed.returncode, completed.stdout or "", completed.stderr)
        else:
            result = _run_streaming(cmd, cwd, echo)
    except OSError as e:
        message = f"Failed to execute command: '{' '.join(cmd)}'"
        log_event("error", f"{message}: {e}", op="shell")
        return Outcome.failure(ErrorCategory.SUBPROCESS, message, command=cmd, cause=e)

    if result.returncode != 0:
        message = f"Failed to execute command: '{' '.join(cmd)}'"
        log_event("error", f"{message} (exit {result.returncode})", op="shell")
        return Outcome.failure(
            ErrorCategory.SUBPROCESS,
            message,
            command=cmd,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return Outcome.success(result)


def _run_streaming(cmd: List[str], cwd: str, echo: Callable[[str], None]) -> CommandResult:
    # Run process with real-time output
    output_lines = []
    with subprocess.Popen(
        cmd,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as process:
        try:
            for line in iter(process.stdout.readline, ''):
                output_lines.append(line)
                echo(line.rstrip("\n"))
        except BaseException:
            process.kill()
            raise

    return CommandResult(cmd, process.returncode, ''.join(output_lines), None)
