"""
Centralized user-facing output for godll.

All output is prefixed with elapsed time since program launch in MM:SS.cc
format (minutes:seconds.centiseconds), so a slow librarian or compiler run is
easy to spot.

Example output:
    00:00.01 godll v0.1.0
    00:00.02 [1/4] Scanning sources for exports...
    00:00.05       main.go: 2 export(s)
    00:00.31 [3/4] Building import library...

Usage:
    from godll.output import log, log_phase, log_detail, init_timer

    init_timer()
    log_phase(1, 4, "Scanning sources for exports...")
    log_detail("main.go: 2 export(s)")

Errors and warnings go to stderr; everything else goes to stdout unless an
explicit stream was passed to init_timer().
"""

import sys
import time
from pathlib import Path
from types import TracebackType
from typing import Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = False


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the program timer.

    Call this at program startup to set the reference time for all timestamps.
    If not called explicitly, it will be called automatically on first log.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, verbose-only messages are printed as well.
    """
    global _verbose
    _verbose = verbose


def get_elapsed() -> float:
    """Get elapsed time in seconds since timer initialization."""
    if _start_time is None:
        init_timer(_output_stream)
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """Format the current elapsed time as MM:SS.cc."""
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str, stream: Optional[TextIO] = None) -> None:
    target = stream or _output_stream or sys.stdout
    target.write(f"{format_timestamp()} {message}\n")
    target.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """
    Log a build phase message.

    Format: [N/M] message
    """
    if verbose_only and not _verbose:
        return
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log a detail message (indented).

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_header(title: str, version: str) -> None:
    """Log the program banner."""
    _print(f"{title} v{version}")


def log_artifact(kind: str, path: Path, verbose_only: bool = False) -> None:
    """
    Log the path of a produced artifact.

    Args:
        kind: Artifact kind (e.g., 'DEF', 'LIB', 'DLL')
        path: Path to the artifact
        verbose_only: If True, only print if verbose mode is enabled
    """
    log_detail(f"{kind}: {path}", verbose_only=verbose_only)


def log_build_complete(build_time: float, verbose_only: bool = False) -> None:
    """Log build completion time in seconds."""
    if verbose_only and not _verbose:
        return
    _print(f"Build time: {build_time:.2f}s")


def log_error(message: str) -> None:
    """Log an error message to stderr."""
    _print(f"ERROR: {message}", stream=_output_stream or sys.stderr)


def log_warning(message: str) -> None:
    """Log a warning message to stderr."""
    _print(f"WARNING: {message}", stream=_output_stream or sys.stderr)


class TimedLogger:
    """
    Context manager for logging with elapsed time tracking.

    Usage:
        with TimedLogger("Compiling DLL", phase=(4, 4)):
            ...
        # Logs "Done (1.23s)" on success
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        if self.phase:
            log_phase(self.phase[0], self.phase[1], f"{self.operation}...", self.verbose_only)
        else:
            log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        elapsed = time.time() - self.start_time
        if exc_type is None:
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=True)
        return None
