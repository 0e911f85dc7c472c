"""Pytest configuration and fixtures for godll tests.

The fake command runner stands in for vswhere, cmd.exe/lib and go so the
build pipeline can be exercised on any platform.
"""

import logging
import sys
import warnings
from pathlib import PureWindowsPath
from typing import Dict, List, Mapping, Optional, Sequence, Union

import pytest

from godll import output
from godll.subprocess_utils import CommandResult

# Suppress ResourceWarnings from file cleanup in Python 3.13
if sys.version_info >= (3, 13):
    warnings.filterwarnings("ignore", category=ResourceWarning)

VSWHERE_OUTPUT = (
    "instanceId: 1a2b3c4d\r\n"
    "installDate: 1/2/2024 10:00:00 AM\r\n"
    "installationName: VisualStudio/17.9.0+34607.119\r\n"
    "installationPath: C:\\Program Files\\Microsoft Visual Studio\\2022\\Community\r\n"
    "installationVersion: 17.9.34607.119\r\n"
)

Response = Union[CommandResult, BaseException]


class FakeRunner:
    """CommandRunner that records commands and replays canned results.

    Responses are keyed by the executable's file name ("vswhere.exe",
    "cmd.exe", "go"). Unknown executables succeed with no output.
    """

    def __init__(self, responses: Optional[Dict[str, Response]] = None):
        self.responses: Dict[str, Response] = {"vswhere.exe": CommandResult(args=(), returncode=0, stdout=VSWHERE_OUTPUT)}
        self.responses.update(responses or {})
        self.calls: List[List[str]] = []
        self.envs: List[Optional[Mapping[str, str]]] = []

    def run(self, cmd: Sequence[str], env: Optional[Mapping[str, str]] = None, cwd=None) -> CommandResult:
        self.calls.append(list(cmd))
        self.envs.append(env)
        response = self.responses.get(PureWindowsPath(cmd[0]).name)
        if response is None:
            return CommandResult(args=tuple(cmd), returncode=0)
        if isinstance(response, BaseException):
            raise response
        return response

    def executables(self) -> List[str]:
        return [PureWindowsPath(call[0]).name for call in self.calls]


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances: fake_runner(responses={...})."""

    def _make(responses: Optional[Dict[str, Response]] = None) -> FakeRunner:
        return FakeRunner(responses)

    return _make


@pytest.fixture
def go_source(tmp_path):
    """Write a Go source file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_output_state():
    """Keep output and logging globals from leaking between tests."""
    yield
    output.set_verbose(False)
    output.init_timer()

    # cli.configure_logging() detaches the godll logger from the root logger
    godll_logger = logging.getLogger("godll")
    for handler in list(godll_logger.handlers):
        godll_logger.removeHandler(handler)
    godll_logger.setLevel(logging.NOTSET)
    godll_logger.propagate = True


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr are always restored after each test.

    This prevents "I/O operation on closed file" errors in Python 3.13
    when tests raise exceptions that close stdout/stderr.
    """
    yield

    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__
