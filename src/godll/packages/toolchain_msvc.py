"""MSVC Toolchain Locator.

This module locates the Visual Studio installation that provides the
librarian (lib.exe) and the vcvars environment scripts.

Resolution:
    vswhere.exe prints one "key: value" pair per line. The line starting
    with "installationPath" carries the installation root after a fixed
    18 character prefix ("installationPath: ").

Directory Structure:
    <installationPath>\\VC\\Auxiliary\\Build\\vcvars64.bat  (amd64 target)
    <installationPath>\\VC\\Auxiliary\\Build\\vcvars32.bat  (386 target)
"""

import logging
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PureWindowsPath
from typing import Optional

from ..config import get_vswhere_path
from ..subprocess_utils import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

MSVC_PATH_KEY = "installationPath"
MSVC_PATH_KEY_LENGTH = 18
VCVARS_RELATIVE_DIR = PureWindowsPath("VC", "Auxiliary", "Build")


class ToolchainError(Exception):
    """Raised when the MSVC installation cannot be resolved."""

    pass


@dataclass(frozen=True)
class ArchSettings:
    """Environment script and /MACHINE value for one target architecture."""

    vcvars_script: str
    machine: str


class TargetArch(str, Enum):
    """Target architectures, named the way GOARCH names them."""

    AMD64 = "amd64"
    X86 = "386"

    @property
    def settings(self) -> ArchSettings:
        if self is TargetArch.AMD64:
            return ArchSettings(vcvars_script="vcvars64.bat", machine="x64")
        return ArchSettings(vcvars_script="vcvars32.bat", machine="x86")


def host_arch(machine: Optional[str] = None) -> TargetArch:
    """Map the host processor to a target architecture.

    Args:
        machine: Processor name as reported by platform.machine()
            (looked up when omitted)

    Returns:
        TargetArch.AMD64 for 64-bit x86 hosts, TargetArch.X86 otherwise
    """
    if machine is None:
        machine = platform.machine()
    if machine.lower() in ("amd64", "x86_64"):
        return TargetArch.AMD64
    return TargetArch.X86


class MSVCToolchain:
    """Resolves the MSVC installation through vswhere.exe."""

    def __init__(self, runner: Optional[CommandRunner] = None, vswhere_path: Optional[PurePath] = None):
        """Initialize the toolchain locator.

        Args:
            runner: Command runner used to launch vswhere
            vswhere_path: Locator executable (default: get_vswhere_path())
        """
        self.runner = runner or SubprocessRunner()
        self.vswhere_path = vswhere_path or get_vswhere_path()
        self._installation_path: Optional[PureWindowsPath] = None

    def get_installation_path(self) -> PureWindowsPath:
        """Return the Visual Studio installation root.

        Raises:
            ToolchainError: If vswhere cannot be run, fails, or prints no
                usable installationPath line
        """
        if self._installation_path is not None:
            return self._installation_path

        cmd = [str(self.vswhere_path)]
        logger.debug(f"Locating MSVC: {cmd}")
        try:
            result = self.runner.run(cmd)
        except OSError as e:
            raise ToolchainError(f"Could not run {self.vswhere_path}: {e}") from e

        if not result.ok:
            raise ToolchainError(f"{self.vswhere_path} exited with status {result.returncode}: {result.stderr.strip()}")

        path = parse_installation_path(result.stdout)
        logger.debug(f"MSVC installation: {path}")
        self._installation_path = PureWindowsPath(path)
        return self._installation_path

    def get_vcvars_script(self, arch: TargetArch) -> PureWindowsPath:
        """Return the vcvars script that sets up the environment for arch."""
        return self.get_installation_path() / VCVARS_RELATIVE_DIR / arch.settings.vcvars_script


def parse_installation_path(output: str) -> str:
    """Extract the installation root from vswhere output.

    Args:
        output: Full standard output of vswhere.exe

    Returns:
        The value of the first installationPath line

    Raises:
        ToolchainError: If no line carries the key or the line has no value
    """
    for line in output.splitlines():
        if not line.startswith(MSVC_PATH_KEY):
            continue
        if len(line.rstrip()) <= MSVC_PATH_KEY_LENGTH:
            raise ToolchainError(f"Malformed {MSVC_PATH_KEY} line in vswhere output: {line!r}")
        return line[MSVC_PATH_KEY_LENGTH:].rstrip()

    raise ToolchainError(f"vswhere output has no {MSVC_PATH_KEY} line; is Visual Studio with C++ tools installed?")
