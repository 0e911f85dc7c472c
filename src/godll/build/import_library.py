"""Import Library Builder.

This module turns a .def file into an import library (.lib) with the MSVC
librarian.

Process:
    1. Resolve the Visual Studio installation (vswhere.exe)
    2. Pick the vcvars script and /MACHINE value for the target architecture
    3. Run, in one cmd.exe session:
           call "<vcvars>" && lib /DEF:<name>.def /OUT:<name>.lib /MACHINE:<machine>
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..packages.toolchain_msvc import MSVCToolchain, TargetArch
from ..subprocess_utils import CommandRunner, SubprocessRunner
from ..toolchain_env import get_vcvars_env
from .def_generator import DEF_EXTENSION

logger = logging.getLogger(__name__)

LIB_EXTENSION = ".lib"


class ImportLibraryError(Exception):
    """Raised when lib.exe fails to produce the import library.

    Attributes:
        stderr: Captured error stream of the failed command
        returncode: Exit status, or None if the command never started
    """

    def __init__(self, message: str, stderr: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class ImportLibraryBuilder:
    """Builds <name>.lib from <name>.def with the MSVC librarian."""

    def __init__(
        self,
        toolchain: MSVCToolchain,
        arch: TargetArch,
        runner: Optional[CommandRunner] = None,
    ):
        """Initialize the builder.

        Args:
            toolchain: Resolved-on-demand MSVC installation
            arch: Target architecture (selects vcvars script and /MACHINE)
            runner: Command runner used to launch cmd.exe
        """
        self.toolchain = toolchain
        self.arch = arch
        self.runner = runner or SubprocessRunner()

    def get_command(self, base_name: str) -> List[str]:
        """Return the cmd.exe invocation that runs the librarian.

        Raises:
            ToolchainError: If the MSVC installation cannot be resolved
        """
        vcvars = self.toolchain.get_vcvars_script(self.arch)
        return [
            "cmd.exe",
            "/q",
            "/c",
            "call",
            str(vcvars),
            "&&",
            "lib",
            f"/DEF:{base_name}{DEF_EXTENSION}",
            f"/OUT:{base_name}{LIB_EXTENSION}",
            f"/MACHINE:{self.arch.settings.machine}",
        ]

    def build(self, base_name: str) -> Path:
        """Run the librarian on <base_name>.def.

        Returns:
            Path to the import library

        Raises:
            ToolchainError: If the MSVC installation cannot be resolved
            ImportLibraryError: If the librarian cannot be started or fails
        """
        cmd = self.get_command(base_name)
        logger.debug(f"Librarian command: {' '.join(cmd)}")

        try:
            result = self.runner.run(cmd, env=get_vcvars_env())
        except OSError as e:
            raise ImportLibraryError(f"Failed to run librarian: {e}") from e

        if not result.ok:
            # lib.exe reports most errors on stdout
            stderr = result.stderr.strip() or result.stdout.strip()
            raise ImportLibraryError(
                f"lib.exe failed with exit code {result.returncode}",
                stderr=stderr,
                returncode=result.returncode,
            )

        return Path(base_name + LIB_EXTENSION)
