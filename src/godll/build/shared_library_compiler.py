"""Go shared library compiler.

Runs `go build -buildmode=c-shared -o <output> <files...>` against the source
file set exactly as given on the command line.

When a target architecture is given, GOARCH is set to match the import
library's /MACHINE value. Go turns cgo off when GOARCH differs from the host,
and c-shared needs cgo, so CGO_ENABLED=1 is set alongside it.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..config import get_go_executable
from ..packages.toolchain_msvc import TargetArch
from ..subprocess_utils import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


class CompilerError(Exception):
    """Raised when go build fails.

    Attributes:
        stderr: Captured error stream of the compiler
        returncode: Exit status, or None if the compiler never started
    """

    def __init__(self, message: str, stderr: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class SharedLibraryCompiler:
    """Compiles Go sources into a c-shared DLL."""

    def __init__(self, runner: Optional[CommandRunner] = None, go_executable: Optional[str] = None):
        self.runner = runner or SubprocessRunner()
        self.go_executable = go_executable or get_go_executable()

    def get_command(self, output: str, files: Sequence[str]) -> List[str]:
        return [self.go_executable, "build", "-buildmode=c-shared", "-o", output, *files]

    def get_environment(self, arch: Optional[TargetArch]) -> Optional[Dict[str, str]]:
        """Return the go build environment, or None to inherit it unchanged."""
        if arch is None:
            return None
        env = os.environ.copy()
        env["GOARCH"] = arch.value
        env["CGO_ENABLED"] = "1"
        return env

    def compile(self, output: str, files: Sequence[str], arch: Optional[TargetArch] = None) -> Path:
        """Build the DLL.

        Args:
            output: Output DLL path
            files: Go source files
            arch: Target architecture (default: Go's own default target)

        Returns:
            Path to the DLL

        Raises:
            CompilerError: If go cannot be started or the build fails
        """
        cmd = self.get_command(output, files)
        logger.debug(f"Compiler command: {' '.join(cmd)} (GOARCH={arch.value if arch else 'default'})")

        try:
            result = self.runner.run(cmd, env=self.get_environment(arch))
        except OSError as e:
            raise CompilerError(f"Failed to run {self.go_executable}: {e}") from e

        if not result.ok:
            raise CompilerError(
                f"go build failed with exit code {result.returncode}",
                stderr=result.stderr.strip(),
                returncode=result.returncode,
            )

        return Path(output)
