"""Build Context - parameters for one godll invocation.

BuildParams flows from the CLI to the orchestrator. It is created once,
after argument parsing, and never mutated.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import DLL_EXTENSION, FileSet, OutputName
from ..packages.toolchain_msvc import TargetArch, host_arch


@dataclass(frozen=True)
class BuildParams:
    """Basic build parameters from the CLI.

    Attributes:
        files: Go source files in command-line order (duplicates kept)
        output: Normalized output DLL name (always ends in .dll)
        arch: Target architecture for both the import library and go build
    """

    files: Tuple[str, ...]
    output: str
    arch: TargetArch

    @property
    def base_name(self) -> str:
        """Output name without the DLL extension; shared by .def/.lib/.dll."""
        return self.output[: -len(DLL_EXTENSION)]

    @classmethod
    def create(
        cls,
        files: FileSet,
        output: OutputName,
        arch: Optional[TargetArch] = None,
    ) -> "BuildParams":
        """Create BuildParams from parsed option state, defaulting arch to the host."""
        return cls(
            files=tuple(files),
            output=output.value,
            arch=arch if arch is not None else host_arch(),
        )
