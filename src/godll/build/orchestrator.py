"""
Build orchestration for godll.

Runs the four build stages strictly in sequence:

    [1/4] Scan sources for //export markers
    [2/4] Write <name>.def
    [3/4] Build <name>.lib with the MSVC librarian
    [4/4] Build <name>.dll with go build

Each stage raises its own exception on failure. The orchestrator converts the
first failure into an unsuccessful BuildResult and runs no further stages.
Artifacts from earlier stages are left on disk.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..output import TimedLogger, log_detail
from ..packages.toolchain_msvc import MSVCToolchain, ToolchainError
from ..subprocess_utils import CommandRunner, SubprocessRunner
from .build_context import BuildParams
from .def_generator import DefinitionFileError, write_definition_file
from .export_scanner import ExportScanner
from .import_library import ImportLibraryBuilder, ImportLibraryError
from .shared_library_compiler import CompilerError, SharedLibraryCompiler

# Module-level logger
logger = logging.getLogger(__name__)

TOTAL_PHASES = 4


class BuildStage(str, Enum):
    """Pipeline stages, in execution order."""

    SCAN = "scan"
    DEF_FILE = "def-file"
    IMPORT_LIBRARY = "import-library"
    COMPILE = "compile"


@dataclass
class BuildResult:
    """Result of a build operation.

    Attributes:
        success: Whether every stage completed
        exports: Export names found by the scanner
        def_path: Generated .def file, if written
        lib_path: Generated import library, if built
        dll_path: Compiled DLL, if built
        build_time: Wall-clock build time in seconds
        message: Human-readable summary or failure description
        stage: Stage that failed (None on success)
        stderr: Captured error stream of the failing external tool
    """

    success: bool
    exports: List[str] = field(default_factory=list)
    def_path: Optional[Path] = None
    lib_path: Optional[Path] = None
    dll_path: Optional[Path] = None
    build_time: float = 0.0
    message: str = ""
    stage: Optional[BuildStage] = None
    stderr: str = ""


class BuildOrchestrator:
    """
    Orchestrates the scan, .def, .lib and .dll stages.

    All external commands go through one CommandRunner so the pipeline can
    run against a fake toolchain.
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        toolchain: Optional[MSVCToolchain] = None,
        compiler: Optional[SharedLibraryCompiler] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            runner: Command runner shared by all external-tool stages
            toolchain: MSVC locator (default: vswhere through runner)
            compiler: Go compiler stage (default: go through runner)
        """
        self.runner = runner or SubprocessRunner()
        self.toolchain = toolchain or MSVCToolchain(self.runner)
        self.compiler = compiler or SharedLibraryCompiler(self.runner)

    def build(self, params: BuildParams) -> BuildResult:
        """Execute the complete build.

        Args:
            params: Build parameters from the CLI

        Returns:
            BuildResult describing the artifacts or the first failure
        """
        start_time = time.time()
        result = BuildResult(success=False, stage=BuildStage.SCAN)

        try:
            with TimedLogger("Scanning sources for exports", phase=(1, TOTAL_PHASES)):
                scanner = ExportScanner()
                result.exports = scanner.scan(params.files)
                for skipped in scanner.skipped_files:
                    log_detail(f"Skipped (unreadable or invalid Go): {skipped}")
                log_detail(f"Found {len(result.exports)} export(s)")
                for name in result.exports:
                    log_detail(f"  {name}", verbose_only=True)

            result.stage = BuildStage.DEF_FILE
            with TimedLogger("Writing module definition", phase=(2, TOTAL_PHASES)):
                result.def_path = write_definition_file(params.base_name, result.exports)

            result.stage = BuildStage.IMPORT_LIBRARY
            with TimedLogger("Building import library", phase=(3, TOTAL_PHASES)):
                builder = ImportLibraryBuilder(self.toolchain, params.arch, self.runner)
                result.lib_path = builder.build(params.base_name)

            result.stage = BuildStage.COMPILE
            with TimedLogger("Compiling shared library", phase=(4, TOTAL_PHASES)):
                result.dll_path = self.compiler.compile(params.output, params.files, arch=params.arch)

        except DefinitionFileError as e:
            return self._fail(result, start_time, str(e))
        except ToolchainError as e:
            return self._fail(result, start_time, f"MSVC toolchain not found: {e}")
        except (ImportLibraryError, CompilerError) as e:
            return self._fail(result, start_time, str(e), stderr=e.stderr)

        result.success = True
        result.stage = None
        result.build_time = time.time() - start_time
        result.message = f"Built {result.dll_path} with {len(result.exports)} export(s)"
        logger.debug(result.message)
        return result

    def _fail(self, result: BuildResult, start_time: float, message: str, stderr: str = "") -> BuildResult:
        result.success = False
        result.build_time = time.time() - start_time
        result.message = message
        result.stderr = stderr
        stage = result.stage.value if result.stage else "build"
        logger.debug(f"{stage} stage failed: {message}")
        if stderr:
            logger.debug(stderr)
        return result
