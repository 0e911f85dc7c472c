"""
Build pipeline for godll.

Stages, in order:
- Export scanning (//export markers in Go sources)
- Module-definition (.def) generation
- Import library (.lib) creation with the MSVC librarian
- Shared library (.dll) compilation with go build
"""

from .build_context import BuildParams
from .def_generator import DefinitionFileError, write_definition_file
from .export_scanner import ExportScanner
from .import_library import ImportLibraryBuilder, ImportLibraryError
from .orchestrator import BuildOrchestrator, BuildResult, BuildStage
from .shared_library_compiler import CompilerError, SharedLibraryCompiler

__all__ = [
    "BuildOrchestrator",
    "BuildParams",
    "BuildResult",
    "BuildStage",
    "CompilerError",
    "DefinitionFileError",
    "ExportScanner",
    "ImportLibraryBuilder",
    "ImportLibraryError",
    "SharedLibraryCompiler",
    "write_definition_file",
]
