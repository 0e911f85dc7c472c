"""Configuration for godll: command-line option state and tool locations."""

from .environment import get_go_executable, get_vswhere_path
from .options import (
    DEFAULT_DLL_NAME,
    DLL_EXTENSION,
    ConfigError,
    FileSet,
    OutputName,
    normalize_output_name,
)

__all__ = [
    "ConfigError",
    "DEFAULT_DLL_NAME",
    "DLL_EXTENSION",
    "FileSet",
    "OutputName",
    "get_go_executable",
    "get_vswhere_path",
    "normalize_output_name",
]
