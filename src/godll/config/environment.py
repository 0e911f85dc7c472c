"""Tool locations, overridable through environment variables.

GODLL_GO:       Go executable used for `go build` (default: "go" on PATH)
GODLL_VSWHERE:  Path to vswhere.exe (default: Visual Studio Installer dir)
"""

import os
from pathlib import Path

VSWHERE_RELATIVE_PATH = Path("Microsoft Visual Studio") / "Installer" / "vswhere.exe"


def get_go_executable() -> str:
    """Return the Go executable to invoke."""
    return os.environ.get("GODLL_GO") or "go"


def get_vswhere_path() -> Path:
    """Return the path of the Visual Studio locator utility.

    Respects GODLL_VSWHERE; otherwise resolves under %ProgramFiles(x86)%.
    """
    override = os.environ.get("GODLL_VSWHERE")
    if override:
        return Path(override)

    program_files = os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
    return Path(program_files) / VSWHERE_RELATIVE_PATH
