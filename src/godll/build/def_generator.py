"""Module-definition (.def) file generator.

Writes the file lib.exe turns into an import library:

    LIBRARY    <name>
    EXPORTS
        <export 1>
        <export 2>

Spacing is exactly four spaces and lines end in "\\n" on every platform.
Exports are written in the order given, without ordinals.
"""

import logging
from pathlib import Path, PureWindowsPath
from typing import Sequence

logger = logging.getLogger(__name__)

DEF_EXTENSION = ".def"
DEF_SPACING = "    "  # Exactly 4 spaces (0x20 0x20 0x20 0x20)


class DefinitionFileError(Exception):
    """Raised when the .def file cannot be created or written."""

    pass


def render_definition(library_name: str, exports: Sequence[str]) -> str:
    """Return the .def file contents for library_name and exports."""
    lines = [f"LIBRARY{DEF_SPACING}{library_name}\n", "EXPORTS\n"]
    lines.extend(f"{DEF_SPACING}{name}\n" for name in exports)
    return "".join(lines)


def write_definition_file(base_name: str, exports: Sequence[str]) -> Path:
    """Create or truncate <base_name>.def listing exports.

    Args:
        base_name: Output name without the DLL extension; may include
            directories, which are kept for the file location and dropped
            from the LIBRARY line
        exports: Export names, written in order and unmodified

    Returns:
        Path to the written .def file

    Raises:
        DefinitionFileError: If the file cannot be created or written
    """
    def_path = Path(base_name + DEF_EXTENSION)
    library_name = PureWindowsPath(base_name).name

    try:
        with open(def_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_definition(library_name, exports))
    except OSError as e:
        raise DefinitionFileError(f"Failed to write {def_path}: {e}") from e

    logger.debug(f"Wrote {def_path} with {len(exports)} export(s)")
    return def_path
