"""
Option values accumulated while parsing the command line.

FileSet collects source paths from any number of file-list options, each of
which may hold a comma, semicolon or whitespace separated sub-list.

OutputName holds the output artifact name. It accepts exactly one value;
the "already set" state lives on the instance and is checked before every
assignment.
"""

import re
from typing import Iterator, List, Optional

DLL_EXTENSION = ".dll"
DEFAULT_DLL_NAME = "go"

# Commas, semicolons and any whitespace separate file names
_FILE_DELIMITERS = re.compile(r"[,;\s]+")


class ConfigError(Exception):
    """Raised when command-line configuration is invalid."""

    pass


def normalize_output_name(value: str) -> str:
    """Return value with the DLL extension appended when missing.

    An empty value selects the default name.

    Examples:
        >>> normalize_output_name("foo")
        'foo.dll'
        >>> normalize_output_name("foo.dll")
        'foo.dll'
        >>> normalize_output_name("")
        'go.dll'
    """
    if value.endswith(DLL_EXTENSION):
        return value
    if value == "":
        return DEFAULT_DLL_NAME + DLL_EXTENSION
    return value + DLL_EXTENSION


class FileSet:
    """Ordered list of source file paths built from repeated options.

    Duplicates are kept; fields are split on input format only.
    """

    def __init__(self) -> None:
        self._files: List[str] = []

    def add(self, value: str) -> None:
        """Append every file named in a delimited sub-list."""
        self._files.extend(f for f in _FILE_DELIMITERS.split(value) if f)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"FileSet({self._files!r})"

    def to_list(self) -> List[str]:
        return list(self._files)


class OutputName:
    """Output DLL name that may be assigned at most once."""

    def __init__(self) -> None:
        self._value: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self._value is not None

    def set(self, value: str) -> None:
        """Assign the output name.

        Raises:
            ConfigError: If the name has already been assigned
        """
        if self.is_set:
            raise ConfigError("Output name is already set")
        self._value = normalize_output_name(value)

    @property
    def value(self) -> str:
        """Normalized name; the default name when never assigned."""
        if self._value is None:
            return normalize_output_name("")
        return self._value

    @property
    def base_name(self) -> str:
        """Normalized name without the DLL extension."""
        return self.value[: -len(DLL_EXTENSION)]

    def __str__(self) -> str:
        return self.value
