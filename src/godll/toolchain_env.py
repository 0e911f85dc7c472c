"""Environment for the cmd.exe session that runs vcvars and lib.exe.

vcvars*.bat builds INCLUDE, LIB, LIBPATH and PATH on top of whatever the
parent process hands it. Two kinds of inherited state break that:

Developer prompt leftovers:
    When godll is started from a Visual Studio developer prompt for another
    architecture, VSCMD_* and the VC/SDK directory variables already point at
    that architecture. vcvars then appends the target's directories after the
    old ones and lib.exe can pick up libraries for the wrong machine. These
    variables are removed so vcvars initializes from scratch.

POSIX PATH entries:
    Shells from MSYS2, Git for Windows or Cygwin leave entries such as
    /usr/bin in PATH. vcvars passes PATH through `where` and for-loops that
    fail on them. Entries starting with "/" and empty entries are dropped.

Everything else, including TMP/TEMP (lib.exe writes scratch files there), is
passed through. Off Windows the environment is returned unchanged.
"""

import os
import sys
from typing import Mapping, Optional

# Set by VsDevCmd.bat / vcvars*.bat for the architecture they configured
_DEV_PROMPT_PREFIXES = ("VSCMD_", "__VSCMD_")
_DEV_PROMPT_VARIABLES = frozenset(
    {
        "DevEnvDir",
        "INCLUDE",
        "EXTERNAL_INCLUDE",
        "LIB",
        "LIBPATH",
        "Platform",
        "VCINSTALLDIR",
        "VCIDEInstallDir",
        "VCToolsInstallDir",
        "VCToolsRedistDir",
        "VCToolsVersion",
        "VisualStudioVersion",
        "VSINSTALLDIR",
        "WindowsLibPath",
        "WindowsSdkBinPath",
        "WindowsSdkDir",
        "WindowsSdkVerBinPath",
        "WindowsSDKLibVersion",
        "WindowsSDKVersion",
        "UCRTVersion",
        "UniversalCRTSdkDir",
    }
)
# Windows environment names are case-insensitive
_DEV_PROMPT_KEYS = frozenset(name.upper() for name in _DEV_PROMPT_VARIABLES)


def is_dev_prompt_variable(name: str) -> bool:
    """Return True if name was set by a Visual Studio developer prompt."""
    upper = name.upper()
    return upper.startswith(_DEV_PROMPT_PREFIXES) or upper in _DEV_PROMPT_KEYS


def clean_windows_path(value: str) -> str:
    """Drop POSIX-style and empty entries from a ;-separated PATH.

    Examples:
        >>> clean_windows_path("C:\\\\Windows;/usr/bin;;C:\\\\Go\\\\bin")
        'C:\\\\Windows;C:\\\\Go\\\\bin'
    """
    return ";".join(entry for entry in value.split(";") if entry and not entry.startswith("/"))


def get_vcvars_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Return the environment to launch `cmd.exe /c call vcvars && lib` with.

    Args:
        environ: Base environment (default: os.environ)
    """
    env = dict(os.environ if environ is None else environ)

    if sys.platform != "win32":
        return env

    for name in [k for k in env if is_dev_prompt_variable(k)]:
        del env[name]

    for name in [k for k in env if k.upper() == "PATH"]:
        env[name] = clean_windows_path(env[name])

    return env
