"""External toolchains used by godll."""

from .toolchain_msvc import MSVCToolchain, TargetArch, ToolchainError, host_arch

__all__ = [
    "MSVCToolchain",
    "TargetArch",
    "ToolchainError",
    "host_arch",
]
