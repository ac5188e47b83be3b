"""Top-level package for tailwindcss-runtime.

This package locates a platform-specific pre-built `tailwindcss` executable and
builds compile/watch command lines for it. The main entry points are
`resolve_executable`, `compile_command` and `watch_command`.
"""

from .commands import CommandConfig, build_command, compile_command, watch_command
from .errors import (
    DirectoryNotFoundError,
    ExecutableNotFoundError,
    TailwindcssRuntimeError,
    UnsupportedPlatformError,
)
from .platforms import platform_id
from .resolver import resolve_executable

__all__ = [
    "CommandConfig",
    "DirectoryNotFoundError",
    "ExecutableNotFoundError",
    "TailwindcssRuntimeError",
    "UnsupportedPlatformError",
    "__version__",
    "build_command",
    "compile_command",
    "platform_id",
    "resolve_executable",
    "watch_command",
]

__version__ = "0.1.0"
