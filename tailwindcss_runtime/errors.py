"""Domain exceptions for executable resolution and CLI diagnostics."""

from __future__ import annotations


class TailwindcssRuntimeError(RuntimeError):
    """Base error carrying a user-facing detail and an optional remediation hint."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        """Initialize an error with detail text and optional hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class UnsupportedPlatformError(TailwindcssRuntimeError):
    """Raised when no packaged binary platform matches the running system."""


class ExecutableNotFoundError(TailwindcssRuntimeError):
    """Raised when a platform directory matches but holds no executable."""


class DirectoryNotFoundError(TailwindcssRuntimeError):
    """Raised when `TAILWINDCSS_INSTALL_DIR` points at a missing directory."""


class ConfigError(TailwindcssRuntimeError):
    """Raised when a settings file is missing or invalid."""


class ProcessLaunchError(TailwindcssRuntimeError):
    """Raised when a built command cannot be started."""
