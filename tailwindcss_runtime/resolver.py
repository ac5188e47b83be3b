"""Deterministic `tailwindcss` executable resolution.

Responsibilities:
- Honor the `TAILWINDCSS_INSTALL_DIR` override before anything else.
- Select the packaged binary whose platform directory matches the running system.
- Support frozen app layouts (for example PyInstaller) and local development runs.
"""

from __future__ import annotations

import os
from pathlib import Path
import sys
from typing import Mapping, Sequence

from .errors import DirectoryNotFoundError, ExecutableNotFoundError, UnsupportedPlatformError
from .platforms import (
    SUPPORTED_PLATFORMS,
    LocalPlatform,
    PlatformPattern,
    detect_local_platform,
)
from .telemetry.logger import NoticeLogger

EXECUTABLE_NAME = "tailwindcss"
INSTALL_DIR_ENV_KEY = "TAILWINDCSS_INSTALL_DIR"
_INSTALL_DOCS_URL = "https://tailwindcss.com/docs/installation"


def default_exe_path() -> Path:
    """Return the packaged `exe` directory for frozen and non-frozen execution."""

    frozen = bool(getattr(sys, "frozen", False))
    if frozen:
        return Path(sys.executable).resolve().parent / "exe"
    return Path(__file__).resolve().parent / "exe"


def resolve_executable(
    exe_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    local_platform: LocalPlatform | None = None,
    supported_platforms: Sequence[PlatformPattern] = SUPPORTED_PLATFORMS,
    notice_logger: NoticeLogger | None = None,
) -> str:
    """Resolve the absolute path of the `tailwindcss` executable.

    Resolution order:
    1. `TAILWINDCSS_INSTALL_DIR` from `env` (read on every call).
    2. `<exe_path>/<platform-dir>/tailwindcss` for the running platform.

    Raises:
        DirectoryNotFoundError: The override points at a missing directory.
        UnsupportedPlatformError: No supported platform matches the running system.
        ExecutableNotFoundError: The expected executable file is absent.
    """

    env_map: Mapping[str, str] = os.environ if env is None else env
    install_dir = env_map.get(INSTALL_DIR_ENV_KEY)
    if install_dir is not None:
        return _resolve_install_dir(install_dir, notice_logger)

    local = local_platform if local_platform is not None else detect_local_platform()
    if not any(pattern.matches(local) for pattern in supported_platforms):
        raise UnsupportedPlatformError(
            f"tailwindcss-runtime does not support the {local.identifier} platform.",
            hint=f"Install tailwindcss following instructions at {_INSTALL_DOCS_URL}",
        )

    search_dir = Path(exe_path) if exe_path is not None else default_exe_path()
    for candidate in _packaged_candidates(search_dir, local):
        if candidate.is_file():
            return str(candidate)

    raise ExecutableNotFoundError(
        f"Cannot find the tailwindcss executable for {local.identifier} in {search_dir}.",
        hint=(
            f"Reinstall the package for this platform, or set {INSTALL_DIR_ENV_KEY} "
            "to a directory containing a `tailwindcss` executable."
        ),
    )


def _resolve_install_dir(raw_install_dir: str, notice_logger: NoticeLogger | None) -> str:
    """Return the executable inside an override directory; an empty value is no directory."""

    install_dir = Path(raw_install_dir)
    if not raw_install_dir.strip() or not install_dir.is_dir():
        raise DirectoryNotFoundError(
            f"{INSTALL_DIR_ENV_KEY} is set to `{raw_install_dir}`, "
            "but that directory does not exist.",
            hint=f"Unset {INSTALL_DIR_ENV_KEY} or point it at an existing directory.",
        )

    logger = notice_logger if notice_logger is not None else NoticeLogger()
    logger.notice(
        f"NOTE: using {INSTALL_DIR_ENV_KEY} to find tailwindcss executable: {install_dir}"
    )

    executable = install_dir.absolute() / EXECUTABLE_NAME
    if not executable.is_file():
        raise ExecutableNotFoundError(
            f"Cannot find the tailwindcss executable in {install_dir}.",
            hint=f"Place a `{EXECUTABLE_NAME}` executable inside {INSTALL_DIR_ENV_KEY}.",
        )
    return str(executable)


def _packaged_candidates(search_dir: Path, local: LocalPlatform) -> list[Path]:
    """Return executable paths under platform directories matching `local`."""

    if not search_dir.is_dir():
        return []

    candidates: list[Path] = []
    for child in sorted(search_dir.iterdir()):
        if not child.is_dir():
            continue
        pattern = PlatformPattern.parse(child.name)
        if pattern is not None and pattern.matches(local):
            candidates.append((child / EXECUTABLE_NAME).absolute())
    return candidates
