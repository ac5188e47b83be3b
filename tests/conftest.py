"""Shared pytest fixtures for the tailwindcss-runtime test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _clear_install_dir_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's own `TAILWINDCSS_INSTALL_DIR` out of every test."""

    monkeypatch.delenv("TAILWINDCSS_INSTALL_DIR", raising=False)


@pytest.fixture(autouse=True)
def _drop_log_handlers_after_test() -> Iterator[None]:
    """Drop handlers bound to streams that only lived for one test."""

    yield
    logger.remove()


@pytest.fixture
def make_exe_directory(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Return a factory creating `<exe>/<platform>/tailwindcss` layouts."""

    def _make(platform_dir: str, *, with_executable: bool = True) -> tuple[Path, Path]:
        exe_dir = tmp_path / "exe"
        platform_path = exe_dir / platform_dir
        platform_path.mkdir(parents=True, exist_ok=True)
        executable = platform_path / "tailwindcss"
        if with_executable:
            executable.write_text("#!/bin/sh\n", encoding="utf-8")
        return exe_dir, executable.absolute()

    return _make


@pytest.fixture
def local_install_dir(tmp_path: Path) -> tuple[Path, Path]:
    """Create a local install directory holding a `tailwindcss` file."""

    install_dir = tmp_path / "local-install"
    install_dir.mkdir()
    executable = install_dir / "tailwindcss"
    executable.write_text("#!/bin/sh\n", encoding="utf-8")
    return install_dir, executable.absolute()
