"""Argument-list construction for `tailwindcss` compile and watch runs.

Key types:
- `CommandConfig`: flags and optional paths for one invocation.

Key public functions:
- `compile_command`: build a one-shot compile argv.
- `watch_command`: build a watch-mode argv.
- `build_command`: resolve the executable once and dispatch on `watch`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .resolver import resolve_executable
from .telemetry.logger import NoticeLogger


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Flags and paths for one `tailwindcss` invocation.

    Attributes:
        debug: Skip `--minify` so output stays readable.
        watch: Build a watch command instead of a compile command.
        poll: Use polling file watching (`-p`).
        always_write: Keep watching after stdin closes (`always`).
        css_compressor_active: The embedding application already compresses CSS.
        input_path: Optional input stylesheet (`-i`).
        output_path: Optional output stylesheet (`-o`).
        config_path: Optional tailwind config file (`-c`).
        postcss_path: Optional PostCSS config, passed only when the file exists.
    """

    debug: bool = False
    watch: bool = False
    poll: bool = False
    always_write: bool = False
    css_compressor_active: bool = False
    input_path: Path | None = None
    output_path: Path | None = None
    config_path: Path | None = None
    postcss_path: Path | None = None


def compile_command(executable_path: str, config: CommandConfig | None = None) -> list[str]:
    """Return the compile argv for an already resolved executable."""

    resolved = config if config is not None else CommandConfig()
    command = [executable_path]
    command.extend(_io_arguments(resolved))
    if not (resolved.debug or resolved.css_compressor_active):
        command.append("--minify")
    command.extend(_postcss_arguments(resolved))
    return command


def watch_command(executable_path: str, config: CommandConfig | None = None) -> list[str]:
    """Return the watch argv for an already resolved executable.

    Only `debug` suppresses `--minify` here; the compressor signal applies to
    compile runs.
    """

    resolved = config if config is not None else CommandConfig()
    command = [executable_path, "-w"]
    if resolved.poll:
        command.append("-p")
    if resolved.always_write:
        command.append("always")
    if not resolved.debug:
        command.append("--minify")
    command.extend(_io_arguments(resolved))
    command.extend(_postcss_arguments(resolved))
    return command


def build_command(
    config: CommandConfig,
    exe_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    notice_logger: NoticeLogger | None = None,
) -> list[str]:
    """Resolve the executable once and build the matching command."""

    executable = resolve_executable(exe_path=exe_path, env=env, notice_logger=notice_logger)
    if config.watch:
        return watch_command(executable, config)
    return compile_command(executable, config)


def _io_arguments(config: CommandConfig) -> list[str]:
    arguments: list[str] = []
    if config.input_path is not None:
        arguments.extend(["-i", str(config.input_path)])
    if config.output_path is not None:
        arguments.extend(["-o", str(config.output_path)])
    if config.config_path is not None:
        arguments.extend(["-c", str(config.config_path)])
    return arguments


def _postcss_arguments(config: CommandConfig) -> list[str]:
    if config.postcss_path is not None and config.postcss_path.is_file():
        return ["--postcss", str(config.postcss_path)]
    return []
