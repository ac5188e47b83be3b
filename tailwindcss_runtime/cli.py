"""Command-line interface for tailwindcss-runtime.

Responsibilities:
- Expose user-facing commands for platform inspection, resolution and runs.
- Convert CLI arguments and YAML settings into a `CommandConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Annotated, Sequence

import typer

from .cli_rendering import echo_command, exit_with_command_error
from .commands import compile_command, watch_command
from .config import ConfigLoader, RuntimeSettings
from .errors import ProcessLaunchError
from .platforms import detect_local_platform
from .resolver import resolve_executable
from .telemetry.logger import NoticeLogger, configure_cli_logging

app = typer.Typer(
    name="tailwindcss-runtime",
    no_args_is_help=True,
    help="Locate the bundled tailwindcss executable and run it.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML settings file with command defaults."),
]
ExePathOption = Annotated[
    Path | None,
    typer.Option("--exe-path", help="Directory holding platform-named binary folders."),
]
InputOption = Annotated[
    Path | None, typer.Option("--input", "-i", help="Input stylesheet.")
]
OutputOption = Annotated[
    Path | None, typer.Option("--output", "-o", help="Output stylesheet.")
]
TailwindConfigOption = Annotated[
    Path | None, typer.Option("--tailwind-config", "-c", help="Tailwind config file.")
]
PostcssOption = Annotated[
    Path | None,
    typer.Option("--postcss", help="PostCSS config file, passed only when it exists."),
]
DebugOption = Annotated[
    bool | None,
    typer.Option("--debug/--no-debug", help="Skip minification of the output."),
]
CssCompressorOption = Annotated[
    bool | None,
    typer.Option(
        "--css-compressor/--no-css-compressor",
        help="Another tool already compresses CSS, so skip `--minify` on compile.",
    ),
]
PrintOption = Annotated[
    bool,
    typer.Option("--print", help="Print the command instead of running it."),
]


def _load_settings(config_file: Path | None) -> RuntimeSettings:
    if config_file is None:
        return RuntimeSettings()
    return ConfigLoader.from_yaml(config_file)


def _run_command(command_name: str, command: Sequence[str], run_logger: NoticeLogger) -> int:
    """Run a built command in the foreground and return its exit code."""

    run_logger.log_command_start(command_name, command[0])
    try:
        result = subprocess.run(list(command), check=False)
    except OSError as exc:
        raise ProcessLaunchError(
            f"Could not start `{command[0]}`: {exc}",
            hint="Verify the executable exists and has execute permission.",
        ) from exc
    run_logger.log_command_exit(command_name, result.returncode)
    return result.returncode


@app.command("platform")
def platform_command() -> None:
    """Print the running platform identifier."""

    typer.echo(detect_local_platform().identifier)


@app.command("executable")
def executable_command(exe_path: ExePathOption = None) -> None:
    """Print the resolved tailwindcss executable path."""

    run_logger = configure_cli_logging()
    try:
        executable = resolve_executable(exe_path=exe_path, notice_logger=run_logger)
    except Exception as exc:
        exit_with_command_error("executable", exc)

    typer.echo(executable)


@app.command("compile")
def compile_cli_command(
    config_file: ConfigOption = None,
    exe_path: ExePathOption = None,
    input_path: InputOption = None,
    output_path: OutputOption = None,
    tailwind_config: TailwindConfigOption = None,
    postcss: PostcssOption = None,
    debug: DebugOption = None,
    css_compressor: CssCompressorOption = None,
    print_only: PrintOption = False,
) -> None:
    """Compile stylesheets once."""

    run_logger = configure_cli_logging()
    try:
        settings = _load_settings(config_file).with_overrides(
            exe_path=exe_path,
            input_path=input_path,
            output_path=output_path,
            config_path=tailwind_config,
            postcss_path=postcss,
            debug=debug,
            css_compressor_active=css_compressor,
        )
        executable = resolve_executable(exe_path=settings.exe_path, notice_logger=run_logger)
        command = compile_command(executable, settings.to_command_config(watch=False))
        if not print_only:
            return_code = _run_command("compile", command, run_logger)
    except Exception as exc:
        exit_with_command_error("compile", exc)

    if print_only:
        echo_command(command)
        return
    if return_code != 0:
        raise typer.Exit(code=return_code)


@app.command("watch")
def watch_cli_command(
    config_file: ConfigOption = None,
    exe_path: ExePathOption = None,
    input_path: InputOption = None,
    output_path: OutputOption = None,
    tailwind_config: TailwindConfigOption = None,
    postcss: PostcssOption = None,
    debug: DebugOption = None,
    poll: Annotated[
        bool | None,
        typer.Option("--poll/--no-poll", help="Use polling instead of filesystem events."),
    ] = None,
    always: Annotated[
        bool | None,
        typer.Option("--always/--no-always", help="Keep watching after stdin closes."),
    ] = None,
    print_only: PrintOption = False,
) -> None:
    """Rebuild stylesheets whenever sources change."""

    run_logger = configure_cli_logging()
    try:
        settings = _load_settings(config_file).with_overrides(
            exe_path=exe_path,
            input_path=input_path,
            output_path=output_path,
            config_path=tailwind_config,
            postcss_path=postcss,
            debug=debug,
            poll=poll,
            always_write=always,
        )
        executable = resolve_executable(exe_path=settings.exe_path, notice_logger=run_logger)
        command = watch_command(executable, settings.to_command_config(watch=True))
        if not print_only:
            return_code = _run_command("watch", command, run_logger)
    except Exception as exc:
        exit_with_command_error("watch", exc)

    if print_only:
        echo_command(command)
        return
    if return_code != 0:
        raise typer.Exit(code=return_code)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
