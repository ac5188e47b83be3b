"""CLI tests for platform, executable, compile and watch commands."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

from pytest import MonkeyPatch
from typer.testing import CliRunner

from tailwindcss_runtime import cli, resolver
from tailwindcss_runtime.cli import app
from tailwindcss_runtime.platforms import LocalPlatform

LINUX_HOST = LocalPlatform(cpu="x86_64", os="linux", version="gnu")


def _pin_linux_host(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(resolver, "detect_local_platform", lambda: LINUX_HOST)


def test_platform_command_prints_identifier(monkeypatch: MonkeyPatch) -> None:
    """`platform` should print the `<cpu>-<os>` identifier."""

    monkeypatch.setattr(cli, "detect_local_platform", lambda: LINUX_HOST)

    result = CliRunner().invoke(app, ["platform"])

    assert result.exit_code == 0
    assert result.output.strip() == "x86_64-linux"


def test_executable_command_prints_packaged_binary(
    monkeypatch: MonkeyPatch,
    make_exe_directory: Callable[..., tuple[Path, Path]],
) -> None:
    """`executable` should print the resolved absolute path."""

    _pin_linux_host(monkeypatch)
    exe_dir, executable = make_exe_directory("x86_64-linux")

    result = CliRunner().invoke(app, ["executable", "--exe-path", str(exe_dir)])

    assert result.exit_code == 0
    assert str(executable) in result.output


def test_executable_command_reports_missing_override_directory() -> None:
    """A missing override directory should fail with exit code 1 and a hint."""

    result = CliRunner().invoke(
        app,
        ["executable"],
        env={"TAILWINDCSS_INSTALL_DIR": "/does/not/exist"},
    )

    assert result.exit_code == 1
    assert "executable failed: TAILWINDCSS_INSTALL_DIR is set to" in result.output
    assert "Hint: Unset TAILWINDCSS_INSTALL_DIR" in result.output


def test_executable_command_reports_unsupported_platform(monkeypatch: MonkeyPatch) -> None:
    """Unsupported hosts should get installation guidance."""

    monkeypatch.setattr(
        resolver, "detect_local_platform", lambda: LocalPlatform(cpu="sparc", os="solaris")
    )

    result = CliRunner().invoke(app, ["executable"])

    assert result.exit_code == 1
    assert "does not support the sparc-solaris platform" in result.output
    assert "tailwindcss.com/docs/installation" in result.output


def test_compile_print_uses_override_and_minifies(
    local_install_dir: tuple[Path, Path],
) -> None:
    """`compile --print` should print the command built from the override binary."""

    install_dir, executable = local_install_dir

    result = CliRunner().invoke(
        app,
        ["compile", "--print", "-i", "in.css", "-o", "out.css"],
        env={"TAILWINDCSS_INSTALL_DIR": str(install_dir)},
    )

    assert result.exit_code == 0
    assert f"{executable} -i in.css -o out.css --minify" in result.output
    assert "using TAILWINDCSS_INSTALL_DIR" in result.output


def test_compile_print_honors_css_compressor_flag(
    monkeypatch: MonkeyPatch,
    make_exe_directory: Callable[..., tuple[Path, Path]],
) -> None:
    """`--css-compressor` should drop `--minify` from compile commands."""

    _pin_linux_host(monkeypatch)
    exe_dir, _ = make_exe_directory("x86_64-linux")

    result = CliRunner().invoke(
        app, ["compile", "--print", "--exe-path", str(exe_dir), "--css-compressor"]
    )

    assert result.exit_code == 0
    assert "--minify" not in result.output


def test_watch_print_reads_yaml_settings_and_cli_overrides(
    monkeypatch: MonkeyPatch,
    tmp_path: Path,
    make_exe_directory: Callable[..., tuple[Path, Path]],
) -> None:
    """File settings should apply unless a CLI flag overrides them."""

    _pin_linux_host(monkeypatch)
    exe_dir, executable = make_exe_directory("x86_64-linux")
    config_path = tmp_path / "tailwindcss.yml"
    config_path.write_text(
        f"exe_path: {exe_dir}\npoll: true\nalways: true\ndebug: true\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        app, ["watch", "--print", "--config", str(config_path), "--no-debug"]
    )

    assert result.exit_code == 0
    assert f"{executable} -w -p always --minify" in result.output


def test_watch_reports_invalid_config(tmp_path: Path) -> None:
    """Invalid settings files should fail before resolution."""

    config_path = tmp_path / "invalid.yml"
    config_path.write_text("unknown_field: x\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["watch", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "watch failed:" in result.output
    assert "unknown key(s): unknown_field" in result.output


def test_compile_runs_built_command_and_forwards_exit_code(
    monkeypatch: MonkeyPatch,
    make_exe_directory: Callable[..., tuple[Path, Path]],
) -> None:
    """Without `--print` the command should run and its exit code propagate."""

    _pin_linux_host(monkeypatch)
    exe_dir, executable = make_exe_directory("x86_64-linux")
    recorded: list[list[str]] = []

    def _fake_run(command: list[str], check: bool) -> subprocess.CompletedProcess[str]:
        recorded.append(command)
        return subprocess.CompletedProcess(command, 3)

    monkeypatch.setattr(cli.subprocess, "run", _fake_run)

    result = CliRunner().invoke(app, ["compile", "--exe-path", str(exe_dir), "--debug"])

    assert result.exit_code == 3
    assert recorded == [[str(executable)]]
    assert "event=exit" in result.output


def test_compile_reports_launch_failure(
    monkeypatch: MonkeyPatch,
    make_exe_directory: Callable[..., tuple[Path, Path]],
) -> None:
    """OS errors while spawning should become a concise diagnostic."""

    _pin_linux_host(monkeypatch)
    exe_dir, _ = make_exe_directory("x86_64-linux")

    def _failing_run(command: list[str], check: bool) -> subprocess.CompletedProcess[str]:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(cli.subprocess, "run", _failing_run)

    result = CliRunner().invoke(app, ["compile", "--exe-path", str(exe_dir)])

    assert result.exit_code == 1
    assert "compile failed: Could not start" in result.output
    assert "execute permission" in result.output
