"""CLI output and error rendering helpers."""

from __future__ import annotations

import shlex
from typing import NoReturn, Sequence

import typer

from .errors import TailwindcssRuntimeError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, TailwindcssRuntimeError):
        typer.secho(f"{command_name} failed: {exc.detail}", fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_command(command: Sequence[str]) -> None:
    """Print a built argv as one shell-quoted line."""

    typer.echo(shlex.join(command))
