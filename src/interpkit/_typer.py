"""Helpers for turning library errors into Typer parameter errors."""

from __future__ import annotations

from typing import NoReturn, Optional

import typer

from .errors import InterpolationError


def bad_parameter(message: str, *, param_hint: Optional[str] = None) -> NoReturn:
    """Raise :class:`typer.BadParameter` naming the offending option."""

    raise typer.BadParameter(message, param_hint=param_hint)


def fail(exc: InterpolationError, code: int = 1) -> NoReturn:
    """Print ``exc`` to stderr and exit with ``code``."""

    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code) from exc
