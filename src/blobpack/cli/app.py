#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import typer

from . import command_registry
from ..config import load_config
from ..core.log import configure_consoles, console, console_err
from .core.common import _get_version

app = typer.Typer(add_completion=False, help="Pack JSON and binary fields into one stream.")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"blobpack {_get_version()}", highlight=False)
        raise typer.Exit()


@app.callback()
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config file.",
        rich_help_panel="Global",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show full tracebacks on errors.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide warnings and non-error output.",
        rich_help_panel="Global",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output.",
        rich_help_panel="Accessibility",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = version
    try:
        app_config = load_config(config)
    except (OSError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    configure_consoles(no_color=no_color or app_config.ui.no_color)
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "app_config": app_config,
            "debug": debug,
            "quiet": quiet or app_config.ui.quiet,
            "no_color": no_color,
        }
    )


command_registry.register(app)


def main() -> None:
    app()
