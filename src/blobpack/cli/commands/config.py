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

from ...config import init_user_config, resolve_config_path
from ...core.log import console
from ..core.common import _ctx_config, _ctx_value, _run_cli

_CONFIG_HELP = (
    "Show the active TOML config.\n\n"
    "Examples:\n"
    "  blobpack config\n"
    "  blobpack config --print-path\n"
    "  blobpack config --init\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(
    ctx: typer.Context,
    print_path: bool = typer.Option(
        False,
        "--print-path",
        help="Print the resolved config path and exit.",
        rich_help_panel="Behavior",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Copy the default config to the user config directory.",
        rich_help_panel="Behavior",
    ),
) -> None:
    config_value = _ctx_value(ctx, "config")
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        if init:
            path = init_user_config()
            console.print(f"User config ready at {path}", highlight=False, soft_wrap=True)
            return
        if print_path:
            console.print(str(resolve_config_path(config_value)), highlight=False, soft_wrap=True)
            return
        loaded = _ctx_config(ctx)
        console.print(f"source:          {loaded.source}", highlight=False, soft_wrap=True)
        console.print(f"id_strategy:     {loaded.tree.id_strategy}", highlight=False)
        console.print(f"hash_chunk_size: {loaded.tree.hash_chunk_size}", highlight=False)
        console.print(f"strict_lookup:   {loaded.tree.strict_lookup}", highlight=False)
        console.print(f"quiet:           {loaded.ui.quiet}", highlight=False)
        console.print(f"no_color:        {loaded.ui.no_color}", highlight=False)

    _run_cli(_run, debug=debug_value)
