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

import json
from pathlib import Path

import typer

from ...core.log import console
from ...formats.multipart import decode_multipart
from ...tree import INDEX_FILENAME, extract_blobs_sync, load_side_table, save_side_table
from ..core.common import _ctx_config, _ctx_quiet, _ctx_value, _read_input, _run_cli
from ..io.outputs import _write_output

_EXTRACT_HELP = (
    "Split a multipart file into a JSON tree and a side-table directory.\n\n"
    "Binary fields become {blob:<id>} placeholders; their bytes are stored in\n"
    "--blobs with an index.json. Ids follow tree.id_strategy from the config.\n"
    "An existing side-table in --blobs is kept and extended.\n\n"
    "Examples:\n"
    "  blobpack extract doc.bpk tree.json --blobs ./blobs\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_EXTRACT_HELP)(extract)


def extract(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Multipart file to read ('-' for stdin)."),
    tree_out: Path = typer.Argument(..., help="Write the JSON tree here ('-' for stdout)."),
    blobs_dir: Path = typer.Option(
        ...,
        "--blobs",
        help="Side-table directory.",
        rich_help_panel="Side-table",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        quiet_value = _ctx_quiet(ctx)
        config = _ctx_config(ctx)
        decoded = decode_multipart(_read_input(input_path), quiet=quiet_value)
        table = load_side_table(blobs_dir) if (blobs_dir / INDEX_FILENAME).exists() else {}
        known = len(table)
        tree = extract_blobs_sync(decoded.fields, table, id_generator=config.id_generator())
        save_side_table(table, blobs_dir)
        text = json.dumps(tree, ensure_ascii=False, indent=2) + "\n"
        if _write_output(tree_out, text.encode("utf-8")) and not quiet_value:
            console.print(
                f"[success]Extracted[/success] {len(table) - known} new object(s) -> {blobs_dir}",
                soft_wrap=True,
            )

    _run_cli(_run, debug=debug_value)
