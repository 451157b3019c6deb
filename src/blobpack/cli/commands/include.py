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

from pathlib import Path

import typer

from ...core.log import console
from ...formats.multipart import MultipartBuilder
from ...tree import include_blobs, load_side_table
from ..core.common import _ctx_config, _ctx_quiet, _ctx_value, _parse_json, _read_input, _run_cli
from ..io.outputs import _write_output

_INCLUDE_HELP = (
    "Rebuild a multipart file from a JSON tree and a side-table directory.\n\n"
    "Each top-level key of the tree becomes one field; {blob:<id>} placeholders\n"
    "are replaced with the bytes stored in --blobs. Missing placeholders fail\n"
    "unless --lenient is given or tree.strict_lookup is false.\n\n"
    "Examples:\n"
    "  blobpack include tree.json doc.bpk --blobs ./blobs\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_INCLUDE_HELP)(include)


def include(
    ctx: typer.Context,
    tree_path: Path = typer.Argument(..., help="JSON tree to read ('-' for stdin)."),
    output: Path = typer.Argument(..., help="Write the multipart file here ('-' for stdout)."),
    blobs_dir: Path = typer.Option(
        ...,
        "--blobs",
        help="Side-table directory.",
        rich_help_panel="Side-table",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail on placeholders missing from the side-table (default: tree.strict_lookup).",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        quiet_value = _ctx_quiet(ctx)
        config = _ctx_config(ctx)
        strict_value = config.tree.strict_lookup if strict is None else strict
        tree = _parse_json(_read_input(tree_path).decode("utf-8"), label=str(tree_path))
        if not isinstance(tree, dict):
            raise ValueError(f"{tree_path}: the tree must be a JSON object of fields")
        restored = include_blobs(tree, load_side_table(blobs_dir), strict=strict_value)
        builder = MultipartBuilder().add_fields(restored)
        packed = builder.build()
        if _write_output(output, packed.data) and not quiet_value:
            console.print(
                f"[success]Included[/success] {len(builder.keys)} field(s), "
                f"{packed.size} bytes -> {output}",
                soft_wrap=True,
            )

    _run_cli(_run, debug=debug_value)
