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
from rich import box
from rich.table import Table

from ...core.log import console
from ...encoding.entry import Entry, EntryType
from ...formats.multipart import iter_entries
from ..core.common import _ctx_value, _read_input, _run_cli


def register(app: typer.Typer) -> None:
    app.command(help="List the entries of a multipart file without decoding payloads.")(inspect)


def inspect(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Multipart file to read ('-' for stdin)."),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        entries = list(iter_entries(_read_input(input_path)))
        console.print(build_entry_table(entries))

    _run_cli(_run, debug=debug_value)


def build_entry_table(entries: list[Entry]) -> Table:
    table = Table(box=box.SIMPLE, header_style="accent")
    table.add_column("#", justify="right")
    table.add_column("Key")
    table.add_column("Type")
    table.add_column("Bytes", justify="right")
    table.add_column("Offset", justify="right")
    for index, entry in enumerate(entries):
        table.add_row(
            str(index),
            entry.key,
            _type_label(entry),
            str(len(entry.payload)),
            str(entry.offset),
        )
    return table


def _type_label(entry: Entry) -> str:
    kind = entry.known_type
    if kind is EntryType.JSON:
        return "json"
    if kind is EntryType.BINARY:
        return "binary"
    return f"unknown ({entry.entry_type})"
