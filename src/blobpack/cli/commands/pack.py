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
from ...core.models import BinaryObject
from ...core.validation import parse_hex
from ...crypto.signing import ED25519_SEED_LEN
from ...formats.multipart import MultipartBuilder
from ..core.common import _ctx_quiet, _ctx_value, _parse_json, _run_cli, _split_assignment
from ..io.outputs import _write_output

_PACK_HELP = (
    "Pack JSON and binary fields into one multipart file.\n\n"
    "Fields are written in the order --json, --json-file, then --blob.\n\n"
    "Examples:\n"
    '  blobpack pack out.bpk --json name=\'"doc1"\' --blob data=./data.bin\n'
    "  blobpack pack out.bpk --json-file meta=./meta.json --sign-key <seed-hex>\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PACK_HELP)(pack)


def pack(
    ctx: typer.Context,
    output: Path = typer.Argument(
        ...,
        help="Write the multipart object to this path ('-' for stdout).",
    ),
    json_fields: list[str] | None = typer.Option(
        None,
        "--json",
        "-j",
        help="KEY=JSON field given inline (repeatable).",
        rich_help_panel="Fields",
    ),
    json_files: list[str] | None = typer.Option(
        None,
        "--json-file",
        help="KEY=PATH of a JSON document (repeatable).",
        rich_help_panel="Fields",
    ),
    blobs: list[str] | None = typer.Option(
        None,
        "--blob",
        "-b",
        help="KEY=PATH of a binary file (repeatable).",
        rich_help_panel="Fields",
    ),
    sign_key: str | None = typer.Option(
        None,
        "--sign-key",
        help="Sign the JSON fields with this Ed25519 seed (hex).",
        rich_help_panel="Signing",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        quiet_value = _ctx_quiet(ctx)
        builder = build_from_options(
            json_fields=json_fields or [],
            json_files=json_files or [],
            blobs=blobs or [],
        )
        if sign_key is not None:
            builder.sign(parse_hex(sign_key, ED25519_SEED_LEN, label="sign key"))
        packed = builder.build()
        if _write_output(output, packed.data) and not quiet_value:
            console.print(
                f"[success]Packed[/success] {len(builder.keys)} field(s), "
                f"{packed.size} bytes -> {output}"
            )

    _run_cli(_run, debug=debug_value)


def build_from_options(
    *,
    json_fields: list[str],
    json_files: list[str],
    blobs: list[str],
) -> MultipartBuilder:
    builder = MultipartBuilder()
    for item in json_fields:
        key, text = _split_assignment(item, option="--json")
        builder.add_json(key, _parse_json(text, label=f"--json {key}"))
    for item in json_files:
        key, path = _split_assignment(item, option="--json-file")
        text = Path(path).read_text(encoding="utf-8")
        builder.add_json(key, _parse_json(text, label=f"--json-file {key}"))
    for item in blobs:
        key, path = _split_assignment(item, option="--blob")
        builder.add_binary(key, BinaryObject.from_path(path))
    return builder

