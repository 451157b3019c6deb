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
from ...core.validation import parse_hex
from ...crypto.signing import ED25519_PUB_LEN
from ...formats.multipart import DecodedMultipart, decode_multipart
from ...tree.storage import safe_filename, unique_filename
from ..core.common import _ctx_quiet, _ctx_value, _read_input, _run_cli

_UNPACK_HELP = (
    "Unpack a multipart file.\n\n"
    "JSON fields are printed as one JSON document; binary fields are written to\n"
    "<out>/<key>.bin when --out is given (keys that sanitize to the same name\n"
    "get a -1, -2, ... suffix).\n\n"
    "Examples:\n"
    "  blobpack unpack out.bpk\n"
    "  blobpack unpack out.bpk --out ./fields --verify-key <public-key-hex>\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_UNPACK_HELP)(unpack)


def unpack(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Multipart file to read ('-' for stdin)."),
    out_dir: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory for binary fields.",
        rich_help_panel="Output",
    ),
    verify_key: str | None = typer.Option(
        None,
        "--verify-key",
        help="Require a valid signature from this Ed25519 public key (hex).",
        rich_help_panel="Signing",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail when any field could not be decoded.",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        quiet_value = _ctx_quiet(ctx)
        secret = None
        if verify_key is not None:
            secret = parse_hex(verify_key, ED25519_PUB_LEN, label="verify key")
        decoded = decode_multipart(_read_input(input_path), secret=secret, quiet=quiet_value)
        if strict and decoded.errors:
            raise decoded.errors[0].to_exception()
        written = write_binary_fields(decoded, out_dir) if out_dir is not None else {}
        summary: dict[str, object] = dict(decoded.json_fields)
        for key, obj in decoded.binary_fields.items():
            path = written.get(key)
            summary[key] = {"size": obj.size, "path": str(path) if path else None}
        console.print_json(json.dumps(summary, ensure_ascii=False))

    _run_cli(_run, debug=debug_value)


def write_binary_fields(decoded: DecodedMultipart, out_dir: Path) -> dict[str, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    used: set[str] = set()
    for key, obj in decoded.binary_fields.items():
        path = out_dir / unique_filename(safe_filename(key), used)
        path.write_bytes(obj.data)
        written[key] = path
    return written

