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

from ...core.log import console
from ...crypto.signing import generate_signing_keypair
from ..core.common import _ctx_value, _run_cli


def register(app: typer.Typer) -> None:
    app.command(help="Generate an Ed25519 keypair for signing multipart JSON fields.")(keygen)


def keygen(ctx: typer.Context) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        seed, public = generate_signing_keypair()
        console.print(f"seed:   {seed.hex()}", highlight=False)
        console.print(f"public: {public.hex()}", highlight=False)

    _run_cli(_run, debug=debug_value)
