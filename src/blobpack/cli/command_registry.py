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

from .commands import (
    config as config_command,
    extract as extract_command,
    include as include_command,
    inspect as inspect_command,
    keygen as keygen_command,
    pack as pack_command,
    unpack as unpack_command,
)


def register(app: typer.Typer) -> None:
    pack_command.register(app)
    unpack_command.register(app)
    inspect_command.register(app)
    extract_command.register(app)
    include_command.register(app)
    keygen_command.register(app)
    config_command.register(app)
