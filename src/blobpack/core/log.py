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

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme(
    {
        "accent": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "muted": "dim",
    }
)

console = Console(theme=THEME)
console_err = Console(stderr=True, theme=THEME)


def configure_consoles(*, no_color: bool) -> None:
    console.no_color = no_color
    console_err.no_color = no_color


def warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[warning]Warning:[/warning] {escape(message)}")


def error(message: str) -> None:
    console_err.print(f"[error]Error:[/error] {escape(message)}", soft_wrap=True)
