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

import importlib.metadata
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import typer
from rich.traceback import install as install_rich_traceback

from ...config import BlobpackConfig, load_config
from ...core.log import error


def _run_cli(func: Callable[[], Any], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        result = func()
    except (OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        if debug:
            raise
        error(str(exc))
        raise typer.Exit(code=2)
    if isinstance(result, int) and result != 0:
        raise typer.Exit(code=result)


def _ctx_value(ctx: typer.Context, key: str) -> Any:
    if ctx.obj is None:
        return None
    return ctx.obj.get(key)


def _ctx_config(ctx: typer.Context) -> BlobpackConfig:
    config = _ctx_value(ctx, "app_config")
    if isinstance(config, BlobpackConfig):
        return config
    return load_config(_ctx_value(ctx, "config"))


def _ctx_quiet(ctx: typer.Context) -> bool:
    return bool(_ctx_value(ctx, "quiet")) or _ctx_config(ctx).ui.quiet


def _split_assignment(value: str, *, option: str) -> tuple[str, str]:
    key, sep, rest = value.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"{option} expects KEY=VALUE, got {value!r}")
    return key, rest


def _parse_json(text: str, *, label: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{label}: invalid JSON ({exc})") from exc


def _read_input(path: Path) -> bytes:
    if str(path) == "-":
        stdin = typer.get_binary_stream("stdin")
        return stdin.read()
    return path.read_bytes()


def _get_version() -> str:
    try:
        return importlib.metadata.version("blobpack")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"
