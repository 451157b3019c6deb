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

"""Directory layout for a saved side-table.

``index.json`` maps each placeholder token to the file holding its bytes::

    {"{blob:<id>}": {"file": "blob-<id>.bin", "content_type": null}}
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path

from ..core.models import BinaryObject
from .placeholders import parse_token

INDEX_FILENAME = "index.json"

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]")


def safe_filename(name: str) -> str:
    """Replace characters outside [A-Za-z0-9._-]; never returns a hidden name."""
    name = _UNSAFE_FILENAME_RE.sub("_", name)
    if not name or name.startswith("."):
        name = f"_{name}"
    return name


def unique_filename(stem: str, used: set[str], *, suffix: str = ".bin") -> str:
    # Names are unique case-insensitively within one directory.
    name = f"{stem}{suffix}"
    counter = 1
    while name.lower() in used:
        name = f"{stem}-{counter}{suffix}"
        counter += 1
    used.add(name.lower())
    return name


def save_side_table(side_table: Mapping[str, BinaryObject], directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    index: dict[str, dict[str, object]] = {}
    used = {INDEX_FILENAME}
    for token, obj in side_table.items():
        placeholder = parse_token(token)
        if placeholder is None:
            raise ValueError(f"side-table key is not a placeholder token: {token!r}")
        name = unique_filename(safe_filename(f"{placeholder.kind.value}-{placeholder.id}"), used)
        (directory / name).write_bytes(obj.data)
        index[token] = {"file": name, "content_type": obj.content_type}
    index_path = directory / INDEX_FILENAME
    index_path.write_text(
        json.dumps(index, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return index_path


def load_side_table(directory: Path) -> dict[str, BinaryObject]:
    index_path = directory / INDEX_FILENAME
    try:
        index = json.loads(index_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{index_path}: invalid side-table index ({exc})") from exc
    if not isinstance(index, dict):
        raise ValueError(f"{index_path}: side-table index must be a JSON object")
    table: dict[str, BinaryObject] = {}
    for token, entry in index.items():
        if parse_token(token) is None:
            raise ValueError(f"{index_path}: not a placeholder token: {token!r}")
        name = entry.get("file") if isinstance(entry, dict) else None
        if not isinstance(name, str) or not name or Path(name).name != name or name == "..":
            raise ValueError(f"{index_path}: entry {token!r} must name a file in {directory}")
        table[token] = BinaryObject(
            (directory / name).read_bytes(),
            content_type=entry.get("content_type"),
        )
    return table
