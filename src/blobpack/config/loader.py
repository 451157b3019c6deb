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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from ..core.bounds import DEFAULT_HASH_CHUNK_SIZE
from ..tree.ids import IdGenerator, make_content_hasher, random_id
from .installer import resolve_config_path

IdStrategy = Literal["sha256", "uuid"]
ID_STRATEGIES: tuple[str, ...] = ("sha256", "uuid")


@dataclass(frozen=True)
class TreeDefaults:
    id_strategy: IdStrategy = "sha256"
    hash_chunk_size: int = DEFAULT_HASH_CHUNK_SIZE
    strict_lookup: bool = True


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class BlobpackConfig:
    source: Path | None = None
    tree: TreeDefaults = field(default_factory=TreeDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)

    def id_generator(self) -> IdGenerator:
        if self.tree.id_strategy == "uuid":
            return random_id
        return make_content_hasher(self.tree.hash_chunk_size)


def load_config(path: str | Path | None = None) -> BlobpackConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return BlobpackConfig(
        source=config_path,
        tree=_parse_tree_defaults(_get_dict(data, "tree")),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_tree_defaults(cfg: dict[str, object]) -> TreeDefaults:
    chunk_size = cfg.get("hash_chunk_size")
    if chunk_size is None:
        hash_chunk_size = DEFAULT_HASH_CHUNK_SIZE
    else:
        hash_chunk_size = _parse_int_strict(chunk_size, field="tree.hash_chunk_size")
        if hash_chunk_size <= 0:
            raise ValueError("tree.hash_chunk_size must be a positive integer")
    return TreeDefaults(
        id_strategy=_parse_id_strategy(cfg.get("id_strategy"), field="tree.id_strategy"),
        hash_chunk_size=hash_chunk_size,
        strict_lookup=_parse_bool(
            cfg.get("strict_lookup"),
            field="tree.strict_lookup",
            default=True,
        ),
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
    )


def _parse_id_strategy(value: object, *, field: str) -> IdStrategy:
    if value is None:
        return "sha256"
    if not isinstance(value, str):
        raise ValueError(f"{field} must be one of: {', '.join(ID_STRATEGIES)}")
    normalized = value.strip().lower()
    if normalized not in ID_STRATEGIES:
        raise ValueError(f"{field} must be one of: {', '.join(ID_STRATEGIES)}")
    return cast(IdStrategy, normalized)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
