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

from collections.abc import Mapping, Sequence
from typing import cast

from ..core.errors import PlaceholderLookupError
from ..core.models import BinaryObject, ValueKind, classify
from ..registry.ephemeral import BlobRegistry
from .placeholders import TokenKind, parse_token


class _Includer:
    def __init__(
        self,
        side_table: Mapping[str, BinaryObject],
        registry: BlobRegistry | None,
        *,
        strict: bool,
    ) -> None:
        self._side_table = side_table
        self._registry = registry
        self._strict = strict
        self.minted: list[str] = []

    def visit(self, value: object) -> tuple[object, bool]:
        kind = classify(value)
        if kind is ValueKind.STRING:
            return self._visit_string(cast(str, value))
        if kind is ValueKind.ARRAY:
            items = cast(Sequence[object], value)
            results = [self.visit(item) for item in items]
            if not any(changed for _value, changed in results):
                return items, False
            rebuilt = [new_value for new_value, _changed in results]
            return (tuple(rebuilt) if isinstance(items, tuple) else rebuilt), True
        if kind is ValueKind.OBJECT:
            mapping = cast(Mapping[str, object], value)
            pairs = [(key, self.visit(item)) for key, item in mapping.items()]
            if not any(changed for _key, (_value, changed) in pairs):
                return mapping, False
            return {key: new_value for key, (new_value, _changed) in pairs}, True
        return value, False

    def _visit_string(self, text: str) -> tuple[object, bool]:
        placeholder = parse_token(text)
        if placeholder is None:
            return text, False
        obj = self._side_table.get(text)
        if obj is None:
            if self._strict:
                raise PlaceholderLookupError(text)
            return text, False
        if placeholder.kind is TokenKind.URL:
            if self._registry is None:
                raise ValueError(f"a blob registry is required to restore {text}")
            url = self._registry.create_url(obj)
            self.minted.append(url)
            return url, True
        return obj, True

    def release_minted(self) -> None:
        if self._registry is None:
            return
        for url in self.minted:
            self._registry.release(url)
        self.minted.clear()


def include_blobs(
    value: object,
    side_table: Mapping[str, BinaryObject],
    *,
    registry: BlobRegistry | None = None,
    strict: bool = True,
) -> object:
    """Replace placeholder tokens in value with the objects they stand for.

    ``{blob:...}`` becomes the BinaryObject itself and ``{blobUrl:...}`` becomes a
    freshly minted registry URL. A token missing from side_table raises
    PlaceholderLookupError when strict, and is left in place otherwise. URLs
    minted before a failure are released again.

    Any string that parses as a token is treated as one, including ordinary
    text that happens to look like ``{blob:...}``. Trees carrying such text
    round-trip through extract_blobs only with ``strict=False`` and only while
    no side-table entry uses the same token.
    """
    includer = _Includer(side_table, registry, strict=strict)
    try:
        result, _changed = includer.visit(value)
    except BaseException:
        includer.release_minted()
        raise
    return result
