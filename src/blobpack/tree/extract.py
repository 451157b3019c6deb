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

"""Move binary objects out of a JSON-like tree into a side-table.

Every visit returns ``(value, changed)``. A list, tuple or mapping is rebuilt
only when one of its children changed; otherwise the original container is
returned as-is, so trees without binary content come back by identity.

New side-table entries are staged and merged into the caller's table only once
the whole walk has succeeded.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, MutableMapping, Sequence
from typing import cast

from ..core.errors import DereferenceError
from ..core.models import BinaryObject, ValueKind, classify
from ..registry.ephemeral import BlobRegistry
from .ids import IdGenerator, content_hash_id
from .placeholders import TokenKind, make_token


class _Extractor:
    def __init__(self, id_generator: IdGenerator, registry: BlobRegistry | None) -> None:
        self._id_generator = id_generator
        self._registry = registry
        self.staged: dict[str, BinaryObject] = {}
        self.fetched: list[str] = []
        self._fetches: dict[str, asyncio.Future[BinaryObject]] = {}

    async def visit(self, value: object) -> tuple[object, bool]:
        kind = classify(value)
        if kind is ValueKind.BINARY:
            return self._register(TokenKind.INLINE, cast(BinaryObject, value)), True
        if kind is ValueKind.STRING:
            text = cast(str, value)
            if self._is_registry_url(text):
                obj = await self._fetch(text)
                return self._register(TokenKind.URL, obj), True
            return value, False
        if kind is ValueKind.ARRAY:
            return await self._visit_array(cast(Sequence[object], value))
        if kind is ValueKind.OBJECT:
            return await self._visit_object(cast(Mapping[str, object], value))
        return value, False

    async def _visit_array(self, items: Sequence[object]) -> tuple[object, bool]:
        results = await self._visit_all(items)
        if not any(changed for _value, changed in results):
            return items, False
        rebuilt = [new_value for new_value, _changed in results]
        if isinstance(items, tuple):
            return tuple(rebuilt), True
        return rebuilt, True

    async def _visit_object(self, mapping: Mapping[str, object]) -> tuple[object, bool]:
        keys = list(mapping.keys())
        results = await self._visit_all([mapping[key] for key in keys])
        if not any(changed for _value, changed in results):
            return mapping, False
        return {key: new_value for key, (new_value, _changed) in zip(keys, results)}, True

    async def _visit_all(self, items: Sequence[object]) -> list[tuple[object, bool]]:
        # A failing child cancels its siblings; the first error surfaces unwrapped.
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.visit(item)) for item in items]
        except ExceptionGroup as exc:
            raise exc.exceptions[0] from None
        return [task.result() for task in tasks]

    def _is_registry_url(self, value: str) -> bool:
        return self._registry is not None and value.startswith(self._registry.scheme)

    async def _fetch(self, url: str) -> BinaryObject:
        # A URL repeated in the tree is dereferenced once.
        pending = self._fetches.get(url)
        if pending is None:
            pending = asyncio.ensure_future(self._dereference(url))
            self._fetches[url] = pending
        return await pending

    async def _dereference(self, url: str) -> BinaryObject:
        registry = self._registry
        if registry is None:
            raise ValueError("no blob registry configured")
        try:
            obj = await registry.dereference(url)
        except DereferenceError:
            raise
        except (OSError, LookupError, ValueError) as exc:
            raise DereferenceError(url, str(exc)) from exc
        if not isinstance(obj, BinaryObject):
            raise DereferenceError(url, "registry returned a non-binary value")
        self.fetched.append(url)
        return obj

    def _register(self, kind: TokenKind, obj: BinaryObject) -> str:
        token = make_token(kind, self._id_generator(obj))
        self.staged[token] = obj
        return token


async def extract_blobs(
    value: object,
    side_table: MutableMapping[str, BinaryObject],
    *,
    id_generator: IdGenerator | None = None,
    registry: BlobRegistry | None = None,
) -> object:
    """Replace binary objects (and registry URLs) in value with placeholder tokens.

    Removed objects land in side_table keyed by their full token. URL strings
    are only recognized when a registry is supplied; each one is dereferenced
    and released only once the whole walk has succeeded, so a failed walk
    leaves every URL in value registered and the side_table untouched.
    Strings already shaped like placeholder tokens are left as they are.
    """
    extractor = _Extractor(id_generator or content_hash_id, registry)
    result, _changed = await extractor.visit(value)
    side_table.update(extractor.staged)
    if registry is not None:
        for url in extractor.fetched:
            registry.release(url)
    return result


def extract_blobs_sync(
    value: object,
    side_table: MutableMapping[str, BinaryObject],
    *,
    id_generator: IdGenerator | None = None,
    registry: BlobRegistry | None = None,
) -> object:
    return asyncio.run(
        extract_blobs(value, side_table, id_generator=id_generator, registry=registry)
    )
