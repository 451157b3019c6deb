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

import uuid
from typing import Protocol, runtime_checkable

from ..core.errors import DereferenceError
from ..core.models import BinaryObject

DEFAULT_URL_SCHEME = "blob:"


@runtime_checkable
class BlobRegistry(Protocol):
    """Host registry of ephemeral URLs that reference in-memory binary objects."""

    scheme: str

    def create_url(self, obj: BinaryObject) -> str:
        """Mint a new URL referencing obj."""
        ...

    async def dereference(self, url: str) -> BinaryObject:
        """Fetch the object behind url; raise DereferenceError on failure."""
        ...

    def release(self, url: str) -> None:
        """Revoke url. Releasing an unknown URL is a no-op."""
        ...


class InMemoryBlobRegistry:
    """Dict-backed registry for tests, the CLI and single-process hosts."""

    def __init__(self, *, scheme: str = DEFAULT_URL_SCHEME) -> None:
        if not scheme:
            raise ValueError("scheme must be a non-empty string")
        self.scheme = scheme
        self._objects: dict[str, BinaryObject] = {}

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, url: object) -> bool:
        return url in self._objects

    def create_url(self, obj: BinaryObject) -> str:
        if not isinstance(obj, BinaryObject):
            raise ValueError("registry only holds BinaryObject values")
        url = f"{self.scheme}{uuid.uuid4().hex}"
        self._objects[url] = obj
        return url

    async def dereference(self, url: str) -> BinaryObject:
        obj = self._objects.get(url)
        if obj is None:
            raise DereferenceError(url, "URL is not registered or was released")
        return obj

    def release(self, url: str) -> None:
        self._objects.pop(url, None)
