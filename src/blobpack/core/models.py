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

import mimetypes
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .bounds import DEFAULT_HASH_CHUNK_SIZE
from .validation import require_bytes_like, require_positive_int

MULTIPART_CONTENT_TYPE = "application/x-blobpack"


@dataclass(frozen=True)
class BinaryObject:
    data: bytes
    content_type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", require_bytes_like(self.data, label="binary object data"))
        if self.content_type is not None and not isinstance(self.content_type, str):
            raise ValueError("content_type must be a string")

    @property
    def size(self) -> int:
        return len(self.data)

    def chunks(self, chunk_size: int = DEFAULT_HASH_CHUNK_SIZE) -> Iterator[memoryview]:
        """Yield read-only views of the data in fixed-size pieces."""
        require_positive_int(chunk_size, label="chunk_size")
        view = memoryview(self.data)
        for start in range(0, len(view), chunk_size):
            yield view[start : start + chunk_size]

    @classmethod
    def from_path(cls, path: str | Path, *, content_type: str | None = None) -> "BinaryObject":
        path = Path(path)
        if content_type is None:
            content_type, _encoding = mimetypes.guess_type(path.name)
        return cls(path.read_bytes(), content_type=content_type)

    def __repr__(self) -> str:
        return f"BinaryObject(size={self.size}, content_type={self.content_type!r})"


class ValueKind(str, Enum):
    """Closed classification of the nodes a JSON-like tree may hold."""

    BINARY = "binary"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    SCALAR = "scalar"


def classify(value: object) -> ValueKind:
    if isinstance(value, BinaryObject):
        return ValueKind.BINARY
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.SCALAR


__all__ = [
    "BinaryObject",
    "MULTIPART_CONTENT_TYPE",
    "ValueKind",
    "classify",
]
