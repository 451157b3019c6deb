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

import hashlib
import uuid
from collections.abc import Callable

from ..core.bounds import DEFAULT_HASH_CHUNK_SIZE
from ..core.models import BinaryObject
from ..core.validation import require_positive_int

IdGenerator = Callable[[BinaryObject], str]


def content_hash_id(obj: BinaryObject, *, chunk_size: int = DEFAULT_HASH_CHUNK_SIZE) -> str:
    """SHA-256 hex digest of the object's bytes.

    Chunks feed one running hash in order, so the digest equals
    ``sha256(obj.data)`` for every chunk size and byte-identical objects always
    map to the same id.
    """
    digest = hashlib.sha256()
    for chunk in obj.chunks(chunk_size):
        digest.update(chunk)
    return digest.hexdigest()


def make_content_hasher(chunk_size: int = DEFAULT_HASH_CHUNK_SIZE) -> IdGenerator:
    require_positive_int(chunk_size, label="chunk_size")

    def _hash(obj: BinaryObject) -> str:
        return content_hash_id(obj, chunk_size=chunk_size)

    return _hash


def random_id(obj: BinaryObject) -> str:
    """Fresh uuid4 id; no deduplication between identical objects."""
    _ = obj
    return uuid.uuid4().hex
