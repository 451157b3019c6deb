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

# Key length is stored in a single byte.
MAX_KEY_BYTES = 255

# Payload length is stored as an unsigned 32-bit integer.
MAX_PAYLOAD_BYTES = 0xFFFFFFFF

# Width of the fixed header fields around key and payload.
KEY_LEN_BYTES = 1
TYPE_BYTES = 1
PAYLOAD_LEN_BYTES = 4

# Chunk size used when hashing binary objects incrementally.
DEFAULT_HASH_CHUNK_SIZE = 65_536


__all__ = [
    "DEFAULT_HASH_CHUNK_SIZE",
    "KEY_LEN_BYTES",
    "MAX_KEY_BYTES",
    "MAX_PAYLOAD_BYTES",
    "PAYLOAD_LEN_BYTES",
    "TYPE_BYTES",
]
