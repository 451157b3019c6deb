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

from dataclasses import dataclass
from enum import IntEnum

from ..core.bounds import KEY_LEN_BYTES, MAX_PAYLOAD_BYTES, PAYLOAD_LEN_BYTES, TYPE_BYTES
from ..core.errors import MalformedStreamError
from ..core.validation import encode_key, require_bytes_like
from .primitives import Buffer, read_bytes, read_u8, read_u32, write_bytes, write_u8, write_u32

HEADER_OVERHEAD = KEY_LEN_BYTES + TYPE_BYTES + PAYLOAD_LEN_BYTES


class EntryType(IntEnum):
    JSON = 0
    BINARY = 1


@dataclass(frozen=True)
class Entry:
    key: str
    entry_type: int
    payload: memoryview
    offset: int
    next_offset: int

    @property
    def known_type(self) -> EntryType | None:
        try:
            return EntryType(self.entry_type)
        except ValueError:
            return None


def encoded_entry_size(key_len: int, payload_len: int) -> int:
    return HEADER_OVERHEAD + key_len + payload_len


def encode_entry(key: str, entry_type: EntryType | int, payload: Buffer) -> bytes:
    key_bytes = encode_key(key)
    payload = require_bytes_like(payload, label="payload")
    if len(payload) > MAX_PAYLOAD_BYTES:
        raise ValueError(
            f"payload exceeds MAX_PAYLOAD_BYTES ({MAX_PAYLOAD_BYTES}): {len(payload)} bytes"
        )
    out = bytearray()
    write_u8(out, len(key_bytes))
    write_bytes(out, key_bytes)
    write_u8(out, int(entry_type))
    write_u32(out, len(payload))
    write_bytes(out, payload)
    return bytes(out)


def decode_entry(buf: Buffer, offset: int) -> Entry:
    start = offset
    key_len, offset = read_u8(buf, offset)
    key_raw, offset = read_bytes(buf, offset, key_len)
    try:
        key = bytes(key_raw).decode("utf-8", "strict")
    except UnicodeDecodeError as exc:
        raise MalformedStreamError("field key is not valid UTF-8", offset=start) from exc
    entry_type, offset = read_u8(buf, offset)
    payload_len, offset = read_u32(buf, offset)
    payload, offset = read_bytes(buf, offset, payload_len)
    return Entry(
        key=key,
        entry_type=entry_type,
        payload=payload,
        offset=start,
        next_offset=offset,
    )
