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

from ..core.errors import MalformedStreamError
from ..core.validation import require_non_negative_int, require_uint

BYTE_ORDER = "little"
U8_LEN = 1
U32_LEN = 4
_MAX_U8 = 0xFF
_MAX_U32 = 0xFFFFFFFF

Buffer = bytes | bytearray | memoryview


def read_u8(buf: Buffer, offset: int) -> tuple[int, int]:
    end = _checked_end(buf, offset, U8_LEN, what="u8")
    return buf[offset], end


def read_u32(buf: Buffer, offset: int) -> tuple[int, int]:
    end = _checked_end(buf, offset, U32_LEN, what="u32")
    return int.from_bytes(buf[offset:end], BYTE_ORDER), end


def read_bytes(buf: Buffer, offset: int, length: int) -> tuple[memoryview, int]:
    require_non_negative_int(length, label="length")
    end = _checked_end(buf, offset, length, what=f"{length}-byte run")
    return memoryview(buf)[offset:end], end


def write_u8(sink: bytearray, value: int) -> None:
    sink.append(require_uint(value, max_val=_MAX_U8, label="u8 value"))


def write_u32(sink: bytearray, value: int) -> None:
    value = require_uint(value, max_val=_MAX_U32, label="u32 value")
    sink.extend(value.to_bytes(U32_LEN, BYTE_ORDER))


def write_bytes(sink: bytearray, data: Buffer) -> None:
    sink.extend(data)


def _checked_end(buf: Buffer, offset: int, length: int, *, what: str) -> int:
    if offset < 0:
        raise ValueError("offset must be non-negative")
    end = offset + length
    if end > len(buf):
        raise MalformedStreamError(f"truncated {what}", offset=offset)
    return end
