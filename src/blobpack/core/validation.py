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

from .bounds import MAX_KEY_BYTES
from .errors import KeyTooLongError


def encode_key(key: object, *, label: str = "field key") -> bytes:
    """Encode a field key to UTF-8 and enforce the one-byte length prefix."""
    if not isinstance(key, str):
        raise ValueError(f"{label} must be a string")
    try:
        raw = key.encode("utf-8", "strict")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{label} must be valid UTF-8") from exc
    if len(raw) > MAX_KEY_BYTES:
        raise KeyTooLongError(key, len(raw), MAX_KEY_BYTES)
    return raw


def require_uint(value: object, *, max_val: int, label: str) -> int:
    """Validate that value is an int within [0, max_val]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an int")
    if value < 0 or value > max_val:
        raise ValueError(f"{label} must be between 0 and {max_val}")
    return value


def require_non_negative_int(value: object, *, label: str) -> int:
    """Validate that value is a non-negative integer (>= 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{label} must be a non-negative int")
    return value


def require_positive_int(value: object, *, label: str) -> int:
    """Validate that value is a positive integer (> 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{label} must be a positive int")
    return value


def require_length(value: bytes, length: int, *, label: str, prefix: str = "") -> None:
    """Validate that bytes value has exact length."""
    if len(value) != length:
        raise ValueError(f"{prefix}{label} must be {length} bytes")


def require_bytes_like(value: object, *, label: str) -> bytes:
    """Copy a bytes-like value into immutable bytes."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise ValueError(f"{label} must be bytes")


def parse_hex(value: object, length: int, *, label: str) -> bytes:
    """Decode a hex string and validate its decoded length."""
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a hex string")
    try:
        raw = bytes.fromhex(value.strip())
    except ValueError as exc:
        raise ValueError(f"{label} must be a hex string") from exc
    require_length(raw, length, label=label)
    return raw
