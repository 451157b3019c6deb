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

"""Typed errors raised by the codec and the tree walkers."""

from __future__ import annotations


class BlobpackError(ValueError):
    """Base class for every blobpack failure."""


class MalformedStreamError(BlobpackError):
    """Entry framing runs past the end of the buffer."""

    def __init__(self, message: str, *, offset: int) -> None:
        self.offset = offset
        super().__init__(f"{message} (offset {offset})")


class KeyTooLongError(BlobpackError):
    """Field key does not fit in the one-byte length prefix."""

    def __init__(self, key: str, length: int, limit: int) -> None:
        self.key = key
        self.length = length
        self.limit = limit
        super().__init__(f"field key exceeds {limit} bytes: {length} bytes")


class InvalidJsonFieldError(BlobpackError):
    """One JSON field payload could not be parsed."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"invalid JSON field {key!r}: {reason}")


class SignatureMismatchError(BlobpackError):
    """Signature over the JSON fields did not verify."""


class DereferenceError(BlobpackError):
    """An ephemeral binary-object URL could not be fetched."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        detail = f": {reason}" if reason else ""
        super().__init__(f"unable to dereference {url}{detail}")


class PlaceholderLookupError(BlobpackError, LookupError):
    """A placeholder token has no entry in the side-table."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"placeholder not found in side-table: {token}")


__all__ = [
    "BlobpackError",
    "DereferenceError",
    "InvalidJsonFieldError",
    "KeyTooLongError",
    "MalformedStreamError",
    "PlaceholderLookupError",
    "SignatureMismatchError",
]
