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

"""Placeholder tokens left in a tree where binary objects used to be.

Grammar::

    token := "{blob:" id "}" | "{blobUrl:" id "}"
    id    := one or more printable characters, none of them "}"

``blob`` marks an object that was embedded in the tree; ``blobUrl`` marks one
that arrived as an ephemeral URL and must be handed back as a fresh URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    INLINE = "blob"
    URL = "blobUrl"


@dataclass(frozen=True)
class Placeholder:
    kind: TokenKind
    id: str

    @property
    def token(self) -> str:
        return make_token(self.kind, self.id)


def make_token(kind: TokenKind, token_id: str) -> str:
    _validate_id(token_id)
    return f"{{{kind.value}:{token_id}}}"


def parse_token(value: object) -> Placeholder | None:
    """Return the parsed placeholder, or None when value is not a token."""
    if not isinstance(value, str) or not value.startswith("{") or not value.endswith("}"):
        return None
    body = value[1:-1]
    prefix, sep, token_id = body.partition(":")
    if not sep:
        return None
    try:
        kind = TokenKind(prefix)
    except ValueError:
        return None
    try:
        _validate_id(token_id)
    except ValueError:
        return None
    return Placeholder(kind=kind, id=token_id)


def is_token(value: object) -> bool:
    return parse_token(value) is not None


def _validate_id(token_id: str) -> None:
    if not isinstance(token_id, str) or not token_id:
        raise ValueError("placeholder id must be a non-empty string")
    if "}" in token_id:
        raise ValueError("placeholder id must not contain '}'")
    if not token_id.isprintable():
        raise ValueError("placeholder id must be printable")
