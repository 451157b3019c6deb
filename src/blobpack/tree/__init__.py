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

"""Placeholder substitution for binary objects inside JSON-like trees."""

from .extract import extract_blobs, extract_blobs_sync
from .ids import IdGenerator, content_hash_id, make_content_hasher, random_id
from .include import include_blobs
from .placeholders import Placeholder, TokenKind, is_token, make_token, parse_token
from .storage import INDEX_FILENAME, load_side_table, save_side_table

__all__ = [
    "INDEX_FILENAME",
    "IdGenerator",
    "Placeholder",
    "TokenKind",
    "content_hash_id",
    "extract_blobs",
    "extract_blobs_sync",
    "include_blobs",
    "is_token",
    "load_side_table",
    "make_content_hasher",
    "make_token",
    "parse_token",
    "random_id",
    "save_side_table",
]
