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

"""Pack named JSON and binary fields into one tagged multipart byte stream."""

from .core.errors import (
    BlobpackError,
    DereferenceError,
    InvalidJsonFieldError,
    KeyTooLongError,
    MalformedStreamError,
    PlaceholderLookupError,
    SignatureMismatchError,
)
from .core.models import BinaryObject
from .encoding.entry import EntryType
from .formats import (
    DecodedMultipart,
    FieldError,
    MultipartBuilder,
    decode_fields,
    decode_multipart,
    encode_multipart,
)
from .registry import BlobRegistry, InMemoryBlobRegistry
from .tree import (
    content_hash_id,
    extract_blobs,
    extract_blobs_sync,
    include_blobs,
    random_id,
)

__all__ = [
    "BinaryObject",
    "BlobRegistry",
    "BlobpackError",
    "DecodedMultipart",
    "DereferenceError",
    "EntryType",
    "FieldError",
    "InMemoryBlobRegistry",
    "InvalidJsonFieldError",
    "KeyTooLongError",
    "MalformedStreamError",
    "MultipartBuilder",
    "PlaceholderLookupError",
    "SignatureMismatchError",
    "content_hash_id",
    "decode_fields",
    "decode_multipart",
    "encode_multipart",
    "extract_blobs",
    "extract_blobs_sync",
    "include_blobs",
    "random_id",
]
