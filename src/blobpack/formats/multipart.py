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

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from ..core.errors import InvalidJsonFieldError, SignatureMismatchError
from ..core.log import warn
from ..core.models import MULTIPART_CONTENT_TYPE, BinaryObject
from ..core.validation import require_bytes_like
from ..crypto.signing import (
    SIGNATURE_FIELD,
    Ed25519PayloadSigner,
    Ed25519PayloadVerifier,
    PayloadSigner,
    PayloadVerifier,
)
from ..encoding.entry import Entry, EntryType, decode_entry, encode_entry
from ..encoding.primitives import Buffer


class MultipartBuilder:
    """Accumulate named fields and materialize them as one multipart object."""

    def __init__(self) -> None:
        self._entries: list[bytes] = []
        self._types: dict[str, EntryType] = {}
        self._json_fields: dict[str, object] = {}
        self._signed = False

    @classmethod
    def with_json(cls, key: str, value: object) -> "MultipartBuilder":
        return cls().add_json(key, value)

    @classmethod
    def with_binary(cls, key: str, obj: BinaryObject | Buffer) -> "MultipartBuilder":
        return cls().add_binary(key, obj)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._types)

    def add_json(self, key: str, value: object) -> "MultipartBuilder":
        if self._signed:
            raise ValueError("builder is signed; JSON fields can no longer be added")
        self._claim_key(key)
        try:
            text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
            payload = text.encode("utf-8")
        except (TypeError, ValueError, RecursionError) as exc:
            raise ValueError(f"field {key!r} is not JSON-serializable: {exc}") from exc
        self._entries.append(encode_entry(key, EntryType.JSON, payload))
        self._types[key] = EntryType.JSON
        # Sign what the decoder will see, not the caller's Python objects.
        self._json_fields[key] = json.loads(text)
        return self

    def add_binary(self, key: str, obj: BinaryObject | Buffer) -> "MultipartBuilder":
        self._claim_key(key)
        data = obj.data if isinstance(obj, BinaryObject) else require_bytes_like(obj, label=key)
        self._entries.append(encode_entry(key, EntryType.BINARY, data))
        self._types[key] = EntryType.BINARY
        return self

    def add_fields(self, fields: Mapping[str, object]) -> "MultipartBuilder":
        for key, value in fields.items():
            if isinstance(value, (BinaryObject, bytes, bytearray, memoryview)):
                self.add_binary(key, value)
            else:
                self.add_json(key, value)
        return self

    def sign(self, sign_priv: bytes, *, signer: PayloadSigner | None = None) -> "MultipartBuilder":
        """Append a signature covering every JSON field added so far."""
        if self._signed:
            raise ValueError("builder is already signed")
        signer = signer or Ed25519PayloadSigner()
        signature = signer.sign(self._json_fields, sign_priv)
        self.add_json(SIGNATURE_FIELD, signature)
        self._signed = True
        return self

    def build(self) -> BinaryObject:
        return BinaryObject(b"".join(self._entries), content_type=MULTIPART_CONTENT_TYPE)

    def _claim_key(self, key: str) -> None:
        if key in self._types:
            raise ValueError(f"duplicate field key: {key!r}")


@dataclass(frozen=True)
class FieldError:
    key: str
    offset: int
    reason: str

    def to_exception(self) -> InvalidJsonFieldError:
        return InvalidJsonFieldError(self.key, self.reason)


@dataclass(frozen=True)
class DecodedMultipart:
    fields: dict[str, object] = field(default_factory=dict)
    errors: tuple[FieldError, ...] = ()

    @property
    def json_fields(self) -> dict[str, object]:
        return {
            key: value for key, value in self.fields.items() if not isinstance(value, BinaryObject)
        }

    @property
    def binary_fields(self) -> dict[str, BinaryObject]:
        return {
            key: value for key, value in self.fields.items() if isinstance(value, BinaryObject)
        }


def encode_multipart(fields: Mapping[str, object]) -> BinaryObject:
    return MultipartBuilder().add_fields(fields).build()


def iter_entries(data: BinaryObject | Buffer) -> Iterator[Entry]:
    """Yield raw entries; raises MalformedStreamError on truncated framing."""
    buf = data.data if isinstance(data, BinaryObject) else data
    offset = 0
    while offset < len(buf):
        entry = decode_entry(buf, offset)
        yield entry
        offset = entry.next_offset


def decode_multipart(
    data: BinaryObject | Buffer,
    *,
    secret: bytes | None = None,
    verifier: PayloadVerifier | None = None,
    quiet: bool = False,
) -> DecodedMultipart:
    # Framing is validated for the whole stream before any field is interpreted.
    entries = list(iter_entries(data))
    fields: dict[str, object] = {}
    errors: list[FieldError] = []
    for entry in entries:
        if entry.key in fields:
            warn(f"duplicate field {entry.key!r}; keeping the last value", quiet=quiet)
            del fields[entry.key]
        kind = entry.known_type
        if kind is EntryType.JSON:
            try:
                fields[entry.key] = _loads_json(entry.payload)
            except (ValueError, RecursionError) as exc:
                errors.append(FieldError(key=entry.key, offset=entry.offset, reason=str(exc)))
                warn(f"skipping field {entry.key!r}: invalid JSON payload ({exc})", quiet=quiet)
        elif kind is EntryType.BINARY:
            fields[entry.key] = BinaryObject(bytes(entry.payload))
        else:
            reason = f"unknown entry type {entry.entry_type}"
            errors.append(FieldError(key=entry.key, offset=entry.offset, reason=reason))
            warn(f"skipping field {entry.key!r}: {reason}", quiet=quiet)

    decoded = DecodedMultipart(fields=fields, errors=tuple(errors))
    if secret is not None:
        verifier = verifier or Ed25519PayloadVerifier()
        if not verifier.verify(decoded.json_fields, secret):
            raise SignatureMismatchError("multipart signature verification failed")
    return decoded


def _loads_json(payload: memoryview) -> object:
    # NaN and Infinity are rejected to match the encoder.
    return json.loads(bytes(payload).decode("utf-8"), parse_constant=_reject_constant)


def _reject_constant(name: str) -> object:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_fields(
    data: BinaryObject | Buffer,
    *,
    secret: bytes | None = None,
    verifier: PayloadVerifier | None = None,
    quiet: bool = False,
) -> dict[str, object]:
    return decode_multipart(data, secret=secret, verifier=verifier, quiet=quiet).fields
