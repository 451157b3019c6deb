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

import unittest

from blobpack.core.bounds import MAX_KEY_BYTES
from blobpack.core.errors import KeyTooLongError, MalformedStreamError
from blobpack.encoding.entry import (
    HEADER_OVERHEAD,
    EntryType,
    decode_entry,
    encode_entry,
    encoded_entry_size,
)


class TestEntryCodec(unittest.TestCase):
    def test_layout_is_bit_exact(self) -> None:
        encoded = encode_entry("ab", EntryType.BINARY, b"\x00\x01\x02")
        self.assertEqual(
            encoded,
            b"\x02" + b"ab" + b"\x01" + b"\x03\x00\x00\x00" + b"\x00\x01\x02",
        )
        self.assertEqual(len(encoded), encoded_entry_size(2, 3))
        self.assertEqual(HEADER_OVERHEAD, 6)

    def test_roundtrip_utf8_key(self) -> None:
        key = "naïve-κλειδί"
        encoded = encode_entry(key, EntryType.JSON, b'"x"')
        entry = decode_entry(encoded, 0)
        self.assertEqual(entry.key, key)
        self.assertEqual(entry.known_type, EntryType.JSON)
        self.assertEqual(bytes(entry.payload), b'"x"')
        self.assertEqual(entry.offset, 0)
        self.assertEqual(entry.next_offset, len(encoded))

    def test_decode_at_offset(self) -> None:
        first = encode_entry("a", EntryType.JSON, b"1")
        second = encode_entry("b", EntryType.BINARY, b"\xff")
        buf = first + second
        entry = decode_entry(buf, len(first))
        self.assertEqual(entry.key, "b")
        self.assertEqual(entry.offset, len(first))
        self.assertEqual(entry.next_offset, len(buf))

    def test_empty_key_and_payload(self) -> None:
        encoded = encode_entry("", EntryType.BINARY, b"")
        self.assertEqual(encoded, b"\x00\x01\x00\x00\x00\x00")
        entry = decode_entry(encoded, 0)
        self.assertEqual(entry.key, "")
        self.assertEqual(bytes(entry.payload), b"")

    def test_key_length_limit(self) -> None:
        encode_entry("k" * MAX_KEY_BYTES, EntryType.JSON, b"0")
        with self.assertRaises(KeyTooLongError) as ctx:
            encode_entry("k" * (MAX_KEY_BYTES + 1), EntryType.JSON, b"0")
        self.assertEqual(ctx.exception.length, MAX_KEY_BYTES + 1)
        self.assertEqual(ctx.exception.limit, MAX_KEY_BYTES)

    def test_key_limit_counts_utf8_bytes(self) -> None:
        # Two bytes per character in UTF-8.
        with self.assertRaises(KeyTooLongError):
            encode_entry("é" * 128, EntryType.JSON, b"0")

    def test_unknown_type_tag_is_preserved(self) -> None:
        entry = decode_entry(encode_entry("x", 7, b""), 0)
        self.assertEqual(entry.entry_type, 7)
        self.assertIsNone(entry.known_type)

    def test_truncated_payload(self) -> None:
        encoded = encode_entry("key", EntryType.BINARY, b"12345")
        with self.assertRaises(MalformedStreamError):
            decode_entry(encoded[:-1], 0)

    def test_truncated_header(self) -> None:
        encoded = encode_entry("key", EntryType.BINARY, b"12345")
        for cut in range(1, HEADER_OVERHEAD + 3):
            with self.subTest(cut=cut):
                with self.assertRaises(MalformedStreamError):
                    decode_entry(encoded[:cut], 0)

    def test_invalid_utf8_key(self) -> None:
        raw = b"\x01\xff\x00\x00\x00\x00\x00"
        with self.assertRaises(MalformedStreamError):
            decode_entry(raw, 0)

    def test_non_string_key_rejected(self) -> None:
        with self.assertRaises(ValueError):
            encode_entry(b"key", EntryType.JSON, b"0")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
