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

import tempfile
import unittest
from pathlib import Path

from blobpack.core.errors import (
    BlobpackError,
    DereferenceError,
    InvalidJsonFieldError,
    KeyTooLongError,
    MalformedStreamError,
    PlaceholderLookupError,
    SignatureMismatchError,
)
from blobpack.core.models import BinaryObject, ValueKind, classify
from blobpack.core.validation import encode_key, parse_hex


class TestBinaryObject(unittest.TestCase):
    def test_normalizes_bytes_like(self) -> None:
        for data in (b"abc", bytearray(b"abc"), memoryview(b"abc")):
            with self.subTest(kind=type(data).__name__):
                obj = BinaryObject(data)
                self.assertIsInstance(obj.data, bytes)
                self.assertEqual(obj.size, 3)

    def test_rejects_non_bytes(self) -> None:
        with self.assertRaises(ValueError):
            BinaryObject("text")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            BinaryObject(b"", content_type=5)  # type: ignore[arg-type]

    def test_chunks(self) -> None:
        obj = BinaryObject(b"abcdefg")
        self.assertEqual([bytes(chunk) for chunk in obj.chunks(3)], [b"abc", b"def", b"g"])
        self.assertEqual(list(BinaryObject(b"").chunks(3)), [])
        with self.assertRaises(ValueError):
            list(obj.chunks(0))

    def test_from_path_guesses_content_type(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "note.txt"
            path.write_bytes(b"hi")
            obj = BinaryObject.from_path(path)
        self.assertEqual(obj.data, b"hi")
        self.assertEqual(obj.content_type, "text/plain")

    def test_repr_hides_payload(self) -> None:
        self.assertEqual(repr(BinaryObject(b"secret")), "BinaryObject(size=6, content_type=None)")

    def test_classify(self) -> None:
        cases = (
            (BinaryObject(b""), ValueKind.BINARY),
            ("s", ValueKind.STRING),
            ([1], ValueKind.ARRAY),
            ((1,), ValueKind.ARRAY),
            ({"a": 1}, ValueKind.OBJECT),
            (None, ValueKind.SCALAR),
            (1.5, ValueKind.SCALAR),
            (b"raw", ValueKind.SCALAR),
        )
        for value, kind in cases:
            with self.subTest(value=value):
                self.assertIs(classify(value), kind)


class TestErrors(unittest.TestCase):
    def test_family(self) -> None:
        errors = (
            MalformedStreamError("truncated", offset=4),
            KeyTooLongError("k", 300, 255),
            InvalidJsonFieldError("k", "bad"),
            SignatureMismatchError("bad signature"),
            DereferenceError("blob:x"),
            PlaceholderLookupError("{blob:x}"),
        )
        for error in errors:
            with self.subTest(error=type(error).__name__):
                self.assertIsInstance(error, BlobpackError)
                self.assertIsInstance(error, ValueError)

    def test_messages(self) -> None:
        self.assertEqual(
            str(MalformedStreamError("truncated u8", offset=4)), "truncated u8 (offset 4)"
        )
        self.assertEqual(str(DereferenceError("blob:x")), "unable to dereference blob:x")
        self.assertEqual(
            str(DereferenceError("blob:x", "gone")), "unable to dereference blob:x: gone"
        )

    def test_encode_key_and_parse_hex(self) -> None:
        self.assertEqual(encode_key("ключ"), "ключ".encode("utf-8"))
        with self.assertRaises(ValueError):
            encode_key("\ud800")
        self.assertEqual(parse_hex(" 0a0b ", 2, label="x"), b"\x0a\x0b")
        for bad in ("0g", "0a", 5):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    parse_hex(bad, 2, label="x")


if __name__ == "__main__":
    unittest.main()
