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

from blobpack.core.errors import SignatureMismatchError
from blobpack.core.models import BinaryObject
from blobpack.crypto.signing import (
    ED25519_PUB_LEN,
    ED25519_SEED_LEN,
    ED25519_SIG_LEN,
    SIGNATURE_DOMAIN,
    SIGNATURE_FIELD,
    Ed25519PayloadSigner,
    Ed25519PayloadVerifier,
    generate_signing_keypair,
    public_key_from_seed,
    signed_message,
)
from blobpack.encoding.cbor import dumps_canonical
from blobpack.formats.multipart import MultipartBuilder, decode_multipart


class TestSigning(unittest.TestCase):
    def setUp(self) -> None:
        self.seed, self.public = generate_signing_keypair()

    def test_keypair_lengths(self) -> None:
        self.assertEqual(len(self.seed), ED25519_SEED_LEN)
        self.assertEqual(len(self.public), ED25519_PUB_LEN)
        self.assertEqual(public_key_from_seed(self.seed), self.public)

    def test_signed_message_excludes_signature_field(self) -> None:
        payload = {"b": 1, "a": "x", SIGNATURE_FIELD: "00"}
        message = signed_message(payload)
        self.assertTrue(message.startswith(SIGNATURE_DOMAIN))
        self.assertEqual(message, SIGNATURE_DOMAIN + dumps_canonical({"a": "x", "b": 1}))

    def test_signed_message_ignores_key_order(self) -> None:
        self.assertEqual(signed_message({"a": 1, "b": 2}), signed_message({"b": 2, "a": 1}))

    def test_sign_and_verify(self) -> None:
        payload: dict[str, object] = {"name": "doc1", "tags": ["a", "b"]}
        signature = Ed25519PayloadSigner().sign(payload, self.seed)
        self.assertEqual(len(bytes.fromhex(signature)), ED25519_SIG_LEN)
        payload[SIGNATURE_FIELD] = signature
        verifier = Ed25519PayloadVerifier()
        self.assertTrue(verifier.verify(payload, self.public))
        self.assertFalse(verifier.verify({**payload, "name": "doc2"}, self.public))

    def test_verify_rejects_missing_or_malformed_signature(self) -> None:
        verifier = Ed25519PayloadVerifier()
        for signature in (None, "zz", "00" * 10, 42):
            with self.subTest(signature=signature):
                payload = {"name": "doc1", SIGNATURE_FIELD: signature}
                self.assertFalse(verifier.verify(payload, self.public))

    def test_verify_rejects_bad_public_key(self) -> None:
        payload: dict[str, object] = {"name": "doc1"}
        payload[SIGNATURE_FIELD] = Ed25519PayloadSigner().sign(payload, self.seed)
        self.assertFalse(Ed25519PayloadVerifier().verify(payload, b"\x00" * 5))

    def test_sign_rejects_bad_seed_length(self) -> None:
        with self.assertRaises(ValueError):
            Ed25519PayloadSigner().sign({"a": 1}, b"\x01" * 5)


class TestSignedMultipart(unittest.TestCase):
    def setUp(self) -> None:
        self.seed, self.public = generate_signing_keypair()

    def _signed(self) -> BinaryObject:
        return (
            MultipartBuilder()
            .add_json("name", "doc1")
            .add_json("meta", {"pages": 2, "ratio": 1.5})
            .add_binary("data", b"\x01\x02")
            .sign(self.seed)
            .build()
        )

    def test_verifies_with_matching_key(self) -> None:
        decoded = decode_multipart(self._signed(), secret=self.public)
        self.assertEqual(decoded.fields["name"], "doc1")
        self.assertIn(SIGNATURE_FIELD, decoded.fields)

    def test_wrong_key_raises(self) -> None:
        _seed, other_public = generate_signing_keypair()
        with self.assertRaises(SignatureMismatchError):
            decode_multipart(self._signed(), secret=other_public)

    def test_tampered_json_raises(self) -> None:
        tampered = self._signed().data.replace(b'"doc1"', b'"doc2"')
        with self.assertRaises(SignatureMismatchError):
            decode_multipart(tampered, secret=self.public)

    def test_unsigned_stream_fails_verification(self) -> None:
        packed = MultipartBuilder.with_json("name", "doc1").build()
        with self.assertRaises(SignatureMismatchError):
            decode_multipart(packed, secret=self.public)

    def test_verification_skipped_without_secret(self) -> None:
        tampered = self._signed().data.replace(b'"doc1"', b'"doc2"')
        self.assertEqual(decode_multipart(tampered).fields["name"], "doc2")

    def test_custom_verifier_is_used(self) -> None:
        class _Reject:
            def verify(self, payload: object, secret: bytes) -> bool:
                return False

        with self.assertRaises(SignatureMismatchError):
            decode_multipart(self._signed(), secret=b"any", verifier=_Reject())

    def test_cannot_add_json_after_signing(self) -> None:
        builder = MultipartBuilder().add_json("a", 1).sign(self.seed)
        with self.assertRaises(ValueError):
            builder.add_json("b", 2)
        with self.assertRaises(ValueError):
            builder.sign(self.seed)
        builder.add_binary("late", b"ok")


if __name__ == "__main__":
    unittest.main()
