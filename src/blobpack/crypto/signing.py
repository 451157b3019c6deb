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

from collections.abc import Mapping
from typing import Any, Protocol, cast

from Crypto.PublicKey import ECC
from Crypto.Signature import eddsa

from ..core.validation import parse_hex, require_length
from ..encoding.cbor import dumps_canonical

SIGNATURE_DOMAIN = b"BLOBPACK-SIG-V1"
SIGNATURE_FIELD = "$signature"

ED25519_PUB_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")
ED25519_PUB_LEN = 32
ED25519_SEED_LEN = 32
ED25519_SIG_LEN = 64


class PayloadSigner(Protocol):
    def sign(self, payload: Mapping[str, object], secret: bytes) -> str:
        """Return the signature text stored under SIGNATURE_FIELD."""
        ...


class PayloadVerifier(Protocol):
    def verify(self, payload: Mapping[str, object], secret: bytes) -> bool:
        """Check the SIGNATURE_FIELD of a JSON-only mapping."""
        ...


class Ed25519PayloadSigner:
    def sign(self, payload: Mapping[str, object], secret: bytes) -> str:
        message = signed_message(payload)
        return _sign_message(message, sign_priv=secret).hex()


class Ed25519PayloadVerifier:
    def verify(self, payload: Mapping[str, object], secret: bytes) -> bool:
        try:
            signature = parse_hex(payload.get(SIGNATURE_FIELD), ED25519_SIG_LEN, label="signature")
            message = signed_message(payload)
        except ValueError:
            return False
        return _verify_message(message, sign_pub=secret, signature=signature)


def generate_signing_keypair() -> tuple[bytes, bytes]:
    key = ECC.generate(curve="Ed25519")
    seed = cast(bytes | None, getattr(key, "seed", None))
    if seed is None:
        raise ValueError("missing Ed25519 seed")
    return seed, key.public_key().export_key(format="raw")


def public_key_from_seed(seed: bytes) -> bytes:
    return _key_from_seed(seed).public_key().export_key(format="raw")


def signed_message(payload: Mapping[str, object]) -> bytes:
    """Domain-separated canonical CBOR of every field except the signature."""
    unsigned = {key: value for key, value in payload.items() if key != SIGNATURE_FIELD}
    return SIGNATURE_DOMAIN + dumps_canonical(unsigned)


def _key_from_seed(seed: bytes) -> ECC.EccKey:
    require_length(seed, ED25519_SEED_LEN, label="sign_priv")
    return ECC.construct(curve="Ed25519", seed=cast(Any, seed))


def _key_from_public_bytes(sign_pub: bytes) -> ECC.EccKey:
    require_length(sign_pub, ED25519_PUB_LEN, label="sign_pub")
    return ECC.import_key(ED25519_PUB_DER_PREFIX + sign_pub)


def _sign_message(message: bytes, *, sign_priv: bytes) -> bytes:
    """Sign a message with Ed25519 private key."""
    key = _key_from_seed(sign_priv)
    signer = eddsa.new(key, mode="rfc8032")
    return signer.sign(message)


def _verify_message(message: bytes, *, sign_pub: bytes, signature: bytes) -> bool:
    """Verify an Ed25519 signature. Returns False on any error."""
    try:
        key = _key_from_public_bytes(sign_pub)
        verifier = eddsa.new(key, mode="rfc8032")
        verifier.verify(message, signature)
    except (ValueError, TypeError):
        return False
    return True
